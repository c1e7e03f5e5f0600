"""Logging setup and upstream call logging for the location service."""

from __future__ import annotations

import functools
import logging
import time
from typing import Any, Awaitable, Callable, TypeVar

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])

LOGGER_NAME = "location_service"
_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_DEV_FORMAT = "%(levelname)s | %(name)s | %(message)s"

_upstream_logger = logging.getLogger(f"{LOGGER_NAME}.upstream")


def configure_logging(env: str = "production", level: str = "DEBUG") -> logging.Logger:
    """Attach a stream handler to the package logger.

    ``ENV=development`` drops the timestamp and logs at INFO; any other
    environment logs at ``level``.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if env == "development":
        fmt, resolved = _DEV_FORMAT, logging.INFO
    else:
        fmt = _FORMAT
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level!r}")

    logger.setLevel(resolved)
    logger.propagate = False
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)
    return logger


def log_upstream_call(fn: F) -> F:
    """Decorator that logs async upstream fetches with their elapsed time.

    The first positional argument after ``self`` is treated as a credential and
    never written to the log.
    """

    @functools.wraps(fn)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        arg_parts = [repr(a) for a in args[2:]]
        arg_parts += [f"{k}={v!r}" for k, v in kwargs.items() if k != "api_token"]
        arg_str = ", ".join(arg_parts)
        _upstream_logger.info("CALL: %s(%s)", fn.__qualname__, arg_str)

        start = time.monotonic()
        try:
            result = await fn(*args, **kwargs)
        except Exception as exc:
            elapsed = time.monotonic() - start
            _upstream_logger.error(
                "FAIL: %s(%s) -> %s: %s (%.3fs)",
                fn.__qualname__, arg_str, type(exc).__name__, exc, elapsed,
            )
            raise
        elapsed = time.monotonic() - start
        _upstream_logger.info("OK: %s(%s) (%.3fs)", fn.__qualname__, arg_str, elapsed)
        return result

    return wrapper  # type: ignore[return-value]
