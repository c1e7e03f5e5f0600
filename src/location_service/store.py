"""Persistence of the operator-chosen location to a single JSON file."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from location_service.exceptions import LocationFileError
from location_service.models.location import SavedLocation

SETTING_PATH_ENV = "SETTING_PATH"
DEFAULT_SETTING_PATH = "location.json"

logger = logging.getLogger(__name__)


def setting_path() -> Path:
    """Resolve the settings file from the environment.

    Read on every call so a changed ``SETTING_PATH`` retargets later loads and saves.
    """
    return Path(os.environ.get(SETTING_PATH_ENV, DEFAULT_SETTING_PATH))


class LocationStore:
    """Loads and saves the single SavedLocation."""

    def load(self) -> SavedLocation:
        """Return the saved location, healing a missing or corrupt file with the default.

        Raises:
            LocationFileError: the file exists but could not be read.
        """
        path = setting_path()
        if not path.exists():
            logger.info("location file %s not found, defaulting to London", path)
            location = SavedLocation.default()
            self._save_quietly(location)
            return location

        try:
            raw = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Failed to read location file %s: %s", path, exc)
            raise LocationFileError(f"failed to read {path}: {exc}") from exc

        try:
            location = SavedLocation.model_validate_json(raw)
        except ValidationError as exc:
            logger.error("Failed to parse location file %s, writing default: %s", path, exc)
            location = SavedLocation.default()
            self._save_quietly(location)
            return location

        logger.info("Loaded location from file: %r", location)
        return location

    def save(self, location: SavedLocation) -> None:
        """Replace the whole file with ``location``.

        The JSON goes to a temporary file in the same directory first and is
        moved over the target, so a crash never leaves a half-written file.

        Raises:
            LocationFileError: the file could not be written.
        """
        path = setting_path()
        try:
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(location.to_json())
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise LocationFileError(f"failed to write {path}: {exc}") from exc

    def _save_quietly(self, location: SavedLocation) -> None:
        try:
            self.save(location)
        except LocationFileError as exc:
            logger.error("Failed to write default location file: %s", exc)
