"""Tests for the active location's weather cell."""

from __future__ import annotations

import asyncio

import pytest

from location_service.cache import CACHE_TTL_MS, ActiveLocation, CellState, WeatherCell
from location_service.exceptions import UpstreamConnectionError, UpstreamResponseError, WeatherUnavailableError
from location_service.models.location import SavedLocation
from tests.conftest import FakeUpstream


@pytest.fixture
def london(upstream, clock) -> ActiveLocation:
    return ActiveLocation.from_saved(SavedLocation.default(), upstream, clock)


class TestWeatherCell:
    def test_ttl_is_one_hour(self) -> None:
        assert CACHE_TTL_MS == 3_600_000

    def test_empty(self) -> None:
        assert WeatherCell().state(1_000) is CellState.EMPTY

    def test_fresh(self, sample_weather) -> None:
        cell = WeatherCell(observed_at_ms=10_000_000, observation=sample_weather)
        assert cell.state(10_000_000 + CACHE_TTL_MS - 1) is CellState.FRESH

    def test_stale_at_exactly_ttl(self, sample_weather) -> None:
        cell = WeatherCell(observed_at_ms=10_000_000, observation=sample_weather)
        assert cell.state(10_000_000 + CACHE_TTL_MS) is CellState.STALE

    def test_broken(self) -> None:
        assert WeatherCell(observed_at_ms=10_000_000).state(10_000_001) is CellState.BROKEN


class TestGetWeather:
    @pytest.mark.asyncio
    async def test_first_call_fetches(self, london, upstream, sample_weather) -> None:
        weather = await london.get_weather("tok")
        assert weather == sample_weather
        assert upstream.calls == [("tok", 51.510803, -0.120703)]

    @pytest.mark.asyncio
    async def test_cache_hit_within_ttl(self, london, upstream, clock) -> None:
        await london.get_weather("tok")
        clock.advance(CACHE_TTL_MS - 1)
        await london.get_weather("tok")
        assert len(upstream.calls) == 1

    @pytest.mark.asyncio
    async def test_cache_expiry(self, london, upstream, clock) -> None:
        await london.get_weather("tok")
        clock.advance(3_600_001)
        await london.get_weather("tok")
        assert len(upstream.calls) == 2

    @pytest.mark.asyncio
    async def test_stores_timestamp_taken_after_fetch(self, clock, sample_weather) -> None:
        class SlowUpstream(FakeUpstream):
            async def forecast(self, api_token, latitude, longitude):
                clock.advance(250)
                return await super().forecast(api_token, latitude, longitude)

        start = clock.now
        active = ActiveLocation("London", (51.510803, -0.120703), SlowUpstream(), clock)
        await active.get_weather("tok")
        assert active.cell == WeatherCell(observed_at_ms=start + 250, observation=sample_weather)

    @pytest.mark.asyncio
    async def test_upstream_failure_is_opaque(self, clock) -> None:
        failing = FakeUpstream(error=UpstreamResponseError("failed to parse body"))
        active = ActiveLocation.from_saved(SavedLocation.default(), failing, clock)
        with pytest.raises(WeatherUnavailableError) as exc_info:
            await active.get_weather("tok")
        assert str(exc_info.value) == "internal"
        assert isinstance(exc_info.value.__cause__, UpstreamResponseError)
        assert active.cell == WeatherCell()

    @pytest.mark.asyncio
    async def test_failed_refresh_keeps_stale_cell(self, london, upstream, clock) -> None:
        await london.get_weather("tok")
        before = london.cell
        clock.advance(CACHE_TTL_MS)
        upstream.error = UpstreamConnectionError("down")
        with pytest.raises(WeatherUnavailableError):
            await london.get_weather("tok")
        assert london.cell == before
        assert london.cell.state(clock.now) is CellState.STALE

    @pytest.mark.asyncio
    async def test_broken_cell_self_heals(self, london, upstream, clock) -> None:
        london._cell = WeatherCell(observed_at_ms=clock.now, observation=None)

        with pytest.raises(WeatherUnavailableError):
            await london.get_weather("tok")
        assert upstream.calls == []
        assert london.cell == WeatherCell()

        await london.get_weather("tok")
        assert len(upstream.calls) == 1
        assert london.cell.state(clock.now) is CellState.FRESH

    @pytest.mark.asyncio
    async def test_broken_reset_keeps_concurrent_store(self, london, clock, sample_weather) -> None:
        london._cell = WeatherCell(observed_at_ms=clock.now, observation=None)
        fresh = WeatherCell(observed_at_ms=clock.now, observation=sample_weather)

        async with london._cell_lock.read():
            task = asyncio.create_task(london.get_weather("tok"))
            for _ in range(5):
                await asyncio.sleep(0)
            # the task has seen the broken record and is queued for the write lock
            assert not task.done()
            london._cell = fresh

        with pytest.raises(WeatherUnavailableError):
            await task
        assert london.cell is fresh


class TestConcurrentReads:
    @pytest.mark.asyncio
    async def test_cancelled_fetch_leaves_cell_untouched(self, clock, sample_weather) -> None:
        entered = asyncio.Event()

        class HangingUpstream(FakeUpstream):
            async def forecast(self, api_token, latitude, longitude):
                self.calls.append((api_token, latitude, longitude))
                entered.set()
                await asyncio.Event().wait()

        active = ActiveLocation.from_saved(SavedLocation.default(), HangingUpstream(), clock)
        task = asyncio.create_task(active.get_weather("tok"))
        await entered.wait()
        task.cancel()
        results = await asyncio.gather(task, return_exceptions=True)

        assert isinstance(results[0], asyncio.CancelledError)
        assert active.cell == WeatherCell()
        assert active._cell_lock.readers == 0
        assert not active._cell_lock.write_locked

        active._upstream = FakeUpstream()
        assert await active.get_weather("tok") == sample_weather
        assert active.cell.state(clock.now) is CellState.FRESH

    @pytest.mark.asyncio
    async def test_simultaneous_misses_each_fetch(self, clock) -> None:
        class GatedUpstream(FakeUpstream):
            def __init__(self) -> None:
                super().__init__()
                self.both_in = asyncio.Event()
                self.returned = []

            async def forecast(self, api_token, latitude, longitude):
                self.calls.append((api_token, latitude, longitude))
                n = len(self.calls)
                if n == 2:
                    self.both_in.set()
                await self.both_in.wait()
                weather = self.weather.model_copy(update={"timezone": f"call-{n}"})
                self.returned.append(weather)
                return weather

        upstream = GatedUpstream()
        active = ActiveLocation.from_saved(SavedLocation.default(), upstream, clock)
        first, second = await asyncio.gather(active.get_weather("tok"), active.get_weather("tok"))

        assert len(upstream.calls) == 2
        assert {first.timezone, second.timezone} == {"call-1", "call-2"}
        # last writer wins; the cell holds one of the two observations whole
        assert active.cell.observation in upstream.returned
        assert active.cell.observation == upstream.returned[-1]
