from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

import pytest

from teslaclimate.cache import ClimateLookup, ClimateStateCache
from teslaclimate.exceptions import ClimateUnavailableError, TeslaError, TeslaTransportError
from teslaclimate.models.climate import ClimateState


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@dataclass
class FakeClimateApi:
    states: dict[str, ClimateState | None] = field(default_factory=dict)
    errors: dict[str, Exception] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)
    gate: asyncio.Event | None = None
    started: asyncio.Event = field(default_factory=asyncio.Event)

    async def get_climate_state(self, vehicle_id: str) -> ClimateState | None:
        self.calls.append(vehicle_id)
        self.started.set()
        if self.gate is not None:
            await self.gate.wait()
        if vehicle_id in self.errors:
            raise self.errors[vehicle_id]
        return self.states.get(vehicle_id)


def _state(on: bool = False, inside: float | None = 18.0, setting: float = 21.0) -> ClimateState:
    return ClimateState.model_validate(
        {"is_climate_on": on, "inside_temp": inside, "driver_temp_setting": setting}
    )


@pytest.mark.asyncio
async def test_concurrent_reads_share_one_upstream_fetch() -> None:
    api = FakeClimateApi(states={"V1": _state()}, gate=asyncio.Event())
    cache = ClimateStateCache(api)

    first = asyncio.create_task(cache.get_climate_state("V1"))
    second = asyncio.create_task(cache.get_climate_state("V1"))
    await api.started.wait()
    # Arrives while the fetch is still in flight.
    third = asyncio.create_task(cache.get_climate_state("V1"))
    await asyncio.sleep(0)

    api.gate.set()
    results = await asyncio.gather(first, second, third)

    assert api.calls == ["V1"]
    assert all(r.state is results[0].state for r in results)
    assert results[0].state is not None
    assert results[0].state.driver_temp_setting == 21.0


@pytest.mark.asyncio
async def test_fresh_entry_served_without_upstream_call() -> None:
    clock = FakeClock()
    api = FakeClimateApi(states={"V1": _state()})
    cache = ClimateStateCache(api, clock=clock)

    first = await cache.get_climate_state("V1")
    clock.advance(29.9)
    second = await cache.get_climate_state("V1")

    assert api.calls == ["V1"]
    assert first.cached is False
    assert second.cached is True
    assert second.state is first.state
    assert "V1" in cache


@pytest.mark.asyncio
async def test_read_after_ttl_triggers_exactly_one_new_fetch() -> None:
    clock = FakeClock()
    api = FakeClimateApi(states={"V1": _state()})
    cache = ClimateStateCache(api, ttl=30.0, clock=clock)

    await cache.get_climate_state("V1")
    clock.advance(30.0)
    assert "V1" not in cache

    api.states["V1"] = _state(on=True)
    refreshed = await cache.get_climate_state("V1")
    again = await cache.get_climate_state("V1")

    assert api.calls == ["V1", "V1"]
    assert refreshed.state is not None
    assert refreshed.state.is_climate_on is True
    assert again.cached is True


@pytest.mark.asyncio
async def test_upstream_failure_is_returned_but_not_cached() -> None:
    error = TeslaTransportError("unreachable", endpoint="/api/1/vehicles/V1/data_request/climate_state")
    api = FakeClimateApi(states={"V1": _state()}, errors={"V1": error})
    cache = ClimateStateCache(api)

    lookup = await cache.get_climate_state("V1")
    assert lookup.available is False
    assert lookup.error is error
    assert len(cache) == 0
    with pytest.raises(TeslaTransportError):
        lookup.unwrap()

    del api.errors["V1"]
    recovered = await cache.get_climate_state("V1")

    assert api.calls == ["V1", "V1"]
    assert recovered.available is True


@pytest.mark.asyncio
async def test_concurrent_callers_all_see_the_same_failure() -> None:
    error = TeslaTransportError("timeout")
    api = FakeClimateApi(errors={"V1": error}, gate=asyncio.Event())
    cache = ClimateStateCache(api)

    tasks = [asyncio.create_task(cache.get_climate_state("V1")) for _ in range(3)]
    await api.started.wait()
    api.gate.set()
    results = await asyncio.gather(*tasks)

    assert api.calls == ["V1"]
    assert all(r.error is error for r in results)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        None,
        ClimateState.model_validate({"inside_temp": 20.0}),
    ],
)
async def test_unusable_telemetry_reports_unavailable(payload: ClimateState | None) -> None:
    api = FakeClimateApi(states={"V1": payload})
    cache = ClimateStateCache(api)

    lookup = await cache.get_climate_state("V1")

    assert lookup.state is None
    assert isinstance(lookup.error, ClimateUnavailableError)
    assert lookup.error.vehicle_id == "V1"
    assert len(cache) == 0


@pytest.mark.asyncio
async def test_unexpected_exceptions_propagate_and_do_not_stick() -> None:
    api = FakeClimateApi(states={"V1": _state()}, errors={"V1": RuntimeError("bug")})
    cache = ClimateStateCache(api)

    with pytest.raises(RuntimeError):
        await cache.get_climate_state("V1")
    await asyncio.sleep(0)

    del api.errors["V1"]
    lookup = await cache.get_climate_state("V1")
    assert lookup.available is True
    assert api.calls == ["V1", "V1"]


@pytest.mark.asyncio
async def test_different_vehicles_fetch_in_parallel() -> None:
    api = FakeClimateApi(states={"V1": _state(), "V2": _state(on=True)}, gate=asyncio.Event())
    cache = ClimateStateCache(api)

    t1 = asyncio.create_task(cache.get_climate_state("V1"))
    t2 = asyncio.create_task(cache.get_climate_state("V2"))
    for _ in range(5):
        await asyncio.sleep(0)

    # Both upstream calls are outstanding before either completes.
    assert sorted(api.calls) == ["V1", "V2"]
    api.gate.set()
    r1, r2 = await asyncio.gather(t1, t2)
    assert r1.state is not None and r1.state.is_climate_on is False
    assert r2.state is not None and r2.state.is_climate_on is True


@pytest.mark.asyncio
async def test_cancelled_caller_does_not_cancel_shared_fetch() -> None:
    api = FakeClimateApi(states={"V1": _state()}, gate=asyncio.Event())
    cache = ClimateStateCache(api)

    abandoned = asyncio.create_task(cache.get_climate_state("V1"))
    waiting = asyncio.create_task(cache.get_climate_state("V1"))
    await api.started.wait()

    abandoned.cancel()
    api.gate.set()
    lookup = await waiting

    with pytest.raises(asyncio.CancelledError):
        await abandoned
    assert lookup.available is True
    assert api.calls == ["V1"]
    assert "V1" in cache


@pytest.mark.asyncio
async def test_capacity_evicts_least_recently_stored_entry() -> None:
    api = FakeClimateApi(states={vid: _state() for vid in ("A", "B", "C")})
    cache = ClimateStateCache(api, max_entries=2)

    await cache.get_climate_state("A")
    await cache.get_climate_state("B")
    await cache.get_climate_state("C")

    assert len(cache) == 2
    assert "A" not in cache
    assert "B" in cache and "C" in cache

    await cache.get_climate_state("A")
    assert api.calls.count("A") == 2
    assert "B" not in cache


@pytest.mark.asyncio
async def test_invalidate_and_clear_force_refetch() -> None:
    api = FakeClimateApi(states={"V1": _state(), "V2": _state()})
    cache = ClimateStateCache(api)

    await cache.get_climate_state("V1")
    await cache.get_climate_state("V2")
    cache.invalidate("V1")
    await cache.get_climate_state("V1")
    assert api.calls.count("V1") == 2

    cache.clear()
    assert len(cache) == 0
    await cache.get_climate_state("V2")
    assert api.calls.count("V2") == 2


@pytest.mark.asyncio
async def test_empty_vehicle_id_rejected() -> None:
    cache = ClimateStateCache(FakeClimateApi())
    with pytest.raises(ValueError):
        await cache.get_climate_state("")


def test_invalid_construction_rejected() -> None:
    with pytest.raises(ValueError):
        ClimateStateCache(FakeClimateApi(), ttl=0)
    with pytest.raises(ValueError):
        ClimateStateCache(FakeClimateApi(), max_entries=0)


def test_lookup_without_state_or_error_raises_unavailable() -> None:
    lookup = ClimateLookup(vehicle_id="V9")
    with pytest.raises(ClimateUnavailableError):
        lookup.unwrap()
    assert isinstance(ClimateUnavailableError("x"), TeslaError)
