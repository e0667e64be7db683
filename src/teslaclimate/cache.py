"""Per-vehicle climate state cache.

Collapses bursts of climate reads into one upstream call per vehicle:

* a fresh entry (younger than the TTL) is served without contacting the API;
* concurrent reads for the same vehicle while a fetch is in flight all await
  that single fetch;
* failures are returned to the callers of that fetch but never cached, so
  the next read retries on its own.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass

from teslaclimate._constants import CLIMATE_CACHE_MAX_ENTRIES, CLIMATE_CACHE_TTL_SECONDS
from teslaclimate.client import ClimateApi
from teslaclimate.exceptions import ClimateUnavailableError, TeslaError
from teslaclimate.models.climate import ClimateState

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ClimateLookup:
    """Outcome of one cache read: a state, or the reason there is none."""

    vehicle_id: str
    state: ClimateState | None = None
    error: TeslaError | None = None
    cached: bool = False
    """``True`` when served from a fresh entry without an upstream call."""

    @property
    def available(self) -> bool:
        return self.state is not None

    def unwrap(self) -> ClimateState:
        """Return the state, or raise the error that prevented reading it."""
        if self.state is not None:
            return self.state
        if self.error is not None:
            raise self.error
        raise ClimateUnavailableError(
            f"No climate state available for vehicle {self.vehicle_id}",
            vehicle_id=self.vehicle_id,
        )


@dataclass(slots=True)
class _CacheEntry:
    state: ClimateState
    expires_at: float


class ClimateStateCache:
    """Bounded TTL cache of :class:`ClimateState` keyed by vehicle id.

    Parameters
    ----------
    api : ClimateApi
        Upstream source of climate telemetry.
    ttl : float
        Seconds a fetched state stays fresh, measured from fetch completion.
    max_entries : int
        Capacity; the least recently stored entry is evicted beyond it.
    clock : callable
        Monotonic clock in seconds. Injectable for tests.
    """

    def __init__(
        self,
        api: ClimateApi,
        *,
        ttl: float = CLIMATE_CACHE_TTL_SECONDS,
        max_entries: int = CLIMATE_CACHE_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl <= 0:
            raise ValueError(f"ttl must be positive, got {ttl}")
        if max_entries < 1:
            raise ValueError(f"max_entries must be at least 1, got {max_entries}")
        self._api = api
        self._ttl = ttl
        self._max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[str, _CacheEntry] = OrderedDict()
        self._inflight: dict[str, asyncio.Task[ClimateLookup]] = {}

    @property
    def ttl(self) -> float:
        return self._ttl

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, vehicle_id: object) -> bool:
        return isinstance(vehicle_id, str) and self._fresh_entry(vehicle_id) is not None

    def _fresh_entry(self, vehicle_id: str) -> _CacheEntry | None:
        entry = self._entries.get(vehicle_id)
        if entry is None:
            return None
        if self._clock() >= entry.expires_at:
            del self._entries[vehicle_id]
            return None
        return entry

    def _store(self, vehicle_id: str, state: ClimateState) -> None:
        self._entries[vehicle_id] = _CacheEntry(state=state, expires_at=self._clock() + self._ttl)
        self._entries.move_to_end(vehicle_id)
        while len(self._entries) > self._max_entries:
            evicted, _ = self._entries.popitem(last=False)
            _logger.debug("Climate cache full; evicted vehicle_id=%s", evicted)

    def invalidate(self, vehicle_id: str) -> None:
        """Drop the cached state for one vehicle (an in-flight fetch is kept)."""
        self._entries.pop(vehicle_id, None)

    def clear(self) -> None:
        """Drop every cached state."""
        self._entries.clear()

    async def _fetch(self, vehicle_id: str) -> ClimateLookup:
        try:
            state = await self._api.get_climate_state(vehicle_id)
        except TeslaError as exc:
            _logger.debug("Climate fetch failed vehicle_id=%s: %s", vehicle_id, exc)
            return ClimateLookup(vehicle_id=vehicle_id, error=exc)

        if state is None or not state.is_usable:
            _logger.debug("Climate fetch returned no usable telemetry vehicle_id=%s", vehicle_id)
            return ClimateLookup(
                vehicle_id=vehicle_id,
                error=ClimateUnavailableError(
                    f"Vehicle {vehicle_id} returned no climate telemetry",
                    vehicle_id=vehicle_id,
                ),
            )

        self._store(vehicle_id, state)
        return ClimateLookup(vehicle_id=vehicle_id, state=state)

    def _forget_inflight(self, vehicle_id: str, task: asyncio.Task[ClimateLookup]) -> None:
        if self._inflight.get(vehicle_id) is task:
            del self._inflight[vehicle_id]

    async def get_climate_state(self, vehicle_id: str) -> ClimateLookup:
        """Return the climate state for *vehicle_id*, fetching at most once.

        Never raises for upstream failures; inspect or ``unwrap()`` the
        returned :class:`ClimateLookup` instead.
        """
        if not vehicle_id:
            raise ValueError("vehicle_id must be non-empty")

        entry = self._fresh_entry(vehicle_id)
        if entry is not None:
            return ClimateLookup(vehicle_id=vehicle_id, state=entry.state, cached=True)

        task = self._inflight.get(vehicle_id)
        if task is None:
            task = asyncio.ensure_future(self._fetch(vehicle_id))
            self._inflight[vehicle_id] = task
            task.add_done_callback(lambda done, key=vehicle_id: self._forget_inflight(key, done))
        # Shield so one caller giving up does not cancel the fetch for the others.
        return await asyncio.shield(task)
