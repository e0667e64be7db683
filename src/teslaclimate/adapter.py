"""Heating/cooling mode adapter.

Reads go through :class:`~teslaclimate.cache.ClimateStateCache`; writes go
straight to the API and never touch the cache. A successful write is taken
at face value: there is no confirmatory re-read, so a read shortly after a
write may still return the pre-write snapshot until the cache entry expires.
"""

from __future__ import annotations

import logging

from teslaclimate.cache import ClimateStateCache
from teslaclimate.client import ClimateApi
from teslaclimate.exceptions import TeslaCommandFailedError
from teslaclimate.models.climate import (
    HeatingCoolingMode,
    derive_current_mode,
    derive_target_mode,
    mode_to_command,
)

_logger = logging.getLogger(__name__)


class ClimateModeAdapter:
    """Narrow climate interface used by the accessory layer.

    One adapter serves any number of vehicles; all per-vehicle state is
    keyed by vehicle id.
    """

    def __init__(self, api: ClimateApi, cache: ClimateStateCache) -> None:
        self._api = api
        self._cache = cache
        self._commanded: dict[str, HeatingCoolingMode] = {}

    @property
    def cache(self) -> ClimateStateCache:
        return self._cache

    def last_commanded_mode(self, vehicle_id: str) -> HeatingCoolingMode | None:
        """Mode from the last successful :meth:`apply_target_mode`, if any."""
        return self._commanded.get(vehicle_id)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def current_mode(self, vehicle_id: str) -> HeatingCoolingMode:
        """Current heating/cooling state; OFF whenever telemetry is unavailable."""
        lookup = await self._cache.get_climate_state(vehicle_id)
        if not lookup.available:
            _logger.debug("Current mode defaulting to OFF vehicle_id=%s: %s", vehicle_id, lookup.error)
        return derive_current_mode(lookup.state)

    async def target_mode(self, vehicle_id: str) -> HeatingCoolingMode:
        """Target heating/cooling state (AUTO or OFF); raises when unavailable."""
        lookup = await self._cache.get_climate_state(vehicle_id)
        return derive_target_mode(lookup.unwrap())

    async def current_temperature(self, vehicle_id: str) -> float | None:
        """Cabin temperature, ``None`` when the vehicle does not report it."""
        lookup = await self._cache.get_climate_state(vehicle_id)
        return lookup.unwrap().inside_temp

    async def target_temperature(self, vehicle_id: str) -> float | None:
        """Driver target temperature as last reported upstream."""
        lookup = await self._cache.get_climate_state(vehicle_id)
        return lookup.unwrap().driver_temp_setting

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def apply_target_mode(
        self,
        vehicle_id: str,
        mode: HeatingCoolingMode | int | None,
    ) -> HeatingCoolingMode | None:
        """Start or stop climate to match *mode*.

        HEAT, COOL and AUTO all send the same ``start`` command; the API has
        no finer control. ``None`` is a no-op.

        Raises
        ------
        TeslaCommandFailedError
            If the vehicle reports the command as failed.
        """
        if mode is None:
            return None
        requested = HeatingCoolingMode(mode)
        command = mode_to_command(requested)

        result = await self._api.start_stop_climate(vehicle_id, command)
        if not result.success:
            _logger.warning(
                "Error setting climate state vehicle_id=%s command=%s reason=%s",
                vehicle_id,
                command,
                result.reason,
            )
            raise TeslaCommandFailedError(
                f"Climate {command} failed for vehicle {vehicle_id}: {result.reason or 'no reason given'}",
                payload=result.raw,
            )

        self._commanded[vehicle_id] = requested
        return requested

    async def set_target_temperature(self, vehicle_id: str, value: float) -> float:
        """Set the target temperature; committed once the API answers without error.

        No clamping happens here; bounds belong to the accessory configuration.
        """
        result = await self._api.set_temperature(vehicle_id, value)
        _logger.debug("set_temperature vehicle_id=%s value=%s result=%s", vehicle_id, value, result.raw)
        return value
