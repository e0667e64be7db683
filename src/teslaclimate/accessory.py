"""Thermostat accessory facade.

Host-agnostic get/set handlers for one vehicle's climate control. A host
binding (HomeKit bridge, Home Assistant entity, ...) wires these to its own
characteristic/attribute callbacks; errors raised by the adapter are
surfaced unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from teslaclimate._constants import (
    CURRENT_TEMP_MAX,
    CURRENT_TEMP_MIN,
    CURRENT_TEMP_STEP,
    DEFAULT_HEATING_THRESHOLD,
    TARGET_TEMP_STEP,
)
from teslaclimate.adapter import ClimateModeAdapter
from teslaclimate.config import ClimateConfig
from teslaclimate.models.climate import HeatingCoolingMode, TemperatureDisplayUnits
from teslaclimate.models.vehicle import Vehicle

_logger = logging.getLogger(__name__)

Getter = Callable[[], Awaitable[Any]]
Setter = Callable[[Any], Awaitable[Any]]


@dataclass(frozen=True, slots=True)
class TemperatureProps:
    """Value range advertised to the host for a temperature characteristic."""

    min_value: float
    max_value: float
    min_step: float


@dataclass(frozen=True, slots=True)
class CharacteristicBinding:
    """Handlers and optional props for one characteristic."""

    get: Getter
    set: Setter | None = None
    props: TemperatureProps | None = None


class ClimateAccessory:
    """Thermostat facade over :class:`ClimateModeAdapter` for one vehicle."""

    manufacturer = "Tesla Climate Control"
    model = "Tesla"
    serial_number = "NA"

    def __init__(self, vehicle: Vehicle, adapter: ClimateModeAdapter, config: ClimateConfig) -> None:
        self._vehicle = vehicle
        self._adapter = adapter
        self.name = f"{vehicle.display_name} Climate Control"
        self.min_temp = config.min_temp
        self.max_temp = config.max_temp
        self.temperature_display_units = TemperatureDisplayUnits.CELSIUS
        self.heating_threshold_temperature = DEFAULT_HEATING_THRESHOLD

        _logger.info("Thermostat instantiated: name=%s vehicle_id=%s", vehicle.display_name, vehicle.id)

    @property
    def vehicle(self) -> Vehicle:
        return self._vehicle

    @property
    def vehicle_id(self) -> str:
        return self._vehicle.id

    @property
    def information(self) -> dict[str, str]:
        return {
            "Manufacturer": self.manufacturer,
            "Model": self.model,
            "SerialNumber": self.serial_number,
        }

    @property
    def current_temperature_props(self) -> TemperatureProps:
        return TemperatureProps(CURRENT_TEMP_MIN, CURRENT_TEMP_MAX, CURRENT_TEMP_STEP)

    @property
    def target_temperature_props(self) -> TemperatureProps:
        return TemperatureProps(self.min_temp, self.max_temp, TARGET_TEMP_STEP)

    def identify(self) -> None:
        _logger.info("Identify requested for %s", self.name)

    # --- heating/cooling state ---

    async def get_current_heating_cooling_state(self) -> HeatingCoolingMode:
        return await self._adapter.current_mode(self.vehicle_id)

    async def get_target_heating_cooling_state(self) -> HeatingCoolingMode:
        return await self._adapter.target_mode(self.vehicle_id)

    async def set_target_heating_cooling_state(self, value: int | None) -> HeatingCoolingMode | None:
        return await self._adapter.apply_target_mode(self.vehicle_id, value)

    # --- temperatures ---

    async def get_current_temperature(self) -> float:
        """Cabin temperature; 0 when the vehicle does not report one."""
        value = await self._adapter.current_temperature(self.vehicle_id)
        return 0.0 if value is None else value

    async def get_target_temperature(self) -> float | None:
        return await self._adapter.target_temperature(self.vehicle_id)

    async def set_target_temperature(self, value: float) -> float:
        if not self.min_temp <= value <= self.max_temp:
            raise ValueError(f"target temperature must be between {self.min_temp} and {self.max_temp}, got {value}")
        return await self._adapter.set_target_temperature(self.vehicle_id, value)

    # --- local-only characteristics ---

    async def get_temperature_display_units(self) -> TemperatureDisplayUnits:
        return self.temperature_display_units

    async def set_temperature_display_units(self, value: int) -> TemperatureDisplayUnits:
        self.temperature_display_units = TemperatureDisplayUnits(value)
        return self.temperature_display_units

    async def get_heating_threshold_temperature(self) -> float:
        return self.heating_threshold_temperature

    async def get_name(self) -> str:
        return self.name

    def characteristics(self) -> dict[str, CharacteristicBinding]:
        """Handlers keyed by HomeKit characteristic name."""
        return {
            "CurrentHeatingCoolingState": CharacteristicBinding(get=self.get_current_heating_cooling_state),
            "TargetHeatingCoolingState": CharacteristicBinding(
                get=self.get_target_heating_cooling_state,
                set=self.set_target_heating_cooling_state,
            ),
            "CurrentTemperature": CharacteristicBinding(
                get=self.get_current_temperature,
                props=self.current_temperature_props,
            ),
            "TargetTemperature": CharacteristicBinding(
                get=self.get_target_temperature,
                set=self.set_target_temperature,
                props=self.target_temperature_props,
            ),
            "TemperatureDisplayUnits": CharacteristicBinding(
                get=self.get_temperature_display_units,
                set=self.set_temperature_display_units,
            ),
            "HeatingThresholdTemperature": CharacteristicBinding(get=self.get_heating_threshold_temperature),
            "Name": CharacteristicBinding(get=self.get_name),
        }
