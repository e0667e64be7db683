"""Climate telemetry model and the heating/cooling mode vocabulary.

Mapped from ``/api/1/vehicles/{id}/data_request/climate_state``.

The owner API only exposes a binary on/off climate primitive, so the
mode helpers here are deliberately lossy: HEAT, COOL and AUTO all map to
the same ``start`` command, and telemetry can only ever be read back as
"active" or "off".
"""

from __future__ import annotations

import enum

from teslaclimate.models._base import TeslaBaseModel

__all__ = [
    "ClimateCommand",
    "ClimateState",
    "HeatingCoolingMode",
    "TemperatureDisplayUnits",
    "derive_current_mode",
    "derive_target_mode",
    "mode_to_command",
]


class HeatingCoolingMode(enum.IntEnum):
    """Heating/cooling state; values match the HomeKit characteristic."""

    OFF = 0
    HEAT = 1
    COOL = 2
    AUTO = 3


class TemperatureDisplayUnits(enum.IntEnum):
    """Display unit; values match the HomeKit characteristic."""

    CELSIUS = 0
    FAHRENHEIT = 1


class ClimateCommand(enum.StrEnum):
    """Start/stop argument accepted by the climate command endpoint."""

    START = "start"
    STOP = "stop"


class ClimateState(TeslaBaseModel):
    """Snapshot of a vehicle's HVAC telemetry.

    Treated as opaque once fetched: a newer fetch replaces it wholesale.
    """

    is_climate_on: bool | None = None
    """``None`` means the vehicle did not report the flag."""
    inside_temp: float | None = None
    """Cabin °C; absent while the vehicle is asleep."""
    outside_temp: float | None = None
    driver_temp_setting: float | None = None
    """Driver target °C."""
    passenger_temp_setting: float | None = None
    is_auto_conditioning_on: bool | None = None
    is_front_defroster_on: bool | None = None
    is_rear_defroster_on: bool | None = None
    fan_status: int | None = None
    timestamp: int | None = None
    """Epoch milliseconds of the reading."""

    @property
    def is_usable(self) -> bool:
        """Whether the snapshot carries the on/off flag the adapter needs."""
        return self.is_climate_on is not None


def derive_current_mode(state: ClimateState | None) -> HeatingCoolingMode:
    """Map telemetry to the current-state vocabulary.

    The current state can only distinguish "active" from "off", so an
    active system is always reported as HEAT. Missing telemetry reads
    as OFF.
    """
    if state is None:
        return HeatingCoolingMode.OFF
    if state.is_climate_on:
        return HeatingCoolingMode.HEAT
    return HeatingCoolingMode.OFF


def derive_target_mode(state: ClimateState) -> HeatingCoolingMode:
    """Map telemetry to the target-state vocabulary (AUTO or OFF)."""
    if state.is_climate_on:
        return HeatingCoolingMode.AUTO
    return HeatingCoolingMode.OFF


def mode_to_command(mode: HeatingCoolingMode | int) -> ClimateCommand:
    """Collapse a requested mode into the binary upstream command."""
    if mode in (HeatingCoolingMode.HEAT, HeatingCoolingMode.COOL, HeatingCoolingMode.AUTO):
        return ClimateCommand.START
    return ClimateCommand.STOP
