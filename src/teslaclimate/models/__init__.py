"""Data models for owner API responses."""

from teslaclimate.models._base import TeslaBaseModel
from teslaclimate.models.climate import (
    ClimateCommand,
    ClimateState,
    HeatingCoolingMode,
    TemperatureDisplayUnits,
    derive_current_mode,
    derive_target_mode,
    mode_to_command,
)
from teslaclimate.models.command import CommandResult
from teslaclimate.models.token import AuthToken
from teslaclimate.models.vehicle import Vehicle

__all__ = [
    "AuthToken",
    "ClimateCommand",
    "ClimateState",
    "CommandResult",
    "HeatingCoolingMode",
    "TemperatureDisplayUnits",
    "TeslaBaseModel",
    "Vehicle",
    "derive_current_mode",
    "derive_target_mode",
    "mode_to_command",
]
