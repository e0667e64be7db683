"""teslaclimate - Async vehicle climate control for home-automation hosts."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("teslaclimate")
except PackageNotFoundError:
    __version__ = "0+local"
from teslaclimate.accessory import CharacteristicBinding, ClimateAccessory, TemperatureProps
from teslaclimate.adapter import ClimateModeAdapter
from teslaclimate.cache import ClimateLookup, ClimateStateCache
from teslaclimate.client import ClimateApi, TeslaClient
from teslaclimate.config import ClimateConfig
from teslaclimate.exceptions import (
    ClimateUnavailableError,
    TeslaApiError,
    TeslaAuthenticationError,
    TeslaCommandFailedError,
    TeslaConfigError,
    TeslaError,
    TeslaTransportError,
    TeslaVehicleNotFoundError,
)
from teslaclimate.models import (
    AuthToken,
    ClimateCommand,
    ClimateState,
    CommandResult,
    HeatingCoolingMode,
    TemperatureDisplayUnits,
    Vehicle,
    derive_current_mode,
    derive_target_mode,
    mode_to_command,
)
from teslaclimate.platform import ClimatePlatform

__all__ = [
    "__version__",
    "AuthToken",
    "CharacteristicBinding",
    "ClimateAccessory",
    "ClimateApi",
    "ClimateCommand",
    "ClimateConfig",
    "ClimateLookup",
    "ClimateModeAdapter",
    "ClimatePlatform",
    "ClimateState",
    "ClimateStateCache",
    "ClimateUnavailableError",
    "CommandResult",
    "HeatingCoolingMode",
    "TemperatureDisplayUnits",
    "TemperatureProps",
    "TeslaApiError",
    "TeslaAuthenticationError",
    "TeslaClient",
    "TeslaCommandFailedError",
    "TeslaConfigError",
    "TeslaError",
    "TeslaTransportError",
    "TeslaVehicleNotFoundError",
    "Vehicle",
    "derive_current_mode",
    "derive_target_mode",
    "mode_to_command",
]
