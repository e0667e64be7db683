"""Climate endpoints.

Endpoints:
  - /api/1/vehicles/{id}/data_request/climate_state
  - /api/1/vehicles/{id}/command/auto_conditioning_start
  - /api/1/vehicles/{id}/command/auto_conditioning_stop
  - /api/1/vehicles/{id}/command/set_temps
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from teslaclimate._api._common import unwrap_response, vehicle_endpoint
from teslaclimate._transport import Transport
from teslaclimate.exceptions import ClimateUnavailableError
from teslaclimate.models.climate import ClimateCommand, ClimateState
from teslaclimate.models.command import CommandResult

_logger = logging.getLogger(__name__)

_COMMAND_SUFFIX: dict[ClimateCommand, str] = {
    ClimateCommand.START: "command/auto_conditioning_start",
    ClimateCommand.STOP: "command/auto_conditioning_stop",
}


async def fetch_climate_state(transport: Transport, token: str, vehicle_id: str) -> ClimateState | None:
    """Fetch current climate telemetry.

    Returns ``None`` when the vehicle answered without a climate payload.

    Raises
    ------
    ClimateUnavailableError
        If the payload does not parse as climate telemetry.
    """
    endpoint = vehicle_endpoint(vehicle_id, "data_request/climate_state")
    body = await transport.request("GET", endpoint, token=token)
    data = unwrap_response(endpoint, body)
    if not isinstance(data, dict) or not data:
        _logger.debug("Empty climate payload vehicle_id=%s", vehicle_id)
        return None
    try:
        return ClimateState.model_validate(data)
    except ValidationError as exc:
        _logger.debug("Malformed climate payload vehicle_id=%s: %s", vehicle_id, exc)
        raise ClimateUnavailableError(
            f"Malformed climate telemetry from {endpoint}: {exc.error_count()} invalid field(s)",
            vehicle_id=vehicle_id,
        ) from exc


async def start_stop_climate(
    transport: Transport,
    token: str,
    vehicle_id: str,
    command: ClimateCommand,
) -> CommandResult:
    """Start or stop climate conditioning."""
    endpoint = vehicle_endpoint(vehicle_id, _COMMAND_SUFFIX[ClimateCommand(command)])
    body = await transport.request("POST", endpoint, token=token)
    data = unwrap_response(endpoint, body)
    return CommandResult.model_validate(data if isinstance(data, dict) else {})


async def set_temperature(
    transport: Transport,
    token: str,
    vehicle_id: str,
    driver_temp: float,
    passenger_temp: float | None = None,
) -> CommandResult:
    """Set the driver (and passenger) target temperature in °C.

    The passenger side follows the driver when not given.
    """
    endpoint = vehicle_endpoint(vehicle_id, "command/set_temps")
    payload = {
        "driver_temp": driver_temp,
        "passenger_temp": driver_temp if passenger_temp is None else passenger_temp,
    }
    body = await transport.request("POST", endpoint, token=token, payload=payload)
    data = unwrap_response(endpoint, body)
    return CommandResult.model_validate(data if isinstance(data, dict) else {})
