"""Vehicle list endpoint: /api/1/vehicles."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from teslaclimate._api._common import unwrap_response
from teslaclimate._transport import Transport
from teslaclimate.models.vehicle import Vehicle

_logger = logging.getLogger(__name__)

_ENDPOINT = "/api/1/vehicles"


async def fetch_vehicle_list(transport: Transport, token: str) -> list[Vehicle]:
    """Fetch all vehicles associated with the account.

    Entries without a usable id are skipped.
    """
    body = await transport.request("GET", _ENDPOINT, token=token)
    items = unwrap_response(_ENDPOINT, body)
    if not isinstance(items, list):
        return []

    vehicles: list[Vehicle] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        try:
            vehicles.append(Vehicle.model_validate(item))
        except ValidationError:
            _logger.debug("Skipping vehicle entry without id: keys=%s", list(item.keys()))
    return vehicles
