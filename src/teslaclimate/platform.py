"""Platform: discovers vehicles once at startup and builds their accessories."""

from __future__ import annotations

import logging
import time

from teslaclimate.accessory import ClimateAccessory
from teslaclimate.adapter import ClimateModeAdapter
from teslaclimate.cache import ClimateStateCache
from teslaclimate.client import TeslaClient
from teslaclimate.config import ClimateConfig
from teslaclimate.exceptions import TeslaApiError

_logger = logging.getLogger(__name__)


class ClimatePlatform:
    """Owns the shared cache/adapter and one accessory per vehicle.

    Usage::

        config = ClimateConfig.from_mapping(host_config).validate()
        async with TeslaClient(config) as client:
            platform = ClimatePlatform(config, client)
            accessories = await platform.discover()
    """

    def __init__(self, config: ClimateConfig, client: TeslaClient) -> None:
        self._config = config
        self._client = client
        self.cache = ClimateStateCache(
            client,
            ttl=config.cache_ttl,
            max_entries=config.cache_max_entries,
        )
        self.adapter = ClimateModeAdapter(client, self.cache)
        self.accessories: list[ClimateAccessory] = []

    @property
    def name(self) -> str:
        return self._config.name

    async def discover(self) -> list[ClimateAccessory]:
        """List the account's vehicles and build one accessory each.

        Raises
        ------
        TeslaApiError
            If the account has no vehicles.
        """
        token = self._config.token
        if token is not None:
            _logger.info("Supplied token expires on %s", token.expires_at.isoformat())
            if token.is_expired(time.time()):
                _logger.info("Supplied token has expired; falling back to username/password")

        vehicles = await self._client.get_vehicles()
        if not vehicles:
            _logger.warning("No vehicles were found")
            raise TeslaApiError("No vehicles were found.", endpoint="/api/1/vehicles")

        self.accessories = [ClimateAccessory(vehicle, self.adapter, self._config) for vehicle in vehicles]
        return self.accessories
