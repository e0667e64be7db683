"""High-level async client for the owner API."""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any, Protocol, TypeVar

import aiohttp

from teslaclimate._api import climate as _climate_api
from teslaclimate._api import login as _login_api
from teslaclimate._api.vehicles import fetch_vehicle_list
from teslaclimate._transport import HttpTransport, Transport
from teslaclimate.config import ClimateConfig
from teslaclimate.exceptions import TeslaAuthenticationError, TeslaError
from teslaclimate.models.climate import ClimateCommand, ClimateState
from teslaclimate.models.command import CommandResult
from teslaclimate.models.token import AuthToken
from teslaclimate.models.vehicle import Vehicle

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class ClimateApi(Protocol):
    """The slice of the vehicle API the climate cache and adapter depend on."""

    async def get_climate_state(self, vehicle_id: str) -> ClimateState | None:
        ...

    async def start_stop_climate(self, vehicle_id: str, command: ClimateCommand) -> CommandResult:
        ...

    async def set_temperature(self, vehicle_id: str, value: float) -> CommandResult:
        ...


class TeslaClient:
    """Async client for the owner API.

    Usage::

        async with TeslaClient(config) as client:
            vehicles = await client.get_vehicles()
            state = await client.get_climate_state(vehicles[0].id)

    A token supplied in the configuration is used until it expires; after
    that (or when the server rejects it) the client logs in again with
    username/password, if configured.
    """

    def __init__(
        self,
        config: ClimateConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        transport: Transport | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._transport: Transport | None = transport
        self._external_transport = transport is not None
        self._clock = clock
        self._token: AuthToken | None = config.token

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> TeslaClient:
        if self._transport is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if not self._external_transport:
            self._transport = None

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    @property
    def token(self) -> AuthToken | None:
        return self._token

    async def login(self) -> AuthToken:
        """Obtain a fresh bearer token with the password grant."""
        transport = self._require_transport()
        token = await _login_api.login(self._config, transport)
        _logger.debug("Logged in; token expires at %s", token.expires_at.isoformat())
        self._token = token
        return token

    async def ensure_session(self) -> AuthToken:
        """Return a usable token, logging in again if it is missing or expired."""
        token = self._token
        if token is not None and not token.is_expired(self._clock()):
            return token
        if token is not None:
            _logger.info("Auth token expired at %s", token.expires_at.isoformat())
            self._token = None
        if not self._config.has_password_credentials:
            raise TeslaAuthenticationError("Auth token missing or expired and no username/password configured")
        return await self.login()

    def invalidate_session(self) -> None:
        """Forget the current token (next call will re-authenticate)."""
        self._token = None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_transport(self) -> Transport:
        if self._transport is None:
            raise TeslaError("Client not initialized. Use 'async with TeslaClient(...) as client:'")
        return self._transport

    async def _call_with_reauth(self, fn: Callable[[Transport, str], Awaitable[T]]) -> T:
        """Run an API call, retrying once after a rejected token.

        The retry only happens when password credentials are configured;
        a rejected pre-issued token is otherwise surfaced as-is.
        """
        transport = self._require_transport()
        token = await self.ensure_session()
        try:
            return await fn(transport, token.access_token)
        except TeslaAuthenticationError:
            if not self._config.has_password_credentials:
                raise
            _logger.debug("Token rejected; logging in again")
            self.invalidate_session()
            token = await self.ensure_session()
            return await fn(transport, token.access_token)

    # ------------------------------------------------------------------
    # Read endpoints
    # ------------------------------------------------------------------

    async def get_vehicles(self) -> list[Vehicle]:
        """Fetch all vehicles associated with the account."""
        return await self._call_with_reauth(fetch_vehicle_list)

    async def get_climate_state(self, vehicle_id: str) -> ClimateState | None:
        """Fetch current climate telemetry for a vehicle."""

        async def _call(transport: Transport, token: str) -> ClimateState | None:
            return await _climate_api.fetch_climate_state(transport, token, vehicle_id)

        return await self._call_with_reauth(_call)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def start_stop_climate(self, vehicle_id: str, command: ClimateCommand) -> CommandResult:
        """Start or stop climate conditioning."""

        async def _call(transport: Transport, token: str) -> CommandResult:
            return await _climate_api.start_stop_climate(transport, token, vehicle_id, command)

        return await self._call_with_reauth(_call)

    async def set_temperature(self, vehicle_id: str, value: float) -> CommandResult:
        """Set the target temperature (°C) for both front seats."""

        async def _call(transport: Transport, token: str) -> CommandResult:
            return await _climate_api.set_temperature(transport, token, vehicle_id, value)

        return await self._call_with_reauth(_call)
