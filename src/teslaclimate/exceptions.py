"""Custom exception hierarchy for teslaclimate."""

from __future__ import annotations

from typing import Any


class TeslaError(Exception):
    """Base exception for all teslaclimate errors."""


class TeslaConfigError(TeslaError):
    """Invalid or missing configuration."""


class TeslaTransportError(TeslaError):
    """HTTP-level failure (network, timeout, non-2xx, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class TeslaApiError(TeslaError):
    """The API answered, but the answer is an application-level error."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class TeslaAuthenticationError(TeslaApiError):
    """Credentials rejected or bearer token expired."""


class TeslaVehicleNotFoundError(TeslaApiError):
    """Vehicle id unknown to the API (HTTP 404).

    Fatal to the request that raised it; callers should not retry.
    """


class TeslaCommandFailedError(TeslaApiError):
    """A vehicle command was accepted but reported ``result: false``.

    The decoded upstream reply is kept in :attr:`payload` so callers can
    log the vehicle's own diagnostic (e.g. ``reason: "could_not_wake_buses"``).
    """

    def __init__(
        self,
        message: str,
        *,
        payload: dict[str, Any] | None = None,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.payload: dict[str, Any] = dict(payload or {})
        super().__init__(message, status_code=status_code, endpoint=endpoint)


class ClimateUnavailableError(TeslaError):
    """No usable climate telemetry was returned for a vehicle."""

    def __init__(self, message: str, *, vehicle_id: str = "") -> None:
        self.vehicle_id = vehicle_id
        super().__init__(message)
