"""HTTP transport for the owner API."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from teslaclimate._constants import AUTH_FAILED_STATUS_CODES, NOT_FOUND_STATUS_CODES, USER_AGENT
from teslaclimate._redact import redact_for_log
from teslaclimate.config import ClimateConfig
from teslaclimate.exceptions import (
    TeslaAuthenticationError,
    TeslaTransportError,
    TeslaVehicleNotFoundError,
)

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles/mocks while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        token: str | None = None,
        params: Mapping[str, Any] | None = None,
        payload: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        ...


def raise_for_status(status: int, text: str, endpoint: str) -> None:
    """Map a non-2xx HTTP status onto the exception hierarchy."""
    if 200 <= status < 300:
        return
    if status in AUTH_FAILED_STATUS_CODES:
        raise TeslaAuthenticationError(
            f"HTTP {status} from {endpoint}: token rejected",
            status_code=status,
            endpoint=endpoint,
        )
    if status in NOT_FOUND_STATUS_CODES:
        raise TeslaVehicleNotFoundError(
            f"HTTP {status} from {endpoint}: not found",
            status_code=status,
            endpoint=endpoint,
        )
    raise TeslaTransportError(
        f"HTTP {status} from {endpoint}: {text[:200]}",
        status_code=status,
        endpoint=endpoint,
    )


class HttpTransport:
    """JSON-over-HTTPS transport with bearer authentication."""

    def __init__(
        self,
        config: ClimateConfig,
        http_session: aiohttp.ClientSession,
    ) -> None:
        self._config = config
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        token: str | None = None,
        params: Mapping[str, Any] | None = None,
        payload: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send a request and return the decoded JSON object."""
        headers: dict[str, str] = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }
        if token:
            headers["authorization"] = f"Bearer {token}"

        url = f"{self._config.base_url}{endpoint}"
        _logger.debug("%s %s params=%s", method, url, redact_for_log(dict(params or {})))

        try:
            async with self._http.request(
                method,
                url,
                params=dict(params) if params else None,
                json=dict(payload) if payload is not None else None,
                headers=headers,
                timeout=self._timeout,
            ) as resp:
                text = await resp.text()
                raise_for_status(resp.status, text, endpoint)
        except (TeslaTransportError, TeslaAuthenticationError, TeslaVehicleNotFoundError):
            raise
        except aiohttp.ClientError as exc:
            raise TeslaTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc
        except TimeoutError as exc:
            raise TeslaTransportError(
                f"Request to {endpoint} timed out after {self._config.request_timeout}s",
                endpoint=endpoint,
            ) from exc
        except UnicodeDecodeError as exc:
            raise TeslaTransportError(
                f"Undecodable response body from {endpoint}: {exc.reason}",
                endpoint=endpoint,
            ) from exc

        try:
            body: Any = json.loads(text) if text else {}
        except json.JSONDecodeError as exc:
            raise TeslaTransportError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                endpoint=endpoint,
            ) from exc

        if not isinstance(body, dict):
            raise TeslaTransportError(
                f"Unexpected JSON payload from {endpoint}: {type(body).__name__}",
                endpoint=endpoint,
            )
        _logger.debug("Response from %s: %s", endpoint, redact_for_log(body))
        return body
