"""Login endpoint.

Endpoint:
  - /oauth/token (password grant)
"""

from __future__ import annotations

import logging
import time
from typing import Any

from teslaclimate._constants import DEFAULT_TOKEN_LIFETIME_SECONDS
from teslaclimate._redact import redact_for_log
from teslaclimate._transport import Transport
from teslaclimate.config import ClimateConfig
from teslaclimate.exceptions import TeslaAuthenticationError, TeslaConfigError
from teslaclimate.models.token import AuthToken

_logger = logging.getLogger(__name__)

_ENDPOINT = "/oauth/token"


def build_login_request(config: ClimateConfig) -> dict[str, str]:
    """Build the password-grant form for ``/oauth/token``.

    Raises
    ------
    TeslaConfigError
        If the configuration carries no username/password.
    """
    if not config.has_password_credentials:
        raise TeslaConfigError("Password login requires both username and password")
    payload: dict[str, str] = {
        "grant_type": "password",
        "client_id": config.client_id,
        "email": str(config.username),
        "password": str(config.password),
    }
    if config.client_secret:
        payload["client_secret"] = config.client_secret
    return payload


def parse_login_response(body: dict[str, Any], *, now: float | None = None) -> AuthToken:
    """Parse the token reply.

    ``created_at`` is filled with *now* and ``expires_in`` with the
    standard 45-day lifetime when the server omits them.

    Raises
    ------
    TeslaAuthenticationError
        If the reply carries an error or no access token.
    """
    _logger.debug("Login response parsed=%s", redact_for_log(body))
    if body.get("error"):
        raise TeslaAuthenticationError(
            f"Login failed: {body.get('error')} {body.get('error_description', '')}".rstrip(),
            endpoint=_ENDPOINT,
        )
    if not body.get("access_token"):
        raise TeslaAuthenticationError("Login response missing access_token", endpoint=_ENDPOINT)

    data = {key: value for key, value in body.items() if value is not None}
    data.setdefault("created_at", time.time() if now is None else now)
    if not data.get("expires_in"):
        data["expires_in"] = DEFAULT_TOKEN_LIFETIME_SECONDS
    return AuthToken.model_validate(data)


async def login(config: ClimateConfig, transport: Transport) -> AuthToken:
    """Exchange username/password for a bearer token."""
    body = await transport.request("POST", _ENDPOINT, payload=build_login_request(config))
    return parse_login_response(body)
