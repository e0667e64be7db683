"""Client and accessory configuration for teslaclimate."""

from __future__ import annotations

import dataclasses
import os
import time
from collections.abc import Mapping
from typing import Any

from teslaclimate._constants import (
    BASE_URL,
    CLIMATE_CACHE_MAX_ENTRIES,
    CLIMATE_CACHE_TTL_SECONDS,
    DEFAULT_CLIENT_ID,
    DEFAULT_MAX_TEMP,
    DEFAULT_MIN_TEMP,
    DEFAULT_TOKEN_LIFETIME_SECONDS,
)
from teslaclimate.exceptions import TeslaConfigError
from teslaclimate.models.token import AuthToken


def _token_from_mapping(raw: Any) -> AuthToken | None:
    if raw is None:
        return None
    if isinstance(raw, AuthToken):
        return raw
    if not isinstance(raw, Mapping):
        raise TeslaConfigError(f"authToken must be a mapping, got {type(raw).__name__}")
    try:
        return AuthToken.model_validate(dict(raw))
    except ValueError as exc:
        raise TeslaConfigError(f"Invalid authToken: {exc}") from exc


@dataclasses.dataclass(frozen=True)
class ClimateConfig:
    """Client and accessory configuration.

    Parameters
    ----------
    username : str or None
        Account email, used for the password grant.
    password : str or None
        Account password.
    token : AuthToken or None
        Pre-obtained bearer token. Ignored once expired; the client then
        falls back to the password grant.
    name : str
        Platform name shown by the host.
    min_temp : float
        Lowest target temperature the accessory will accept (°C).
    max_temp : float
        Highest target temperature the accessory will accept (°C).
    base_url : str
        Owner API base URL.
    client_id : str
        OAuth client id for the password grant.
    client_secret : str or None
        OAuth client secret, when the grant requires one.
    cache_ttl : float
        Seconds a fetched climate state stays fresh.
    cache_max_entries : int
        Maximum number of vehicles held in the climate cache.
    request_timeout : float
        Total timeout in seconds for a single HTTP request.
    """

    username: str | None = None
    password: str | None = None
    token: AuthToken | None = None
    name: str = "Tesla"
    min_temp: float = DEFAULT_MIN_TEMP
    max_temp: float = DEFAULT_MAX_TEMP
    base_url: str = BASE_URL
    client_id: str = DEFAULT_CLIENT_ID
    client_secret: str | None = None
    cache_ttl: float = CLIMATE_CACHE_TTL_SECONDS
    cache_max_entries: int = CLIMATE_CACHE_MAX_ENTRIES
    request_timeout: float = 30.0

    @property
    def has_password_credentials(self) -> bool:
        return bool(self.username) and bool(self.password)

    def validate(self) -> ClimateConfig:
        """Raise :class:`TeslaConfigError` on inconsistent settings; return self."""
        if self.min_temp >= self.max_temp:
            raise TeslaConfigError(f"min_temp ({self.min_temp}) must be below max_temp ({self.max_temp})")
        if self.cache_ttl <= 0:
            raise TeslaConfigError(f"cache_ttl must be positive, got {self.cache_ttl}")
        if self.cache_max_entries < 1:
            raise TeslaConfigError(f"cache_max_entries must be at least 1, got {self.cache_max_entries}")
        if self.token is None and not self.has_password_credentials:
            raise TeslaConfigError("Either username/password or an auth token is required")
        return self

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ClimateConfig:
        """Create configuration from a plugin-style mapping.

        Accepts ``name``, ``username``, ``password``, ``minTemp``,
        ``maxTemp`` and ``authToken`` (``access_token``, ``created_at``,
        ``expires_in``). Missing or falsy bounds fall back to the defaults.
        """
        kwargs: dict[str, Any] = {
            "username": data.get("username"),
            "password": data.get("password"),
            "token": _token_from_mapping(data.get("authToken")),
            "min_temp": float(data.get("minTemp") or DEFAULT_MIN_TEMP),
            "max_temp": float(data.get("maxTemp") or DEFAULT_MAX_TEMP),
        }
        if data.get("name"):
            kwargs["name"] = str(data["name"])
        return cls(**kwargs)

    @classmethod
    def from_env(cls, **overrides: Any) -> ClimateConfig:
        """Create configuration from ``TESLA_*`` environment variables.

        Explicit keyword arguments override environment values. A token
        given by ``TESLA_ACCESS_TOKEN`` alone counts as issued now with the
        standard 45-day lifetime.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "TESLA_USERNAME": "username",
            "TESLA_PASSWORD": "password",
            "TESLA_NAME": "name",
            "TESLA_BASE_URL": "base_url",
            "TESLA_CLIENT_ID": "client_id",
            "TESLA_CLIENT_SECRET": "client_secret",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        _ENV_FLOAT_MAP = {
            "TESLA_MIN_TEMP": "min_temp",
            "TESLA_MAX_TEMP": "max_temp",
            "TESLA_CACHE_TTL": "cache_ttl",
            "TESLA_REQUEST_TIMEOUT": "request_timeout",
        }
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = float(val)

        max_entries_env = env.get("TESLA_CACHE_MAX_ENTRIES")
        if max_entries_env is not None and "cache_max_entries" not in overrides:
            config_kwargs["cache_max_entries"] = int(max_entries_env)

        access_token = env.get("TESLA_ACCESS_TOKEN")
        if access_token and "token" not in overrides:
            config_kwargs["token"] = _token_from_mapping(
                {
                    "access_token": access_token,
                    "created_at": env.get("TESLA_TOKEN_CREATED_AT") or time.time(),
                    "expires_in": env.get("TESLA_TOKEN_EXPIRES_IN") or DEFAULT_TOKEN_LIFETIME_SECONDS,
                }
            )

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
