from __future__ import annotations

import time

import pytest

from teslaclimate.config import ClimateConfig
from teslaclimate.exceptions import TeslaConfigError
from teslaclimate.models.token import AuthToken


def test_defaults() -> None:
    config = ClimateConfig(username="user@example.com", password="secret")

    assert config.min_temp == 16
    assert config.max_temp == 32
    assert config.cache_ttl == 30
    assert config.cache_max_entries == 100
    assert config.token is None
    assert config.validate() is config


def test_from_mapping_plugin_keys() -> None:
    config = ClimateConfig.from_mapping(
        {
            "platform": "Tesla",
            "name": "Garage",
            "username": "user@example.com",
            "password": "secret",
            "minTemp": 17,
            "maxTemp": 28,
            "authToken": {
                "access_token": "abc",
                "token_type": "bearer",
                "created_at": 1_700_000_000,
                "expires_in": 3_888_000,
            },
        }
    )

    assert config.name == "Garage"
    assert config.min_temp == 17.0
    assert config.max_temp == 28.0
    assert isinstance(config.token, AuthToken)
    assert config.token.access_token == "abc"


def test_from_mapping_falsy_bounds_use_defaults() -> None:
    config = ClimateConfig.from_mapping({"username": "u", "password": "p", "minTemp": 0, "maxTemp": None})

    assert config.min_temp == 16.0
    assert config.max_temp == 32.0
    assert config.name == "Tesla"


def test_from_mapping_rejects_bad_token() -> None:
    with pytest.raises(TeslaConfigError):
        ClimateConfig.from_mapping({"authToken": {"access_token": "abc"}})
    with pytest.raises(TeslaConfigError):
        ClimateConfig.from_mapping({"authToken": "abc"})


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TESLA_USERNAME", "env@example.com")
    monkeypatch.setenv("TESLA_PASSWORD", "env-secret")
    monkeypatch.setenv("TESLA_MIN_TEMP", "18")
    monkeypatch.setenv("TESLA_CACHE_TTL", "10")
    monkeypatch.setenv("TESLA_CACHE_MAX_ENTRIES", "5")
    monkeypatch.setenv("TESLA_ACCESS_TOKEN", "env-token")
    monkeypatch.setenv("TESLA_TOKEN_CREATED_AT", "1700000000")
    monkeypatch.setenv("TESLA_TOKEN_EXPIRES_IN", "60")

    config = ClimateConfig.from_env(max_temp=26.0)

    assert config.username == "env@example.com"
    assert config.password == "env-secret"
    assert config.min_temp == 18.0
    assert config.max_temp == 26.0
    assert config.cache_ttl == 10.0
    assert config.cache_max_entries == 5
    assert config.token is not None
    assert config.token.access_token == "env-token"
    assert config.token.expires_in == 60


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TESLA_MIN_TEMP", "18")
    config = ClimateConfig.from_env(min_temp=15.0, username="u", password="p")
    assert config.min_temp == 15.0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"username": "u", "password": "p", "min_temp": 30, "max_temp": 20},
        {"username": "u", "password": "p", "cache_ttl": 0},
        {"username": "u", "password": "p", "cache_max_entries": 0},
        {"username": "u"},
        {},
    ],
)
def test_validate_rejects(kwargs: dict[str, object]) -> None:
    with pytest.raises(TeslaConfigError):
        ClimateConfig(**kwargs).validate()  # type: ignore[arg-type]


def test_token_only_is_valid() -> None:
    token = AuthToken(access_token="abc", created_at=0, expires_in=10)
    assert ClimateConfig(token=token).validate().has_password_credentials is False


def test_from_env_access_token_alone_is_usable(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("TESLA_USERNAME", "TESLA_PASSWORD", "TESLA_TOKEN_CREATED_AT", "TESLA_TOKEN_EXPIRES_IN"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("TESLA_ACCESS_TOKEN", "qts-abc")

    before = time.time()
    config = ClimateConfig.from_env().validate()

    assert config.token is not None
    assert config.token.access_token == "qts-abc"
    assert config.token.created_at >= before
    assert config.token.expires_in == 3_888_000
    assert config.token.is_expired() is False
