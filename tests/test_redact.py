from __future__ import annotations

from teslaclimate._redact import redact_for_log


def test_redact_for_log_redacts_sensitive_keys() -> None:
    payload = {
        "response": {"id_s": "123"},
        "access_token": "qts-abc",
        "refresh_token": "eyJ...",
        "password": "pw",
        "nested": {"Authorization": "Bearer qts-abc"},
    }

    redacted = redact_for_log(payload)
    assert redacted["response"] == {"id_s": "123"}
    assert redacted["access_token"] == "<redacted>"
    assert redacted["refresh_token"] == "<redacted>"
    assert redacted["password"] == "<redacted>"
    assert redacted["nested"]["Authorization"] == "<redacted>"


def test_redact_for_log_truncates_long_strings() -> None:
    long_value = "x" * 600
    redacted = redact_for_log({"value": long_value}, max_string=10)
    assert redacted["value"].startswith("x" * 10)
    assert "<truncated>" in redacted["value"]


def test_redact_for_log_handles_sequences_and_bytes() -> None:
    redacted = redact_for_log([{"token": "t"}, b"abc"])
    assert redacted == [{"token": "<redacted>"}, "<bytes:3b>"]


def test_redact_for_log_masks_bearer_strings() -> None:
    redacted = redact_for_log({"headers": ["bearer qts-abc", "application/json"]})
    assert redacted == {"headers": ["Bearer <redacted>", "application/json"]}
