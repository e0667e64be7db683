"""Shared helpers for owner API endpoint modules.

Every owner API reply wraps its payload as ``{"response": ...}``; failures
that still return HTTP 200 carry ``{"response": null, "error": "..."}``.

It is internal to teslaclimate and may change at any time.
"""

from __future__ import annotations

from typing import Any

from teslaclimate.exceptions import TeslaApiError


def vehicle_endpoint(vehicle_id: str, suffix: str) -> str:
    """Build a per-vehicle endpoint path."""
    vid = str(vehicle_id).strip()
    if not vid:
        raise ValueError("vehicle_id must be non-empty")
    return f"/api/1/vehicles/{vid}/{suffix}"


def unwrap_response(endpoint: str, body: dict[str, Any]) -> Any:
    """Return the ``response`` member, raising on an embedded error."""
    error = body.get("error")
    if error:
        raise TeslaApiError(
            f"{endpoint} failed: {error} {body.get('error_description', '')}".rstrip(),
            endpoint=endpoint,
        )
    if "response" not in body:
        raise TeslaApiError(f"Missing 'response' field from {endpoint}", endpoint=endpoint)
    return body["response"]
