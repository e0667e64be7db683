"""Vehicle model."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, Field, field_validator

from teslaclimate.models._base import TeslaBaseModel


class Vehicle(TeslaBaseModel):
    """A vehicle associated with the account.

    Fields are mapped from the ``/api/1/vehicles`` list response.
    """

    id: str = Field(validation_alias=AliasChoices("id_s", "id"))
    """String form of the vehicle id, used in every per-vehicle endpoint."""
    display_name: str = ""
    """User-assigned vehicle name."""
    vehicle_id: int | None = None
    """Numeric id used by the streaming API."""
    vin: str = ""
    """Vehicle Identification Number."""
    state: str = "unknown"
    """``online``, ``asleep`` or ``offline``."""

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> str:
        text = str(value).strip()
        if not text:
            raise ValueError("vehicle id must be non-empty")
        return text

    @field_validator("display_name", mode="before")
    @classmethod
    def _coerce_name(cls, value: Any) -> str:
        return str(value)
