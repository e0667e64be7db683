"""Command reply model.

Vehicle commands answer with ``{"result": bool, "reason": str}`` inside
the usual ``response`` envelope.
"""

from __future__ import annotations

from typing import Any

from pydantic import model_validator

from teslaclimate.models._base import TeslaBaseModel


class CommandResult(TeslaBaseModel):
    """Result of a vehicle command."""

    result: bool = False
    reason: str = ""

    @property
    def success(self) -> bool:
        return self.result

    @model_validator(mode="before")
    @classmethod
    def _coerce_result(cls, values: Any) -> Any:
        """Treat anything other than a literal ``true`` as failure."""
        if not isinstance(values, dict):
            return values
        r = values.get("result")
        if r is not None and not isinstance(r, bool):
            values = {**values, "result": False}
        return values
