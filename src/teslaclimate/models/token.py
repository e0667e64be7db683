"""Authentication token model."""

from __future__ import annotations

import time
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict


class AuthToken(BaseModel):
    """Bearer token, either returned by ``/oauth/token`` or supplied in config.

    Parameters
    ----------
    access_token : str
        Bearer token sent in the ``Authorization`` header.
    token_type : str
        Token type, normally ``"bearer"``.
    created_at : float
        Issuance time in epoch seconds.
    expires_in : float
        Lifetime in seconds, counted from ``created_at``.
    refresh_token : str or None
        Refresh token, when the server issued one.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    access_token: str
    token_type: str = "bearer"
    created_at: float
    expires_in: float
    refresh_token: str | None = None

    @property
    def expires_at(self) -> datetime:
        """Expiry as an aware UTC datetime."""
        return datetime.fromtimestamp(self.created_at + self.expires_in, tz=UTC)

    def is_expired(self, now: float | None = None) -> bool:
        """Whether the token is past its expiry at *now* (epoch seconds)."""
        if now is None:
            now = time.time()
        return now >= self.created_at + self.expires_in
