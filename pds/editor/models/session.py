"""Authenticated session model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Session(BaseModel):
    """Session returned by ``createSession`` or ``refreshSession``.

    ``refresh_jwt`` is exchanged for a new access token once the current one
    expires.
    """

    did: str = Field(..., min_length=1)
    handle: str
    access_jwt: str = Field(..., min_length=1, repr=False)
    refresh_jwt: str | None = Field(default=None, repr=False)

    model_config = ConfigDict(frozen=True)
