"""Token models for the Driptyard admin SDK.

Copyright (c) 2025 Driptyard. All rights reserved.
"""

from pydantic import BaseModel, ConfigDict


class RefreshTokenRequest(BaseModel):
    """Refresh token request model."""

    refresh_token: str


class TokenResponse(BaseModel):
    """Token response model."""

    model_config = ConfigDict(extra="allow")

    access_token: str
    refresh_token: str | None = None
    token_type: str | None = None
