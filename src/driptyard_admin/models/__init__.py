"""Driptyard admin models package.

Copyright (c) 2025 Driptyard. All rights reserved.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

# Import from domain-specific model files
from .admin_models import LogEntry, OverviewStats, format_change
from .permission_models import (
    PERMISSION_FIELDS,
    READ_DEPENDENCIES,
    ModeratorPermissions,
)
from .product_models import (
    CONDITIONS,
    AdminProduct,
    ApplySpotlightRequest,
    ProductSpotlight,
    Spotlight,
    SpotlightHistoryEntry,
    SpotlightStatus,
    UpdateProductRequest,
)
from .report_models import SUCCESS_STATUSES, FlaggedItem
from .token_models import RefreshTokenRequest, TokenResponse
from .user_models import (
    AdminUser,
    ChangeOwnPasswordRequest,
    CreateModeratorRequest,
    CurrentUser,
    LoginRequest,
    LoginResponse,
    PasswordResetVerifyRequest,
    ResetUserPasswordRequest,
    Session,
    UpdateUserRequest,
)

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """One page of a server-paginated collection."""

    items: list[T] = Field(default_factory=list)
    page: int = 1
    page_size: int = 10
    total: int = 0
    total_pages: int = 1


__all__ = [
    # Admin models
    "OverviewStats",
    "LogEntry",
    "format_change",
    # Permission models
    "PERMISSION_FIELDS",
    "READ_DEPENDENCIES",
    "ModeratorPermissions",
    # Product models
    "CONDITIONS",
    "AdminProduct",
    "UpdateProductRequest",
    "Spotlight",
    "SpotlightStatus",
    "ProductSpotlight",
    "ApplySpotlightRequest",
    "SpotlightHistoryEntry",
    # Report models
    "SUCCESS_STATUSES",
    "FlaggedItem",
    # Token models
    "RefreshTokenRequest",
    "TokenResponse",
    # User models
    "CurrentUser",
    "Session",
    "AdminUser",
    "LoginRequest",
    "LoginResponse",
    "UpdateUserRequest",
    "CreateModeratorRequest",
    "ResetUserPasswordRequest",
    "PasswordResetVerifyRequest",
    "ChangeOwnPasswordRequest",
    # Base models
    "Page",
]
