"""User and session models for the Driptyard admin SDK.

Copyright (c) 2025 Driptyard. All rights reserved.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator

from .. import validation
from .permission_models import ModeratorPermissions


class CurrentUser(BaseModel):
    """The signed-in admin or moderator."""

    model_config = ConfigDict(extra="allow")

    id: int | str | None = None
    email: str | None = None
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    role: str = "customer"
    is_admin: bool = False
    is_moderator: bool = False
    avatar_url: str | None = None
    phone: str | None = None
    bio: str | None = None
    verified: bool | None = None
    permissions: ModeratorPermissions | None = None

    @property
    def name(self) -> str | None:
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name}"
        return self.username or self.email

    @property
    def is_staff(self) -> bool:
        return self.is_admin or self.is_moderator

    def can(self, permission: str) -> bool:
        """Admins can do everything; moderators need the capability granted."""
        if self.is_admin:
            return True
        if self.permissions is None:
            return False
        return bool(getattr(self.permissions, permission, False))


class Session(BaseModel):
    """An authenticated dashboard session."""

    access_token: str
    refresh_token: str | None = None
    user: CurrentUser


class AdminUser(BaseModel):
    """A user row as the admin user and moderator tables see it."""

    model_config = ConfigDict(extra="allow")

    id: int | str | None = None
    email: str | None = None
    username: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    is_admin: bool = False
    is_moderator: bool = False
    is_active: bool = True
    is_verified: bool = False
    is_banned: bool = False
    is_suspended: bool = False
    permissions: ModeratorPermissions | None = None
    listing_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    last_login: datetime | None = None

    @property
    def display_name(self) -> str:
        full = " ".join(part for part in (self.first_name, self.last_name) if part)
        return full or self.username or self.email or "Unknown user"

    @property
    def status_label(self) -> str:
        if self.is_banned:
            return "Banned"
        if self.is_suspended:
            return "Suspended"
        if not self.is_active:
            return "Inactive"
        return "Active"

    @property
    def is_restricted(self) -> bool:
        return self.is_banned or self.is_suspended or not self.is_active


class LoginRequest(BaseModel):
    """Login form input."""

    email: str
    password: str

    @field_validator("email")
    @classmethod
    def _email(cls, value: str) -> str:
        return validation.validate_email(value)

    @field_validator("password")
    @classmethod
    def _password(cls, value: str) -> str:
        return validation.validate_min_length(
            value, validation.LOGIN_PASSWORD_MIN_LENGTH
        )


class LoginResponse(BaseModel):
    """Login response model."""

    model_config = ConfigDict(extra="allow")

    access_token: str
    refresh_token: str | None = None
    token_type: str | None = None
    user: dict[str, Any]
    permissions: dict[str, Any] | None = None


class UpdateUserRequest(BaseModel):
    """Fields an admin may change on a user or moderator."""

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    username: str | None = None
    is_active: bool | None = None
    is_verified: bool | None = None

    @field_validator("email")
    @classmethod
    def _email(cls, value: str | None) -> str | None:
        return validation.validate_email(value) if value else value

    @field_validator("username")
    @classmethod
    def _username(cls, value: str | None) -> str | None:
        return validation.validate_username(value) if value else value

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class CreateModeratorRequest(BaseModel):
    """Create-moderator form input."""

    email: str
    password: str
    username: str
    phone: str

    @field_validator("email")
    @classmethod
    def _email(cls, value: str) -> str:
        return validation.validate_email(value)

    @field_validator("username")
    @classmethod
    def _username(cls, value: str) -> str:
        return validation.validate_username(value)

    @field_validator("password")
    @classmethod
    def _password(cls, value: str) -> str:
        return validation.validate_account_password(value)

    @field_validator("phone")
    @classmethod
    def _phone(cls, value: str) -> str:
        return validation.validate_phone(value)

    def to_payload(self) -> dict[str, Any]:
        country_code, _ = validation.split_phone(self.phone)
        return {
            "email": self.email,
            "password": self.password,
            "username": self.username,
            "phone": self.phone,
            "country_code": country_code,
            "is_admin": False,
            "is_moderator": True,
            "is_customer": False,
        }


class ResetUserPasswordRequest(BaseModel):
    """Admin-set password for another account."""

    new_password: str
    confirm_password: str

    @field_validator("new_password")
    @classmethod
    def _length(cls, value: str) -> str:
        return validation.validate_min_length(
            value, validation.RESET_PASSWORD_MIN_LENGTH
        )

    @field_validator("confirm_password")
    @classmethod
    def _matches(cls, value: str, info: ValidationInfo) -> str:
        return _confirm(value, info)


class PasswordResetVerifyRequest(BaseModel):
    """Second step of the forgot-password flow."""

    email: str
    code: str
    new_password: str
    confirm_password: str

    @field_validator("email")
    @classmethod
    def _email(cls, value: str) -> str:
        return validation.validate_email(value)

    @field_validator("code")
    @classmethod
    def _code(cls, value: str) -> str:
        return validation.validate_otp(value)

    @field_validator("new_password")
    @classmethod
    def _length(cls, value: str) -> str:
        return validation.validate_min_length(
            value, validation.RESET_PASSWORD_MIN_LENGTH
        )

    @field_validator("confirm_password")
    @classmethod
    def _matches(cls, value: str, info: ValidationInfo) -> str:
        return _confirm(value, info)


class ChangeOwnPasswordRequest(BaseModel):
    """The signed-in admin changing their own password from settings."""

    current_password: str
    new_password: str
    confirm_password: str

    @field_validator("current_password")
    @classmethod
    def _current(cls, value: str) -> str:
        if not value:
            raise ValueError("Current password is required")
        return value

    @field_validator("new_password")
    @classmethod
    def _new(cls, value: str) -> str:
        if not value:
            raise ValueError("New password is required")
        if len(value) < validation.ACCOUNT_PASSWORD_MIN_LENGTH:
            raise ValueError("Password must be at least 8 characters")
        if len(value) > validation.OWN_PASSWORD_MAX_LENGTH:
            raise ValueError("Password must be at most 15 characters")
        return value

    @field_validator("confirm_password")
    @classmethod
    def _matches(cls, value: str, info: ValidationInfo) -> str:
        value = _confirm(value, info)
        if info.data.get("current_password") == value:
            raise ValueError("New password must be different from current password")
        return value


def _confirm(value: str, info: ValidationInfo) -> str:
    new_password = info.data.get("new_password")
    if new_password is not None and value != new_password:
        raise ValueError("Passwords do not match")
    return value
