"""Authentication service for the Driptyard admin SDK.

Copyright (c) 2025 Driptyard. All rights reserved.
"""

from __future__ import annotations

import logging
from typing import Any

import pydantic

from ._base import BaseClient, RequestConfig
from .exceptions import (
    AccessDeniedError,
    AuthenticationError,
    AuthorizationError,
    DriptyardAdminError,
    LoginError,
    login_error_message,
)
from .mapping import map_current_user
from .models import (
    CurrentUser,
    LoginResponse,
    RefreshTokenRequest,
    Session,
    TokenResponse,
)

logger = logging.getLogger(__name__)


class AuthService:
    """Service for authentication and session lifecycle."""

    def __init__(self, client: BaseClient) -> None:
        """Initialize authentication service.

        Args:
            client: The base HTTP client

        """
        self._client = client

    async def login(self, email: str, password: str) -> Session:
        """Sign in an admin or moderator and persist the session.

        Args:
            email: Account email
            password: Account password

        Returns:
            The new session.

        Raises:
            LoginError: The server rejected the attempt (normalized message)
            AccessDeniedError: The account is neither admin nor moderator

        """
        config = RequestConfig(json_data={"email": email, "password": password})
        try:
            data = await self._client.make_request("POST", "/auth/login", config=config)
            response = LoginResponse.model_validate(data)
            user_data = dict(response.user)
            if response.permissions is not None:
                user_data.setdefault("permissions", response.permissions)
            user = map_current_user(user_data)
        except DriptyardAdminError as exc:
            raise LoginError(login_error_message(exc), exc.status_code) from exc
        except pydantic.ValidationError as exc:
            msg = "Login failed: unexpected response from server"
            raise LoginError(msg) from exc

        # Nothing is persisted for accounts without dashboard access.
        if not user.is_staff:
            logger.info("Rejected login for non-staff account %s", user.email)
            raise AccessDeniedError

        # A new session replaces every credential of the previous one.
        self._client.clear_session()
        self._client.set_access_token(response.access_token)
        if response.refresh_token:
            self._client.set_refresh_token(response.refresh_token)
        if user.permissions is not None:
            self._client.set_permissions(user.permissions.to_payload())

        logger.info("Signed in as %s", user.email or user.username)
        return Session(
            access_token=response.access_token,
            refresh_token=response.refresh_token,
            user=user,
        )

    async def logout(self) -> dict[str, Any]:
        """Log out and tear down the local session.

        A 401 or 403 from the server means the token was already invalid and
        counts as a successful logout. Local teardown happens on every exit
        path, including errors that propagate.

        Returns:
            Logout confirmation response.

        """
        try:
            return await self._client.make_request("POST", "/auth/logout")
        except (AuthenticationError, AuthorizationError):
            logger.info("Logout token already invalid; ending local session")
            return {"success": True, "message": "Logged out successfully"}
        finally:
            self._client.end_session()

    async def refresh_token(self) -> TokenResponse:
        """Exchange the stored refresh token for a new access token.

        Returns:
            Response with the new access token (already stored).

        """
        refresh_token = self._client.get_refresh_token()
        if not refresh_token:
            msg = "No refresh token stored"
            raise AuthenticationError(msg)

        payload = RefreshTokenRequest(refresh_token=refresh_token).model_dump()
        config = RequestConfig(json_data=payload)
        data = await self._client.make_request("POST", "/auth/refresh", config=config)
        response = TokenResponse.model_validate(data)

        self._client.set_access_token(response.access_token)
        if response.refresh_token:
            self._client.set_refresh_token(response.refresh_token)
        return response

    async def get_current_user(self) -> CurrentUser:
        """Resolve the identity behind the stored access token.

        Returns:
            The signed-in user.

        """
        data = await self._client.make_request("GET", "/users/me")
        user = map_current_user(data)
        if user.permissions is None:
            cached = self._client.get_permissions()
            if cached:
                user = map_current_user({**data, "permissions": cached})
        return user

    async def restore_session(self) -> CurrentUser | None:
        """Pick up a session left in the token store by an earlier run.

        Returns:
            The signed-in user, or None when there is no usable session.

        """
        if not self._client.get_access_token():
            return None
        try:
            return await self.get_current_user()
        except AuthenticationError:
            logger.info("Stored session is no longer valid")
            self._client.clear_session()
            return None

    async def update_profile(self, profile_data: dict[str, Any]) -> dict[str, Any]:
        """Update the signed-in user's profile.

        Args:
            profile_data: Fields to change (username, names, phone, bio)

        Returns:
            Updated profile data.

        """
        config = RequestConfig(json_data=profile_data)
        return await self._client.make_request("PATCH", "/users/me", config=config)

    async def change_password(
        self,
        current_password: str,
        new_password: str,
    ) -> dict[str, Any]:
        """Change the signed-in user's password.

        Args:
            current_password: Current password
            new_password: New password

        Returns:
            Password change response.

        """
        data = {
            "current_password": current_password,
            "new_password": new_password,
        }
        config = RequestConfig(json_data=data)
        return await self._client.make_request(
            "POST", "/users/me/change-password", config=config
        )

    async def request_password_reset(self, email: str) -> dict[str, Any]:
        """Send a password reset code to ``email``.

        Args:
            email: Account email address

        Returns:
            Password reset request response.

        """
        config = RequestConfig(json_data={"email": email})
        return await self._client.make_request(
            "POST", "/auth/password-reset/request", config=config
        )

    async def verify_password_reset(
        self,
        code: str,
        new_password: str,
        email: str | None = None,
    ) -> dict[str, Any]:
        """Complete a password reset with the emailed code.

        Args:
            code: Six-digit reset code
            new_password: New password
            email: Account email address; only sent when given, for servers
                that scope reset codes per account

        Returns:
            Password reset confirmation response.

        """
        data = {"code": code, "new_password": new_password}
        if email:
            data["email"] = email
        config = RequestConfig(json_data=data)
        return await self._client.make_request(
            "POST", "/auth/password-reset/verify", config=config
        )

    async def verify_password_reset_admin(
        self,
        email: str,
        new_password: str,
        current_password: str | None = None,
    ) -> dict[str, Any]:
        """Self-service password change for a signed-in admin.

        Args:
            email: The admin's email address
            new_password: New password
            current_password: Current password, when the server requires it

        Returns:
            Password reset confirmation response.

        """
        data = {
            "email": email,
            "reset_token": None,
            "new_password": new_password,
            "is_admin": True,
            "current_password": current_password or None,
        }
        config = RequestConfig(json_data=data)
        return await self._client.make_request(
            "POST", "/auth/password-reset/verify", config=config
        )
