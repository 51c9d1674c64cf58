"""Admin user management service for the Driptyard admin SDK.

Copyright (c) 2025 Driptyard. All rights reserved.
"""

from __future__ import annotations

from typing import Any

from ._base import BaseClient, RequestConfig
from .mapping import map_admin_user
from .models import (
    AdminUser,
    CreateModeratorRequest,
    ResetUserPasswordRequest,
    UpdateUserRequest,
)

UserId = int | str


class UserService:
    """Service for admin-side user management."""

    def __init__(self, client: BaseClient) -> None:
        """Initialize user service.

        Args:
            client: The base HTTP client

        """
        self._client = client

    async def list_users(
        self,
        page: int = 1,
        page_size: int = 10,
        search: str | None = None,
        exclude_admins: bool = True,
    ) -> dict[str, Any]:
        """Get one page of users.

        Args:
            page: 1-based page number
            page_size: Rows per page
            search: Search query
            exclude_admins: Leave admin accounts out of the result

        Returns:
            Users and pagination info.

        """
        params: dict[str, Any] = {"page": page, "page_size": page_size}
        if search:
            params["search"] = search
        if exclude_admins:
            params["exclude_admins"] = True

        config = RequestConfig(params=params)
        return await self._client.make_request("GET", "/admin/users", config=config)

    async def get_user(self, user_id: UserId) -> AdminUser:
        """Get full details of one user.

        Args:
            user_id: User ID

        Returns:
            User data.

        """
        data = await self._client.make_request("GET", f"/admin/users/{user_id}")
        return map_admin_user(data)

    async def create_moderator(self, request: CreateModeratorRequest) -> dict[str, Any]:
        """Create a moderator account.

        Args:
            request: Validated form input

        Returns:
            Created user data.

        """
        config = RequestConfig(json_data=request.to_payload())
        return await self._client.make_request(
            "POST", "/admin/users/create", config=config
        )

    async def update_user(
        self,
        user_id: UserId,
        request: UpdateUserRequest,
    ) -> dict[str, Any]:
        """Update profile and status fields of a user or moderator.

        Args:
            user_id: User ID
            request: Fields to change

        Returns:
            Updated user data.

        """
        config = RequestConfig(json_data=request.to_payload())
        return await self._client.make_request(
            "PUT", f"/admin/users/{user_id}", config=config
        )

    async def delete_user(self, user_id: UserId) -> dict[str, Any]:
        """Permanently delete a user.

        Args:
            user_id: User ID

        Returns:
            Deletion confirmation.

        """
        return await self._client.make_request("DELETE", f"/admin/users/{user_id}")

    async def suspend_user(self, user_id: UserId) -> dict[str, Any]:
        return await self._client.make_request(
            "POST", f"/admin/users/{user_id}/suspend"
        )

    async def unsuspend_user(self, user_id: UserId) -> dict[str, Any]:
        return await self._client.make_request(
            "POST", f"/admin/users/{user_id}/unsuspend"
        )

    async def ban_user(self, user_id: UserId) -> dict[str, Any]:
        return await self._client.make_request("POST", f"/admin/users/{user_id}/ban")

    async def unban_user(self, user_id: UserId) -> dict[str, Any]:
        return await self._client.make_request(
            "POST", f"/admin/users/{user_id}/unban"
        )

    async def reinstate_user(self, user: AdminUser) -> dict[str, Any]:
        """Lift a suspension, or re-activate an inactive account.

        Args:
            user: The user as last fetched

        Returns:
            Server response, or an empty dict when nothing needed changing.

        """
        if user.is_suspended:
            return await self.unsuspend_user(user.id)
        if not user.is_active:
            return await self.update_user(user.id, UpdateUserRequest(is_active=True))
        return {}

    async def reset_password(
        self,
        user_id: UserId,
        request: ResetUserPasswordRequest,
    ) -> dict[str, Any]:
        """Set a new password for a user; the server emails it to them.

        Args:
            user_id: User ID
            request: Validated new password

        Returns:
            Reset confirmation.

        """
        config = RequestConfig(json_data={"new_password": request.new_password})
        return await self._client.make_request(
            "POST", f"/admin/users/{user_id}/reset-password", config=config
        )

    async def bulk_delete(self, user_ids: list[UserId]) -> dict[str, Any]:
        """Delete several users in one call.

        Args:
            user_ids: Users to delete

        Returns:
            Server summary, usually with a ``message``.

        """
        config = RequestConfig(json_data={"user_ids": list(user_ids)})
        return await self._client.make_request(
            "POST", "/admin/users/bulk-delete", config=config
        )

    async def bulk_update_status(
        self,
        user_ids: list[UserId],
        is_active: bool,
    ) -> dict[str, Any]:
        """Activate or deactivate several users in one call.

        Args:
            user_ids: Users to update
            is_active: New active flag

        Returns:
            Server summary, usually with a ``message``.

        """
        config = RequestConfig(
            json_data={"user_ids": list(user_ids), "is_active": is_active}
        )
        return await self._client.make_request(
            "POST", "/admin/users/bulk-status", config=config
        )
