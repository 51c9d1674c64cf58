"""Moderator service for the Driptyard admin SDK.

Copyright (c) 2025 Driptyard. All rights reserved.
"""

from __future__ import annotations

from typing import Any

from ._base import BaseClient, RequestConfig
from .mapping import map_permissions
from .models import ModeratorPermissions

ModeratorId = int | str

STATUS_ACTIVE = "active"
STATUS_INACTIVE = "inactive"


class ModeratorService:
    """Service for moderator listing and permission administration."""

    def __init__(self, client: BaseClient) -> None:
        """Initialize moderator service.

        Args:
            client: The base HTTP client

        """
        self._client = client

    async def list_moderators(
        self,
        page: int = 1,
        page_size: int = 10,
        search: str | None = None,
        status: str | None = None,
    ) -> dict[str, Any]:
        """Get one page of moderators.

        Args:
            page: 1-based page number
            page_size: Rows per page
            search: Search query
            status: ``active`` or ``inactive``

        Returns:
            Moderators and pagination info.

        """
        params: dict[str, Any] = {"page": page, "page_size": page_size}
        if search:
            params["search"] = search
        if status in (STATUS_ACTIVE, STATUS_INACTIVE):
            params["is_active"] = status == STATUS_ACTIVE

        config = RequestConfig(params=params)
        return await self._client.make_request("GET", "/moderators", config=config)

    async def get_permissions(self, moderator_id: ModeratorId) -> ModeratorPermissions:
        """Read a moderator's permission set.

        Args:
            moderator_id: Moderator user ID

        Returns:
            The ten capability flags.

        """
        data = await self._client.make_request(
            "GET", f"/moderators/{moderator_id}/permissions"
        )
        return map_permissions(data)

    async def update_permissions(
        self,
        moderator_id: ModeratorId,
        permissions: ModeratorPermissions,
    ) -> dict[str, Any]:
        """Replace a moderator's permission set.

        Args:
            moderator_id: Moderator user ID
            permissions: All ten flags; each is sent explicitly

        Returns:
            The stored permission set.

        """
        config = RequestConfig(json_data=permissions.to_payload())
        return await self._client.make_request(
            "PUT", f"/moderators/{moderator_id}/permissions", config=config
        )
