"""Admin dashboard and audit-log service for the Driptyard admin SDK.

Copyright (c) 2025 Driptyard. All rights reserved.
"""

from __future__ import annotations

from datetime import date as date_type
from typing import Any

from ._base import BaseClient, RequestConfig
from .models import OverviewStats

ROLE_ADMIN = "admin"
ROLE_MODERATOR = "moderator"


class AdminService:
    """Service for dashboard counters and the audit trail."""

    def __init__(self, client: BaseClient) -> None:
        """Initialize admin service.

        Args:
            client: The base HTTP client

        """
        self._client = client

    async def get_overview_stats(self) -> OverviewStats:
        """Get dashboard counters.

        Returns:
            Totals and their percentage changes.

        """
        data = await self._client.make_request("GET", "/admin/stats/overview")
        return OverviewStats.model_validate(data if isinstance(data, dict) else {})

    async def list_logs(
        self,
        page: int = 1,
        page_size: int = 10,
        role: str | None = None,
        action: str | None = None,
        date: date_type | str | None = None,
    ) -> dict[str, Any]:
        """Get one page of the audit trail.

        Args:
            page: 1-based page number
            page_size: Rows per page
            role: ``admin`` or ``moderator`` to filter by actor role
            action: Exact action label, e.g. ``Applied Spotlight``
            date: Day to filter on

        Returns:
            Log rows, totals, and the ``available_actions`` vocabulary.

        """
        params: dict[str, Any] = {"page": page, "page_size": page_size}

        if role in (ROLE_ADMIN, ROLE_MODERATOR):
            params["is_admin"] = role == ROLE_ADMIN
        if action:
            params["action"] = action
        if date:
            params["date"] = (
                date.strftime("%Y-%m-%d") if isinstance(date, date_type) else date
            )

        config = RequestConfig(params=params)
        return await self._client.make_request("GET", "/admin/logs", config=config)

    async def get_available_actions(self) -> list[str]:
        """Get the distinct action labels the audit trail uses, sorted.

        Returns:
            Action labels, or an empty list when the server sends none.

        """
        data = await self.list_logs(page=1, page_size=1)
        actions = data.get("available_actions") if isinstance(data, dict) else None
        if not isinstance(actions, list):
            return []
        return sorted(str(action) for action in actions)
