"""Flagged-content service for the Driptyard admin SDK.

Copyright (c) 2025 Driptyard. All rights reserved.
"""

from __future__ import annotations

from typing import Any

from ._base import BaseClient, RequestConfig

ReportId = int | str


class ReportService:
    """Service for the flagged-content review queue.

    Status transitions are decided by the server; callers request one and
    re-fetch the queue.
    """

    def __init__(self, client: BaseClient) -> None:
        """Initialize report service.

        Args:
            client: The base HTTP client

        """
        self._client = client

    async def list_reports(
        self,
        page: int = 1,
        page_size: int = 10,
        search: str | None = None,
        status: str | None = None,
    ) -> dict[str, Any]:
        """Get one page of reported listings.

        Args:
            page: 1-based page number
            page_size: Rows per page
            search: Search query
            status: ``pending`` or ``approved``

        Returns:
            Reported listings and pagination info.

        """
        params: dict[str, Any] = {"page": page, "page_size": page_size}
        if search:
            params["search"] = search
        if status:
            params["status"] = status

        config = RequestConfig(params=params)
        return await self._client.make_request("GET", "/admin/reports", config=config)

    async def approve_report(self, report_id: ReportId) -> dict[str, Any]:
        """Uphold a report and resolve it."""
        return await self._client.make_request(
            "POST", f"/admin/reports/{report_id}/approve"
        )

    async def reject_report(self, report_id: ReportId) -> dict[str, Any]:
        """Dismiss a report."""
        return await self._client.make_request(
            "POST", f"/admin/reports/{report_id}/reject"
        )

    async def review_report(self, report_id: ReportId) -> dict[str, Any]:
        """Reopen a closed report for another review."""
        return await self._client.make_request(
            "POST", f"/admin/reports/{report_id}/review"
        )
