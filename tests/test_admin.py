"""Tests for dashboard, audit log, user and report administration.

Copyright (c) 2025 Driptyard. All rights reserved.
"""

from __future__ import annotations

import json
from datetime import date
from typing import Any

import httpx
import respx
from driptyard_admin import AdminUser, DriptyardAdminClient
from driptyard_admin.models import format_change


class TestDashboard:
    async def test_overview_stats(
        self,
        client: DriptyardAdminClient,
        signed_in: Any,
        mock_responses: respx.MockRouter,
    ) -> None:
        mock_responses.get("/admin/stats/overview").mock(
            return_value=httpx.Response(
                200,
                json={
                    "total_users": 120,
                    "total_products": 540,
                    "pending_verifications": 4,
                    "flagged_content_count": 2,
                    "total_users_change": 5,
                    "flagged_content_count_change": -12.5,
                },
            )
        )

        stats = await client.admin.get_overview_stats()

        assert stats.total_users == 120
        assert format_change(stats.total_users_change) == "+5.0%"
        assert format_change(stats.flagged_content_count_change) == "-12.5%"
        assert format_change(stats.pending_verifications_change) == "+0.0%"


class TestAuditLog:
    async def test_role_and_date_filters(
        self,
        client: DriptyardAdminClient,
        signed_in: Any,
        mock_responses: respx.MockRouter,
    ) -> None:
        route = mock_responses.get("/admin/logs").mock(
            return_value=httpx.Response(
                200,
                json={
                    "items": [
                        {"id": 1, "admin_name": "ada", "action": "Banned User", "is_admin": True},
                    ],
                    "total_pages": 1,
                },
            )
        )
        logs = client.log_list()

        await logs.set_filters(role="moderator", date=date(2025, 3, 1), action="Banned User")

        params = route.calls.last.request.url.params
        assert params["is_admin"] == "false"
        assert params["date"] == "2025-03-01"
        assert params["action"] == "Banned User"
        assert "role" not in params
        assert logs.items[0].actor == "ada"

    async def test_role_all_sends_nothing(
        self,
        client: DriptyardAdminClient,
        signed_in: Any,
        mock_responses: respx.MockRouter,
    ) -> None:
        route = mock_responses.get("/admin/logs").mock(
            return_value=httpx.Response(200, json={"logs": []})
        )

        await client.log_list().load()

        assert "is_admin" not in route.calls.last.request.url.params

    async def test_available_actions_sorted(
        self,
        client: DriptyardAdminClient,
        signed_in: Any,
        mock_responses: respx.MockRouter,
    ) -> None:
        route = mock_responses.get("/admin/logs").mock(
            return_value=httpx.Response(
                200,
                json={"logs": [], "available_actions": ["Suspended User", "Applied Spotlight"]},
            )
        )

        actions = await client.admin.get_available_actions()

        assert actions == ["Applied Spotlight", "Suspended User"]
        assert route.calls.last.request.url.params["page_size"] == "1"


class TestUsers:
    async def test_reinstate_suspended_user(
        self,
        client: DriptyardAdminClient,
        signed_in: Any,
        mock_responses: respx.MockRouter,
    ) -> None:
        route = mock_responses.post("/admin/users/4/unsuspend").mock(
            return_value=httpx.Response(200, json={})
        )

        await client.users.reinstate_user(AdminUser(id=4, is_suspended=True))

        assert route.called

    async def test_reinstate_inactive_user(
        self,
        client: DriptyardAdminClient,
        signed_in: Any,
        mock_responses: respx.MockRouter,
    ) -> None:
        route = mock_responses.put("/admin/users/4").mock(
            return_value=httpx.Response(200, json={})
        )

        await client.users.reinstate_user(AdminUser(id=4, is_active=False))

        assert json.loads(route.calls.last.request.content) == {"is_active": True}

    async def test_reinstate_active_user_is_noop(self, client: DriptyardAdminClient) -> None:
        assert await client.users.reinstate_user(AdminUser(id=4)) == {}

    def test_status_label_priority(self) -> None:
        assert AdminUser(is_banned=True, is_suspended=True).status_label == "Banned"
        assert AdminUser(is_suspended=True, is_active=False).status_label == "Suspended"
        assert AdminUser(is_active=False).status_label == "Inactive"
        assert AdminUser().status_label == "Active"

    async def test_bulk_status(
        self,
        client: DriptyardAdminClient,
        signed_in: Any,
        mock_responses: respx.MockRouter,
    ) -> None:
        route = mock_responses.post("/admin/users/bulk-status").mock(
            return_value=httpx.Response(200, json={"message": "3 users updated"})
        )

        await client.users.bulk_update_status([1, 2, 3], is_active=False)

        assert json.loads(route.calls.last.request.content) == {
            "user_ids": [1, 2, 3],
            "is_active": False,
        }


class TestReports:
    async def test_local_status_filter(
        self,
        client: DriptyardAdminClient,
        signed_in: Any,
        mock_responses: respx.MockRouter,
    ) -> None:
        route = mock_responses.get("/admin/reports").mock(
            return_value=httpx.Response(
                200,
                json={
                    "reports": [
                        {"product_id": 1, "latest_report_status": "pending"},
                        {"product_id": 2, "latest_report_status": "approved"},
                        {"product_id": 3},
                    ],
                    "total": 3,
                },
            )
        )
        reports = client.report_list()

        await reports.set_filter("status", "pending")

        assert route.calls.last.request.url.params["status"] == "pending"
        assert [item.id for item in reports.items] == [1, 3]

    async def test_approve_then_refetch(
        self,
        client: DriptyardAdminClient,
        signed_in: Any,
        notifier: Any,
        mock_responses: respx.MockRouter,
    ) -> None:
        mock_responses.get("/admin/reports").mock(
            return_value=httpx.Response(200, json={"reports": [], "total": 0})
        )
        approve = mock_responses.post("/admin/reports/9/approve").mock(
            return_value=httpx.Response(200, json={"status": "approved"})
        )
        reports = client.report_list()

        result = await client.action_runner().run(
            "approve",
            9,
            lambda: client.reports.approve_report(9),
            success_message="Report approved",
            on_success=reports.refresh,
        )

        assert result.ok
        assert approve.called
        assert notifier.of_level("success") == ["Report approved"]
