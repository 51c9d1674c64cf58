"""Tests for listing moderation and spotlights.

Copyright (c) 2025 Driptyard. All rights reserved.
"""

from __future__ import annotations

import json
from datetime import date, datetime, timezone
from typing import Any

import httpx
import pydantic
import pytest
import respx
from driptyard_admin import (
    ApplySpotlightRequest,
    DriptyardAdminClient,
    UpdateProductRequest,
)
from driptyard_admin._products import end_of_day, start_of_day


class TestSpotlight:
    async def test_apply_then_fetch_spotlight(
        self,
        client: DriptyardAdminClient,
        signed_in: Any,
        mock_responses: respx.MockRouter,
    ) -> None:
        apply = mock_responses.post("/admin/products/42/spotlight").mock(
            return_value=httpx.Response(201, json={"id": 5, "product_id": 42})
        )
        mock_responses.get("/admin/products/42/spotlight").mock(
            return_value=httpx.Response(
                200,
                json={
                    "is_spotlighted": True,
                    "spotlight": {
                        "start_time": "2025-03-01T10:00:00Z",
                        "end_time": "2025-03-02T10:00:00Z",
                        "duration_hours": 24,
                        "applied_by_username": "admin",
                        "status": "active",
                    },
                },
            )
        )

        await client.products.apply_spotlight(42, ApplySpotlightRequest(duration_hours=24))
        spotlight = await client.products.get_spotlight(42)

        assert json.loads(apply.calls.last.request.content) == {"duration_hours": 24}
        assert spotlight.is_spotlighted
        assert spotlight.available_action == "remove_spotlight"
        assert spotlight.spotlight is not None
        assert spotlight.spotlight.is_active
        assert spotlight.spotlight.applied_by_username == "admin"

    async def test_not_spotlighted(
        self,
        client: DriptyardAdminClient,
        signed_in: Any,
        mock_responses: respx.MockRouter,
    ) -> None:
        mock_responses.get("/admin/products/7/spotlight").mock(
            return_value=httpx.Response(200, json={"is_spotlighted": False})
        )

        spotlight = await client.products.get_spotlight(7)

        assert spotlight.available_action == "spotlight"
        assert spotlight.spotlight is None

    async def test_custom_end_time(
        self,
        client: DriptyardAdminClient,
        signed_in: Any,
        mock_responses: respx.MockRouter,
    ) -> None:
        route = mock_responses.post("/admin/products/42/spotlight").mock(
            return_value=httpx.Response(201, json={})
        )
        end = datetime(2025, 3, 5, 18, 0, tzinfo=timezone.utc)

        await client.products.apply_spotlight(
            42, ApplySpotlightRequest(custom_end_time=end)
        )

        assert json.loads(route.calls.last.request.content) == {
            "custom_end_time": "2025-03-05T18:00:00+00:00"
        }

    @pytest.mark.parametrize(
        "fields",
        [
            {},
            {"duration_hours": 0},
            {"duration_hours": 24, "custom_end_time": "2025-03-05T18:00:00Z"},
        ],
    )
    def test_request_needs_exactly_one_bound(self, fields: dict[str, Any]) -> None:
        with pytest.raises(pydantic.ValidationError):
            ApplySpotlightRequest(**fields)

    async def test_remove_spotlight(
        self,
        client: DriptyardAdminClient,
        signed_in: Any,
        mock_responses: respx.MockRouter,
    ) -> None:
        route = mock_responses.delete("/admin/products/42/spotlight").mock(
            return_value=httpx.Response(200, json={"message": "Spotlight removed"})
        )

        await client.products.remove_spotlight(42)

        assert route.called


class TestSpotlightHistory:
    def test_day_bounds(self) -> None:
        assert start_of_day(date(2025, 3, 1)) == "2025-03-01T00:00:00.000+00:00"
        assert end_of_day(date(2025, 3, 1)) == "2025-03-01T23:59:59.999+00:00"

    async def test_history_filters(
        self,
        client: DriptyardAdminClient,
        signed_in: Any,
        mock_responses: respx.MockRouter,
    ) -> None:
        route = mock_responses.get("/admin/spotlight/history").mock(
            return_value=httpx.Response(
                200,
                json={
                    "history": [
                        {"spotlight_id": 1, "product_title": "Denim", "action": "applied"},
                        {"spotlight_id": 2, "product_title": "Boots", "action": "expired"},
                    ],
                    "total": 2,
                    "total_pages": 1,
                },
            )
        )
        history = client.spotlight_history_list()

        await history.set_filters(
            product_id=42,
            date_from=date(2025, 3, 1),
            date_to=date(2025, 3, 31),
        )

        params = route.calls.last.request.url.params
        assert params["page_size"] == "20"
        assert params["product_id"] == "42"
        assert params["date_from"] == "2025-03-01T00:00:00.000+00:00"
        assert params["date_to"] == "2025-03-31T23:59:59.999+00:00"
        assert "status" not in params
        assert [entry.id for entry in history.items] == [1, 2]
        assert [entry.status_label for entry in history.items] == ["Applied", "Expired"]


class TestProductAdmin:
    async def test_update_sends_only_changed_fields(
        self,
        client: DriptyardAdminClient,
        signed_in: Any,
        mock_responses: respx.MockRouter,
    ) -> None:
        route = mock_responses.put("/admin/products/9").mock(
            return_value=httpx.Response(200, json={"id": 9})
        )

        await client.products.update_product(
            9, UpdateProductRequest(price=15.5, condition="Used")
        )

        assert json.loads(route.calls.last.request.content) == {
            "price": 15.5,
            "condition": "Used",
        }

    def test_update_rejects_unknown_condition(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            UpdateProductRequest(condition="Broken")

    def test_update_rejects_negative_price(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            UpdateProductRequest(price=-1)

    async def test_status_filter(
        self,
        client: DriptyardAdminClient,
        signed_in: Any,
        mock_responses: respx.MockRouter,
        sample_products: list[dict[str, Any]],
    ) -> None:
        route = mock_responses.get("/admin/products").mock(
            return_value=httpx.Response(
                200, json={"products": sample_products, "total": 3}
            )
        )
        products = client.product_list()

        await products.set_filter("status", "flagged")

        assert route.calls.last.request.url.params["status"] == "flagged"
        assert all(product.is_healthy for product in products.items)
