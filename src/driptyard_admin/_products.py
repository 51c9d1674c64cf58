"""Listing and spotlight service for the Driptyard admin SDK.

Copyright (c) 2025 Driptyard. All rights reserved.
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Any

from ._base import BaseClient, RequestConfig
from .mapping import map_product_spotlight
from .models import ApplySpotlightRequest, ProductSpotlight, UpdateProductRequest

ProductId = int | str


def start_of_day(day: date) -> str:
    """ISO timestamp for 00:00:00.000 UTC on ``day``."""
    return datetime.combine(day, time.min, tzinfo=timezone.utc).isoformat(
        timespec="milliseconds"
    )


def end_of_day(day: date) -> str:
    """ISO timestamp for 23:59:59.999 UTC on ``day``."""
    return datetime.combine(day, time.max, tzinfo=timezone.utc).isoformat(
        timespec="milliseconds"
    )


class ProductService:
    """Service for admin listing moderation and spotlight placement."""

    def __init__(self, client: BaseClient) -> None:
        """Initialize product service.

        Args:
            client: The base HTTP client

        """
        self._client = client

    async def list_products(
        self,
        page: int = 1,
        page_size: int = 10,
        search: str | None = None,
        status: str | None = None,
    ) -> dict[str, Any]:
        """Get one page of listings.

        Args:
            page: 1-based page number
            page_size: Rows per page
            search: Search query
            status: Listing status filter

        Returns:
            Listings and pagination info.

        """
        params: dict[str, Any] = {"page": page, "page_size": page_size}
        if search:
            params["search"] = search
        if status:
            params["status"] = status

        config = RequestConfig(params=params)
        return await self._client.make_request("GET", "/admin/products", config=config)

    async def update_product(
        self,
        product_id: ProductId,
        request: UpdateProductRequest,
    ) -> dict[str, Any]:
        """Update a listing as an admin.

        Args:
            product_id: Listing ID
            request: Fields to change

        Returns:
            Updated listing data.

        """
        config = RequestConfig(json_data=request.to_payload())
        return await self._client.make_request(
            "PUT", f"/admin/products/{product_id}", config=config
        )

    async def delete_product(self, product_id: ProductId) -> dict[str, Any]:
        """Delete a listing.

        Args:
            product_id: Listing ID

        Returns:
            Deletion confirmation.

        """
        return await self._client.make_request(
            "DELETE", f"/admin/products/{product_id}"
        )

    async def apply_spotlight(
        self,
        product_id: ProductId,
        request: ApplySpotlightRequest,
    ) -> dict[str, Any]:
        """Feature a listing for a bounded time.

        Args:
            product_id: Listing ID
            request: Duration in hours or an explicit end time

        Returns:
            Created spotlight data.

        """
        config = RequestConfig(json_data=request.to_payload())
        return await self._client.make_request(
            "POST", f"/admin/products/{product_id}/spotlight", config=config
        )

    async def get_spotlight(self, product_id: ProductId) -> ProductSpotlight:
        """Get the spotlight currently attached to a listing.

        Args:
            product_id: Listing ID

        Returns:
            Whether the listing is spotlighted, with placement details.

        """
        data = await self._client.make_request(
            "GET", f"/admin/products/{product_id}/spotlight"
        )
        return map_product_spotlight(data)

    async def remove_spotlight(self, product_id: ProductId) -> dict[str, Any]:
        """End a listing's spotlight early.

        Args:
            product_id: Listing ID

        Returns:
            Removal confirmation.

        """
        return await self._client.make_request(
            "DELETE", f"/admin/products/{product_id}/spotlight"
        )

    async def get_spotlight_history(
        self,
        page: int = 1,
        page_size: int = 20,
        product_id: ProductId | None = None,
        status: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> dict[str, Any]:
        """Get one page of the spotlight audit trail.

        Args:
            page: 1-based page number
            page_size: Rows per page
            product_id: Only this listing
            status: Spotlight status filter
            date_from: First day included
            date_to: Last day included

        Returns:
            History rows and pagination info.

        """
        params: dict[str, Any] = {"page": page, "page_size": page_size}
        if product_id:
            params["product_id"] = product_id
        if status:
            params["status"] = status
        if date_from:
            params["date_from"] = start_of_day(date_from)
        if date_to:
            params["date_to"] = end_of_day(date_to)

        config = RequestConfig(params=params)
        return await self._client.make_request(
            "GET", "/admin/spotlight/history", config=config
        )
