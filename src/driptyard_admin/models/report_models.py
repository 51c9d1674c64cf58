"""Flagged-content models for the Driptyard admin SDK.

Copyright (c) 2025 Driptyard. All rights reserved.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

PENDING_STATUS = "pending"
SUCCESS_STATUSES = ("resolved", "approved", "cleared")


class FlaggedItem(BaseModel):
    """A reported listing with its latest report and cumulative count."""

    id: int | str | None = None
    product_id: int | str | None = None
    report_id: int | str | None = None
    type: str = "product"
    title: str = "Untitled Product"
    price: float | None = None
    reason: str = "No reason provided"
    reported_at: datetime | None = None
    status: str = PENDING_STATUS
    images: list[str] = Field(default_factory=list)
    report_count: int = 0
    is_active: bool | None = None
    owner_id: int | str | None = None
    raw: dict[str, Any] = Field(default_factory=dict)

    @property
    def image(self) -> str:
        return self.images[0] if self.images else ""

    @property
    def is_pending(self) -> bool:
        return self.status.lower() == PENDING_STATUS

    @property
    def is_resolved(self) -> bool:
        return self.status.lower() in SUCCESS_STATUSES
