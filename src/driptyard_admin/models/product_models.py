"""Listing and spotlight models for the Driptyard admin SDK.

Copyright (c) 2025 Driptyard. All rights reserved.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

CONDITIONS = ("New", "Like New", "Used", "Heavily Used")


class AdminProduct(BaseModel):
    """A listing row in the admin products table."""

    model_config = ConfigDict(extra="allow")

    id: int | str | None = None
    title: str = "Untitled listing"
    price: float = 0.0
    condition: str | None = None
    is_active: bool = True
    is_verified: bool = False
    is_flagged: bool = False
    is_sold: bool = False
    is_spotlighted: bool = False
    owner_id: int | str | None = None
    owner_username: str | None = None
    images: list[str] = Field(default_factory=list)
    created_at: datetime | None = None

    @property
    def is_healthy(self) -> bool:
        return self.is_active and self.is_verified and not self.is_flagged

    @property
    def image(self) -> str:
        return self.images[0] if self.images else ""


class UpdateProductRequest(BaseModel):
    """Fields an admin may change on a listing."""

    title: str | None = None
    price: float | None = Field(default=None, ge=0)
    condition: str | None = None
    is_active: bool | None = None
    is_verified: bool | None = None

    @field_validator("condition")
    @classmethod
    def _condition(cls, value: str | None) -> str | None:
        if value is not None and value not in CONDITIONS:
            raise ValueError(f"Condition must be one of: {', '.join(CONDITIONS)}")
        return value

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class SpotlightStatus(str, Enum):
    ACTIVE = "active"
    EXPIRED = "expired"


class Spotlight(BaseModel):
    """A time-boxed promotional placement on one listing."""

    model_config = ConfigDict(extra="allow")

    id: int | str | None = None
    product_id: int | str | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    duration_hours: float | None = None
    applied_by_username: str | None = None
    status: str = SpotlightStatus.ACTIVE.value

    @property
    def is_active(self) -> bool:
        return self.status.lower() == SpotlightStatus.ACTIVE.value


class ProductSpotlight(BaseModel):
    """Spotlight state of a single listing."""

    model_config = ConfigDict(extra="allow")

    is_spotlighted: bool = False
    spotlight: Spotlight | None = None

    @property
    def available_action(self) -> str:
        """The spotlight control a listing row should offer."""
        return "remove_spotlight" if self.is_spotlighted else "spotlight"


class ApplySpotlightRequest(BaseModel):
    """Spotlight placement, bounded either by a duration or an explicit end."""

    duration_hours: int | None = Field(default=None, gt=0)
    custom_end_time: datetime | None = None

    @model_validator(mode="after")
    def _one_bound(self) -> ApplySpotlightRequest:
        if (self.duration_hours is None) == (self.custom_end_time is None):
            raise ValueError("Provide either duration_hours or custom_end_time")
        return self

    def to_payload(self) -> dict[str, Any]:
        if self.duration_hours is not None:
            return {"duration_hours": self.duration_hours}
        return {"custom_end_time": self.custom_end_time.isoformat()}


class SpotlightHistoryEntry(BaseModel):
    """One row of the spotlight audit trail."""

    model_config = ConfigDict(extra="allow")

    id: int | str | None = None
    product_id: int | str | None = None
    product_title: str = "Untitled listing"
    product_image: str | None = None
    seller_username: str | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    duration_hours: float | None = None
    applied_by_username: str | None = None
    action: str | None = None

    @property
    def status_label(self) -> str:
        action = (self.action or "").lower()
        if action == "applied":
            return "Applied"
        if action == "expired":
            return "Expired"
        return action or "N/A"
