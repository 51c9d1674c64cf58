"""Dashboard and audit models for the Driptyard admin SDK.

Copyright (c) 2025 Driptyard. All rights reserved.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class OverviewStats(BaseModel):
    """Dashboard counters."""

    model_config = ConfigDict(extra="allow")

    total_users: int = 0
    total_products: int = 0
    pending_verifications: int = 0
    flagged_content_count: int = 0
    total_users_change: float = 0.0
    total_products_change: float = 0.0
    pending_verifications_change: float = 0.0
    flagged_content_count_change: float = 0.0


def format_change(change: float | None) -> str:
    """Render a percentage delta as ``+5.0%`` / ``-2.3%``."""
    value = change or 0.0
    sign = "+" if value >= 0 else ""
    return f"{sign}{value:.1f}%"


class LogEntry(BaseModel):
    """One audit-trail row."""

    model_config = ConfigDict(extra="allow")

    id: int | str | None = None
    timestamp: datetime | None = None
    actor: str | None = None
    is_admin: bool = False
    action: str = "N/A"
    target: str = "N/A"

    @property
    def role_label(self) -> str:
        return "Admin" if self.is_admin else "Moderator"
