"""Moderator permission models for the Driptyard admin SDK.

Copyright (c) 2025 Driptyard. All rights reserved.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

PERMISSION_FIELDS = (
    "can_see_dashboard",
    "can_see_users",
    "can_manage_users",
    "can_see_listings",
    "can_manage_listings",
    "can_see_spotlight_history",
    "can_spotlight",
    "can_remove_spotlight",
    "can_see_flagged_content",
    "can_manage_flagged_content",
)

# Read capability -> capabilities that need it.
READ_DEPENDENCIES: dict[str, tuple[str, ...]] = {
    "can_see_users": ("can_manage_users",),
    "can_see_listings": ("can_manage_listings",),
    "can_see_spotlight_history": ("can_spotlight", "can_remove_spotlight"),
    "can_see_flagged_content": ("can_manage_flagged_content",),
}

REQUIRED_READ: dict[str, str] = {
    dependent: read
    for read, dependents in READ_DEPENDENCIES.items()
    for dependent in dependents
}


class ModeratorPermissions(BaseModel):
    """The ten independent moderator capabilities.

    The read/manage cascade here is advisory; the server decides what a
    moderator may actually do.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    can_see_dashboard: bool = False
    can_see_users: bool = False
    can_manage_users: bool = False
    can_see_listings: bool = False
    can_manage_listings: bool = False
    can_see_spotlight_history: bool = False
    can_spotlight: bool = False
    can_remove_spotlight: bool = False
    can_see_flagged_content: bool = False
    can_manage_flagged_content: bool = False

    @model_validator(mode="before")
    @classmethod
    def _null_means_false(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {
                key: bool(value) if key in PERMISSION_FIELDS else value
                for key, value in data.items()
            }
        return data

    def is_editable(self, field: str) -> bool:
        """Whether the toggle for ``field`` may be flipped right now."""
        _check_field(field)
        read = REQUIRED_READ.get(field)
        return read is None or getattr(self, read)

    def toggle(self, field: str) -> ModeratorPermissions:
        """Return a copy with ``field`` flipped.

        Turning a read capability off clears every capability that depends
        on it in the same update. Turning it back on re-enables nothing.
        A dependent capability whose read capability is off stays as it is.
        """
        if not self.is_editable(field):
            return self

        new_value = not getattr(self, field)
        updates = {field: new_value}
        if not new_value:
            for dependent in READ_DEPENDENCIES.get(field, ()):
                updates[dependent] = False
        return self.model_copy(update=updates)

    def granted(self) -> list[str]:
        return [field for field in PERMISSION_FIELDS if getattr(self, field)]

    def to_payload(self) -> dict[str, bool]:
        return {field: bool(getattr(self, field)) for field in PERMISSION_FIELDS}


def _check_field(field: str) -> None:
    if field not in PERMISSION_FIELDS:
        msg = f"Unknown permission: {field}"
        raise ValueError(msg)
