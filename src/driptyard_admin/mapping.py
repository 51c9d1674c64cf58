"""Response mapping from server payloads to view models.

The backend is not consistent about field names: the same quantity may
arrive under different keys depending on the endpoint or the server
release. Every such alias lives in the tables below, highest priority
first, so a backend rename touches this module and nothing else.

Mapping never raises on a malformed payload. Missing totals fall back to
safe defaults and items that cannot be read are dropped, so a bad
response renders as an empty table instead of an error.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any, TypeVar

import pydantic

from .models import (
    AdminProduct,
    AdminUser,
    CurrentUser,
    FlaggedItem,
    LogEntry,
    ModeratorPermissions,
    Page,
    ProductSpotlight,
    SpotlightHistoryEntry,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

RESPONSE_MAPPING_VERSION = 1

PAGE_FIELDS: dict[str, tuple[str, ...]] = {
    "total_pages": ("total_pages", "pages"),
    "total": ("total", "total_count", "count"),
    "page": ("page", "current_page"),
    "page_size": ("page_size", "per_page", "limit"),
}

LIST_KEYS: dict[str, tuple[str, ...]] = {
    "products": ("products", "items", "results"),
    "users": ("users", "items", "results"),
    "moderators": ("moderators", "users", "items"),
    "reports": ("reports", "items"),
    "spotlight_history": ("history", "items"),
    "logs": ("logs", "items"),
}

USER_FIELDS: dict[str, tuple[str, ...]] = {
    "id": ("id", "user_id"),
    "listing_count": ("listing_count", "product_count", "products_count"),
    "avatar_url": ("avatar_url", "avatar"),
}

LOG_FIELDS: dict[str, tuple[str, ...]] = {
    "actor": ("admin", "admin_name", "user", "username", "actor"),
    "target": ("target", "target_id", "target_name"),
    "timestamp": ("timestamp", "created_at"),
}

SPOTLIGHT_HISTORY_FIELDS: dict[str, tuple[str, ...]] = {
    "id": ("id", "spotlight_id"),
    "start_time": ("start_time", "created_at"),
}

REPORT_FIELDS: dict[str, tuple[str, ...]] = {
    "id": ("product_id", "latest_report_id"),
    "product_id": ("product_id",),
    "report_id": ("latest_report_id", "report_id"),
    "title": ("product_title",),
    "price": ("product_price",),
    "reason": ("latest_report_reason",),
    "reported_at": ("latest_report_created_at", "first_reported_at"),
    "status": ("latest_report_status",),
    "images": ("product_images",),
    "report_count": ("report_count",),
    "is_active": ("product_is_active",),
    "owner_id": ("product_owner_id",),
}


def pick(payload: Mapping[str, Any], keys: Sequence[str], default: Any = None) -> Any:
    """Return the first present, non-null value among ``keys``."""
    for key in keys:
        value = payload.get(key)
        if value is not None:
            return value
    return default


def remap(item: Mapping[str, Any], fields: Mapping[str, Sequence[str]]) -> dict[str, Any]:
    """Copy ``item`` with each canonical field filled from its aliases."""
    mapped = dict(item)
    for field, aliases in fields.items():
        value = pick(item, aliases)
        if value is None:
            mapped.pop(field, None)
        else:
            mapped[field] = value
    return mapped


def _positive_int(value: Any, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def _non_negative_int(value: Any, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 0 else default


def extract_items(payload: Any, resource: str) -> list[Any]:
    """The list payload of a paginated response, or ``[]``."""
    if isinstance(payload, list):
        return payload
    if not isinstance(payload, Mapping):
        return []
    items = pick(payload, LIST_KEYS[resource], default=[])
    return items if isinstance(items, list) else []


def normalize_page(
    payload: Any,
    resource: str,
    parse_item: Callable[[Mapping[str, Any]], T],
    *,
    page: int = 1,
    page_size: int = 10,
) -> Page[T]:
    """Turn a paginated server response into a :class:`Page`.

    ``page`` and ``page_size`` are what the caller asked for; they stand in
    when the server omits them. ``total_pages`` defaults to 1, and ``total``
    to the number of items received.
    """
    meta: Mapping[str, Any] = payload if isinstance(payload, Mapping) else {}
    items: list[T] = []
    for raw in extract_items(payload, resource):
        if not isinstance(raw, Mapping):
            continue
        try:
            items.append(parse_item(raw))
        except pydantic.ValidationError as exc:
            logger.debug("Skipping unreadable %s item: %s", resource, exc)

    return Page(
        items=items,
        page=_positive_int(pick(meta, PAGE_FIELDS["page"]), page),
        page_size=_positive_int(pick(meta, PAGE_FIELDS["page_size"]), page_size),
        total=_non_negative_int(pick(meta, PAGE_FIELDS["total"]), len(items)) or len(items),
        total_pages=_positive_int(pick(meta, PAGE_FIELDS["total_pages"]), 1),
    )


def map_current_user(payload: Mapping[str, Any]) -> CurrentUser:
    return CurrentUser.model_validate(remap(payload, USER_FIELDS))


def map_admin_user(payload: Mapping[str, Any]) -> AdminUser:
    return AdminUser.model_validate(remap(payload, USER_FIELDS))


def map_product(payload: Mapping[str, Any]) -> AdminProduct:
    return AdminProduct.model_validate(payload)


def map_product_spotlight(payload: Any) -> ProductSpotlight:
    if not isinstance(payload, Mapping):
        return ProductSpotlight()
    return ProductSpotlight.model_validate(payload)


def map_spotlight_history(payload: Mapping[str, Any]) -> SpotlightHistoryEntry:
    return SpotlightHistoryEntry.model_validate(remap(payload, SPOTLIGHT_HISTORY_FIELDS))


def map_report(payload: Mapping[str, Any]) -> FlaggedItem:
    mapped = {
        field: value
        for field, aliases in REPORT_FIELDS.items()
        if (value := pick(payload, aliases)) is not None
    }
    mapped["raw"] = dict(payload)
    return FlaggedItem.model_validate(mapped)


def map_log(payload: Mapping[str, Any]) -> LogEntry:
    mapped = remap(payload, LOG_FIELDS)
    actor = mapped.get("actor")
    # Some releases nest the actor as an object.
    if isinstance(actor, Mapping):
        mapped["actor"] = pick(actor, ("username", "name", "email"))
    if mapped.get("target") is not None:
        mapped["target"] = str(mapped["target"])
    return LogEntry.model_validate(mapped)


def map_permissions(payload: Any) -> ModeratorPermissions:
    if not isinstance(payload, Mapping):
        return ModeratorPermissions()
    return ModeratorPermissions.model_validate(payload)
