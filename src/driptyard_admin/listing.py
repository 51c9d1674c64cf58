"""Paginated list query controller.

A ``ListQuery`` owns the page index, search term and structured filters of
one admin table and re-fetches whenever any of them changes. The server is
the only source of pagination totals; the controller never patches items
locally.

Every fetch gets a sequence number. A response is applied only if it
belongs to the most recently issued fetch, so quick filter changes cannot
leave an older, slower response on screen.

Copyright (c) 2025 Driptyard. All rights reserved.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from enum import Enum
from typing import Any, Generic, TypeVar

from .exceptions import DriptyardAdminError, error_message
from .mapping import normalize_page
from .notifications import LoggingNotifier, Notifier

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Filter value meaning "no filter".
ALL = "all"

Fetcher = Callable[..., Awaitable[Any]]


class ListState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"


def _is_set(value: Any) -> bool:
    return value is not None and value != "" and value != ALL


class ListQuery(Generic[T]):
    """Binds search, filters and pagination of one table to server fetches.

    ``fetch`` is called with ``page`` and ``page_size`` keyword arguments,
    ``search`` when a search term is set, and one keyword argument per
    filter that currently has a value (``None``, ``""`` and ``"all"`` mean
    unset). It returns the raw response body, which is normalized through
    :func:`driptyard_admin.mapping.normalize_page`.

    Fetch failures never raise out of the controller: the table is emptied
    and the failure goes to the notifier, so the next input change simply
    tries again.

    The filter names given in ``filters`` are the only ones the table
    accepts, and ``searchable=False`` marks a table whose endpoint has no
    search parameter. Anything else is refused with ``ValueError`` when it
    is set, before a request is made.
    """

    def __init__(
        self,
        fetch: Fetcher,
        resource: str,
        parse_item: Callable[[Mapping[str, Any]], T],
        *,
        page_size: int = 10,
        filters: Mapping[str, Any] | None = None,
        item_filter: Callable[[T], bool] | None = None,
        notifier: Notifier | None = None,
        error_message: str = "Failed to load data",
        search_debounce: float = 0.0,
        searchable: bool = True,
    ) -> None:
        self._fetch_page = fetch
        self._searchable = searchable
        self._resource = resource
        self._parse_item = parse_item
        self._item_filter = item_filter
        self._notifier = notifier or LoggingNotifier()
        self._error_message = error_message
        self._search_debounce = search_debounce

        self._default_filters = dict(filters or {})
        self._filters = dict(self._default_filters)
        self._search = ""
        self._page = 1
        self._page_size = page_size

        self._items: list[T] = []
        self._total = 0
        self._total_pages = 1
        self._state = ListState.IDLE
        self._last_error: Exception | None = None

        self._latest_request = 0
        self._debounce_timer: asyncio.Task[None] | None = None
        self._closed = False

    @property
    def page(self) -> int:
        return self._page

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def search_term(self) -> str:
        return self._search

    @property
    def filters(self) -> dict[str, Any]:
        return dict(self._filters)

    @property
    def items(self) -> list[T]:
        return list(self._items)

    @property
    def total(self) -> int:
        return self._total

    @property
    def total_pages(self) -> int:
        return self._total_pages

    @property
    def state(self) -> ListState:
        return self._state

    @property
    def loading(self) -> bool:
        return self._state is ListState.LOADING

    @property
    def last_error(self) -> Exception | None:
        return self._last_error

    @property
    def searchable(self) -> bool:
        return self._searchable

    @property
    def filter_names(self) -> frozenset[str]:
        return frozenset(self._default_filters)

    @property
    def is_empty(self) -> bool:
        return not self._items

    @property
    def can_previous(self) -> bool:
        return not self.loading and self._page > 1

    @property
    def can_next(self) -> bool:
        return not self.loading and self._page < self._total_pages

    @property
    def active_filter_count(self) -> int:
        count = sum(1 for value in self._filters.values() if _is_set(value))
        return count + (1 if self._search else 0)

    @property
    def has_active_filters(self) -> bool:
        return self.active_filter_count > 0

    @property
    def range_label(self) -> str:
        """``"1-3 of 25"`` style summary of the visible rows."""
        if not self._items:
            return f"0 of {self._total}"
        start = (self._page - 1) * self._page_size + 1
        end = start + len(self._items) - 1
        return f"{start}-{end} of {self._total}"

    async def load(self) -> None:
        """Initial fetch."""
        await self._fetch()

    async def refresh(self) -> None:
        """Re-run the fetch for the current inputs."""
        await self._fetch()

    async def set_search(self, term: str) -> None:
        """Change the search term, going back to page 1.

        Raises:
            ValueError: If this table has no search.

        """
        if not self._searchable:
            raise ValueError(f"The {self._resource} list does not support search")
        if term == self._search:
            return
        self._search = term
        self._page = 1
        if self._search_debounce > 0:
            await self._debounced_fetch()
        else:
            await self._fetch()

    async def set_filter(self, name: str, value: Any) -> None:
        """Change one structured filter, going back to page 1."""
        await self.set_filters(**{name: value})

    async def set_filters(self, **values: Any) -> None:
        """Change several structured filters at once, going back to page 1.

        Raises:
            ValueError: If a name is not one of this table's filters.

        """
        unknown = sorted(set(values) - set(self._default_filters))
        if unknown:
            raise ValueError(
                f"Unknown {self._resource} filter(s): {', '.join(unknown)}"
            )
        changed = {k: v for k, v in values.items() if self._filters.get(k) != v}
        if not changed:
            return
        self._filters.update(changed)
        self._page = 1
        await self._fetch()

    async def clear_filters(self) -> None:
        """Drop the search term and reset every filter to its default."""
        self._search = ""
        self._filters = dict(self._default_filters)
        self._page = 1
        await self._fetch()

    async def go_to_page(self, page: int) -> bool:
        """Jump to ``page``.

        Returns:
            False when the move is not allowed (out of range, same page, or a
            fetch is in flight), True once the new page has been fetched.

        """
        if self.loading or page == self._page:
            return False
        if page < 1 or page > self._total_pages:
            return False
        self._page = page
        await self._fetch()
        return True

    async def next_page(self) -> bool:
        if not self.can_next:
            return False
        return await self.go_to_page(self._page + 1)

    async def previous_page(self) -> bool:
        if not self.can_previous:
            return False
        return await self.go_to_page(self._page - 1)

    def close(self) -> None:
        """Stop applying responses; fetches still in flight are ignored."""
        self._closed = True
        self._state = ListState.IDLE
        self._cancel_debounce_timer()

    def _params(self) -> dict[str, Any]:
        params: dict[str, Any] = {"page": self._page, "page_size": self._page_size}
        if self._search:
            params["search"] = self._search
        for name, value in self._filters.items():
            if _is_set(value):
                params[name] = value
        return params

    def _is_current(self, request_id: int) -> bool:
        return not self._closed and request_id == self._latest_request

    async def _fetch(self) -> None:
        if self._closed:
            return
        self._cancel_debounce_timer()

        self._latest_request += 1
        request_id = self._latest_request
        page, page_size = self._page, self._page_size
        self._state = ListState.LOADING

        try:
            await self._load_page(request_id, page, page_size)
        except Exception as exc:
            if self._is_current(request_id):
                self._show_error(exc)
        finally:
            if self._is_current(request_id):
                self._state = ListState.IDLE

    def _show_error(self, exc: Exception) -> None:
        if isinstance(exc, DriptyardAdminError):
            logger.warning("Failed to load %s: %s", self._resource, exc.message)
            message = error_message(exc, self._error_message)
        else:
            logger.exception("Unexpected error loading %s", self._resource)
            message = self._error_message
        self._items = []
        self._total = 0
        self._total_pages = 1
        self._last_error = exc
        self._notifier.error(message)

    async def _load_page(self, request_id: int, page: int, page_size: int) -> None:
        payload = await self._fetch_page(**self._params())

        if not self._is_current(request_id):
            logger.debug(
                "Discarding stale %s response (request %d, latest %d)",
                self._resource,
                request_id,
                self._latest_request,
            )
            return

        result = normalize_page(
            payload,
            self._resource,
            self._parse_item,
            page=page,
            page_size=page_size,
        )
        items = result.items
        if self._item_filter is not None:
            items = [item for item in items if self._item_filter(item)]

        self._items = items
        self._total = result.total
        self._total_pages = result.total_pages
        self._page_size = result.page_size
        self._last_error = None

    async def _debounced_fetch(self) -> None:
        self._cancel_debounce_timer()
        timer = asyncio.create_task(self._fetch_after_delay())
        self._debounce_timer = timer
        # A newer keystroke cancels this timer; that is not an error here.
        await asyncio.wait({timer})
        if not timer.cancelled():
            timer.result()

    async def _fetch_after_delay(self) -> None:
        await asyncio.sleep(self._search_debounce)
        # Fired: from here on newer input supersedes this fetch instead of cancelling it.
        if self._debounce_timer is asyncio.current_task():
            self._debounce_timer = None
        await self._fetch()

    def _cancel_debounce_timer(self) -> None:
        if self._debounce_timer is not None:
            self._debounce_timer.cancel()
            self._debounce_timer = None
