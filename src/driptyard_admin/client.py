"""Driptyard admin client using service composition.

Copyright (c) 2025 Driptyard. All rights reserved.
"""

from __future__ import annotations

from typing import Any, Self

from ._admin import AdminService
from ._auth import AuthService
from ._base import BaseClient, SessionExpiredHook
from ._moderators import ModeratorService
from ._products import ProductService
from ._reports import ReportService
from ._tokens import FileTokenStore, TokenStore
from ._user import UserService
from .actions import ActionRunner
from .config import ClientSettings, get_settings
from .listing import ALL, ListQuery
from .mapping import (
    map_admin_user,
    map_log,
    map_product,
    map_report,
    map_spotlight_history,
)
from .models import (
    AdminProduct,
    AdminUser,
    FlaggedItem,
    LogEntry,
    SpotlightHistoryEntry,
)
from .notifications import LoggingNotifier, Notifier

SPOTLIGHT_HISTORY_PAGE_SIZE = 20


class DriptyardAdminClient:
    """Driptyard admin client using service composition."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        token_store: TokenStore | None = None,
        on_session_expired: SessionExpiredHook | None = None,
        login_url: str = "/admin/login",
        notifier: Notifier | None = None,
        page_size: int = 10,
        search_debounce: float = 0.0,
    ) -> None:
        """Initialize Driptyard admin client.

        Args:
            base_url: Base URL of the Driptyard API
            timeout: Request timeout in seconds
            token_store: Session token storage (in memory if None)
            on_session_expired: Called with ``login_url`` when the session ends
            login_url: Login entry point
            notifier: Where list and action outcomes are reported
            page_size: Default rows per page for list queries
            search_debounce: Seconds to wait after a search change before fetching

        """
        self._client = BaseClient(
            base_url=base_url,
            timeout=timeout,
            token_store=token_store,
            on_session_expired=on_session_expired,
            login_url=login_url,
        )
        self.notifier: Notifier = notifier or LoggingNotifier()
        self.page_size = page_size
        self.search_debounce = search_debounce

        # Initialize service clients
        self.auth = AuthService(self._client)
        self.users = UserService(self._client)
        self.products = ProductService(self._client)
        self.reports = ReportService(self._client)
        self.moderators = ModeratorService(self._client)
        self.admin = AdminService(self._client)

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings | None = None,
        *,
        on_session_expired: SessionExpiredHook | None = None,
        notifier: Notifier | None = None,
    ) -> Self:
        """Build a client from environment settings.

        Args:
            settings: Settings to use; read from the environment if None
            on_session_expired: Called with the login URL when the session ends
            notifier: Where list and action outcomes are reported

        Returns:
            A configured client.

        """
        settings = settings or get_settings()
        token_store = (
            FileTokenStore(settings.token_file) if settings.token_file else None
        )
        return cls(
            settings.api_base_url,
            timeout=settings.timeout,
            token_store=token_store,
            on_session_expired=on_session_expired,
            login_url=settings.login_url,
            notifier=notifier,
            page_size=settings.default_page_size,
            search_debounce=settings.search_debounce,
        )

    async def __aenter__(self) -> Self:
        """Async context manager entry.

        Returns:
            The client instance.

        """
        await self._client.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        await self._client.__aexit__(exc_type, exc_val, exc_tb)

    async def close(self) -> None:
        """Close the client and clean up resources."""
        await self._client.close()

    @property
    def token_store(self) -> TokenStore:
        return self._client.token_store

    def set_access_token(self, token: str) -> None:
        """Set access token for authenticated requests.

        Args:
            token: Access token to set

        """
        self._client.set_access_token(token)

    def get_access_token(self) -> str | None:
        """Get the current access token.

        Returns:
            Current access token or None if not set.

        """
        return self._client.get_access_token()

    def set_refresh_token(self, token: str) -> None:
        self._client.set_refresh_token(token)

    def clear_session(self) -> None:
        """Forget stored tokens without firing the session-expired hook."""
        self._client.clear_session()

    @property
    def is_authenticated(self) -> bool:
        return self._client.get_access_token() is not None

    def action_runner(self) -> ActionRunner:
        """New action runner reporting to this client's notifier."""
        return ActionRunner(self.notifier)

    def product_list(self) -> ListQuery[AdminProduct]:
        """List query for the listings table, filterable by ``status``."""
        return self._list(
            self.products.list_products,
            "products",
            map_product,
            filters={"status": ALL},
            error_message="Failed to load products",
        )

    def user_list(self) -> ListQuery[AdminUser]:
        """List query for the users table; admin accounts never show up.

        Searchable, with no structured filters.
        """
        return self._list(
            self.users.list_users,
            "users",
            map_admin_user,
            item_filter=lambda user: not user.is_admin,
            error_message="Failed to load users",
        )

    def moderator_list(self) -> ListQuery[AdminUser]:
        """List query for moderators, filterable by ``status`` (active/inactive)."""
        return self._list(
            self.moderators.list_moderators,
            "moderators",
            map_admin_user,
            filters={"status": ALL},
            error_message="Failed to load moderators",
        )

    def report_list(self) -> ListQuery[FlaggedItem]:
        """List query for the flagged-content queue, filterable by ``status``.

        Older servers ignore the status parameter, so rows are also matched
        against the selected status locally.
        """

        def matches_status(item: FlaggedItem) -> bool:
            status = query.filters.get("status")
            if status in (None, "", ALL):
                return True
            return item.status.lower() == str(status).lower()

        query = self._list(
            self.reports.list_reports,
            "reports",
            map_report,
            filters={"status": ALL},
            item_filter=matches_status,
            error_message="Failed to load reported items",
        )
        return query

    def spotlight_history_list(self) -> ListQuery[SpotlightHistoryEntry]:
        """List query for the spotlight audit trail.

        Filters: ``product_id``, ``status``, ``date_from`` and ``date_to``;
        there is no free-text search.
        """
        return self._list(
            self.products.get_spotlight_history,
            "spotlight_history",
            map_spotlight_history,
            page_size=SPOTLIGHT_HISTORY_PAGE_SIZE,
            filters={
                "product_id": None,
                "status": ALL,
                "date_from": None,
                "date_to": None,
            },
            error_message="Failed to load spotlight history",
            searchable=False,
        )

    def log_list(self) -> ListQuery[LogEntry]:
        """List query for the audit log, filterable by ``role``, ``action`` and ``date``.

        The log endpoint has no free-text search.
        """
        return self._list(
            self.admin.list_logs,
            "logs",
            map_log,
            filters={"role": ALL, "action": ALL, "date": None},
            error_message="Failed to load logs",
            searchable=False,
        )

    def _list(
        self,
        fetch: Any,
        resource: str,
        parse_item: Any,
        *,
        page_size: int | None = None,
        **options: Any,
    ) -> ListQuery[Any]:
        return ListQuery(
            fetch,
            resource,
            parse_item,
            page_size=page_size or self.page_size,
            notifier=self.notifier,
            search_debounce=self.search_debounce,
            **options,
        )
