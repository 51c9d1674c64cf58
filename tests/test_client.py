"""Basic tests for Driptyard admin client composition and settings.

Copyright (c) 2025 Driptyard. All rights reserved.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest
from driptyard_admin import (
    ClientSettings,
    DriptyardAdminClient,
    FileTokenStore,
    ListQuery,
    MemoryTokenStore,
    configure_logging,
)

if TYPE_CHECKING:
    from pathlib import Path

# Create a module-level logger
logger = logging.getLogger(__name__)

SERVICES = ("auth", "users", "products", "reports", "moderators", "admin")


def test_client_initialization() -> None:
    """Test client initialization with proper service composition.

    Raises:
        AssertionError: If any required service or base client is missing.

    """
    client = DriptyardAdminClient("https://api.test.com")

    for service in SERVICES:
        if not hasattr(client, service):
            msg = f"Client missing '{service}' service"
            raise AssertionError(msg)

    if not isinstance(client.token_store, MemoryTokenStore):
        msg = "Client should default to an in-memory token store"
        raise AssertionError(msg)


async def test_client_context_manager() -> None:
    """Test client works as async context manager."""
    async with DriptyardAdminClient("https://api.test.com") as client:
        assert client.auth is not None


def test_token_management() -> None:
    """Test client token management functionality."""
    client = DriptyardAdminClient("https://api.test.com")

    client.set_access_token("mock-test-token-123")
    client.set_refresh_token("mock-refresh-token")
    assert client.get_access_token() == "mock-test-token-123"
    assert client.is_authenticated

    client.clear_session()
    assert client.get_access_token() is None
    assert client.token_store.get("refresh_token") is None
    assert not client.is_authenticated


@pytest.mark.parametrize(
    "factory",
    [
        "product_list",
        "user_list",
        "moderator_list",
        "report_list",
        "spotlight_history_list",
        "log_list",
    ],
)
def test_list_factories(factory: str) -> None:
    client = DriptyardAdminClient("https://api.test.com", page_size=25)

    query = getattr(client, factory)()

    assert isinstance(query, ListQuery)
    assert query.page == 1
    expected = 20 if factory == "spotlight_history_list" else 25
    assert query.page_size == expected
    assert not query.has_active_filters


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("DRIPTYARD_ADMIN_API_BASE_URL", raising=False)

        settings = ClientSettings(_env_file=None)

        assert settings.api_base_url == "http://localhost:8000"
        assert settings.timeout == 30.0
        assert settings.login_url == "/admin/login"
        assert settings.token_file is None

    def test_environment(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("DRIPTYARD_ADMIN_API_BASE_URL", "https://api.driptyard.test")
        monkeypatch.setenv("DRIPTYARD_ADMIN_TIMEOUT", "12.5")
        monkeypatch.setenv("DRIPTYARD_ADMIN_TOKEN_FILE", str(tmp_path / "session.json"))
        monkeypatch.setenv("DRIPTYARD_ADMIN_DEFAULT_PAGE_SIZE", "50")

        settings = ClientSettings(_env_file=None)
        client = DriptyardAdminClient.from_settings(settings)

        assert client._client.base_url == "https://api.driptyard.test"
        assert client._client.timeout == 12.5
        assert isinstance(client.token_store, FileTokenStore)
        assert client.product_list().page_size == 50

    def test_configure_logging(self) -> None:
        configure_logging("DEBUG", http_level="ERROR")

        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.ERROR

        configure_logging("nonsense", http_level="WARNING")
        assert logging.getLogger().level == logging.INFO
