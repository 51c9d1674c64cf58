"""Test configuration and common utilities.

Copyright (c) 2025 Driptyard. All rights reserved.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest
import respx
from driptyard_admin import DriptyardAdminClient, MemoryTokenStore, RecordingNotifier

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Generator


@pytest.fixture
def base_url() -> str:
    """Return base URL for test server.

    Returns:
        str: The base URL for testing.

    """
    return "https://api.driptyard.test"


@pytest.fixture
def token_store() -> MemoryTokenStore:
    return MemoryTokenStore()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def expired_sessions() -> list[str]:
    """Login URLs handed to the session-expired hook, in call order."""
    return []


@pytest.fixture
async def client(
    base_url: str,
    token_store: MemoryTokenStore,
    notifier: RecordingNotifier,
    expired_sessions: list[str],
) -> AsyncGenerator[DriptyardAdminClient, None]:
    """Create test client.

    Yields:
        DriptyardAdminClient: Configured test client.

    """
    async with DriptyardAdminClient(
        base_url=base_url,
        timeout=5.0,
        token_store=token_store,
        on_session_expired=expired_sessions.append,
        notifier=notifier,
    ) as client:
        yield client


@pytest.fixture
def mock_responses(base_url: str) -> Generator[respx.MockRouter, None, None]:
    """Mock HTTP responses.

    Routes are relative to ``base_url``; any request without a route fails.

    Yields:
        The mock router for HTTP requests.

    """
    with respx.mock(base_url=base_url, assert_all_called=False) as router:
        yield router


@pytest.fixture
def signed_in(token_store: MemoryTokenStore) -> MemoryTokenStore:
    """Token store holding a valid-looking session."""
    token_store.set("access_token", "old-access-token")
    token_store.set("refresh_token", "test-refresh-token")
    return token_store


@pytest.fixture
def sample_admin_user() -> dict[str, Any]:
    """Sample admin user as returned by ``/auth/login``.

    Returns:
        dict[str, Any]: Sample user data.

    """
    return {
        "user_id": 1,
        "username": "admin",
        "email": "admin@driptyard.com",
        "first_name": "Ada",
        "last_name": "Admin",
        "is_admin": True,
        "is_moderator": False,
    }


@pytest.fixture
def sample_login_response(sample_admin_user: dict[str, Any]) -> dict[str, Any]:
    """Sample login response.

    Returns:
        dict[str, Any]: Sample login response data.

    """
    return {
        "access_token": "test-access-token",
        "refresh_token": "test-refresh-token",
        "token_type": "bearer",
        "user": sample_admin_user,
    }


@pytest.fixture
def sample_products() -> list[dict[str, Any]]:
    return [
        {
            "id": i,
            "title": f"Vintage jacket {i}",
            "price": 40.0 + i,
            "condition": "Like New",
            "is_active": True,
            "is_verified": True,
            "is_flagged": False,
            "is_sold": False,
            "is_spotlighted": False,
            "owner_id": 7,
            "images": [f"https://cdn.driptyard.test/{i}.jpg"],
        }
        for i in range(1, 4)
    ]
