"""Conftest for integration tests against a running Driptyard API."""

from __future__ import annotations

import os
from typing import AsyncGenerator

import httpx
import pytest
from driptyard_admin import DriptyardAdminClient


@pytest.fixture(scope="session")
def server_url() -> str:
    """URL of the server under test; skips the suite when nothing answers there."""
    url = os.environ.get("DRIPTYARD_ADMIN_TEST_URL", "http://localhost:8000")
    try:
        httpx.get(url, timeout=2.0)
    except httpx.TransportError as e:
        pytest.skip(f"No Driptyard API server running on {url}: {e}")
    return url


@pytest.fixture
def admin_credentials() -> tuple[str, str]:
    email = os.environ.get("DRIPTYARD_ADMIN_TEST_EMAIL")
    password = os.environ.get("DRIPTYARD_ADMIN_TEST_PASSWORD")
    if not email or not password:
        pytest.skip("DRIPTYARD_ADMIN_TEST_EMAIL / DRIPTYARD_ADMIN_TEST_PASSWORD not set")
    return email, password


@pytest.fixture
async def integration_client(server_url: str) -> AsyncGenerator[DriptyardAdminClient, None]:
    """Create a client for integration tests."""
    async with DriptyardAdminClient(base_url=server_url, timeout=10.0) as client:
        yield client
