"""Integration tests for the Driptyard admin SDK.

These tests run against a real Driptyard API server to ensure the SDK works
end-to-end. Set ``DRIPTYARD_ADMIN_TEST_URL`` and, for the signed-in tests,
``DRIPTYARD_ADMIN_TEST_EMAIL`` / ``DRIPTYARD_ADMIN_TEST_PASSWORD``.
"""

import pytest
from driptyard_admin import AuthenticationError, LoginError

pytestmark = pytest.mark.integration


class TestAnonymous:
    """Calls made without a session."""

    async def test_login_with_invalid_credentials(self, integration_client):
        """Test login with invalid credentials returns a normalized error."""
        with pytest.raises(LoginError) as exc_info:
            await integration_client.auth.login("nobody@driptyard.test", "wrong_password")

        assert exc_info.value.message
        assert integration_client.get_access_token() is None

    async def test_admin_endpoints_require_authentication(self, integration_client):
        """Test that admin endpoints reject anonymous calls."""
        with pytest.raises(AuthenticationError):
            await integration_client.admin.get_overview_stats()

    async def test_restore_without_session(self, integration_client):
        assert await integration_client.auth.restore_session() is None


class TestSignedIn:
    """Calls made with a real admin session."""

    @pytest.fixture
    async def session(self, integration_client, admin_credentials):
        email, password = admin_credentials
        session = await integration_client.auth.login(email, password)
        yield session
        await integration_client.auth.logout()

    async def test_current_user(self, integration_client, session):
        user = await integration_client.auth.get_current_user()

        assert user.is_staff
        assert user.email == session.user.email

    async def test_overview_stats(self, integration_client, session):
        stats = await integration_client.admin.get_overview_stats()

        assert stats.total_users >= 0

    async def test_product_list(self, integration_client, session):
        products = integration_client.product_list()

        await products.load()

        assert products.last_error is None
        assert products.total_pages >= 1
        assert len(products.items) <= products.page_size

    async def test_log_list(self, integration_client, session):
        logs = integration_client.log_list()

        await logs.load()

        assert logs.last_error is None
