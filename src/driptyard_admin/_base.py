"""Authenticated HTTP gateway for the Driptyard admin API.

Copyright (c) 2025 Driptyard. All rights reserved.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, NamedTuple

import httpx  # type: ignore[import-untyped]
import pydantic

from ._tokens import (
    ACCESS_TOKEN_KEY,
    PERMISSIONS_KEY,
    REFRESH_TOKEN_KEY,
    MemoryTokenStore,
    TokenStore,
)
from .exceptions import (
    AuthenticationError,
    DriptyardAdminError,
    NetworkError,
    TimeoutError as AdminTimeoutError,
    create_error_from_response,
)
from .models import RefreshTokenRequest, TokenResponse

logger = logging.getLogger(__name__)

# HTTP Error Status Constants
HTTP_SUCCESS_THRESHOLD = 400
HTTP_UNAUTHORIZED = 401

USER_AGENT = "Driptyard-Admin-Python-SDK/1.0.0"
REFRESH_ENDPOINT = "/auth/refresh"

# A 401 from these endpoints is a credentials error, never a refresh trigger.
REFRESH_EXEMPT_ENDPOINTS = (
    REFRESH_ENDPOINT,
    "/auth/logout",
    "/auth/login",
    "/auth/password-reset/verify",
)

SessionExpiredHook = Callable[[str], None]


class RequestConfig(NamedTuple):
    """Configuration for HTTP requests."""

    json_data: dict[str, Any] | None = None
    form_data: dict[str, str | None] | None = None
    params: dict[str, Any] | None = None
    timeout: float | None = None


def is_refresh_exempt(endpoint: str) -> bool:
    """Whether a 401 on ``endpoint`` should surface without a refresh attempt."""
    return any(exempt in endpoint for exempt in REFRESH_EXEMPT_ENDPOINTS)


def _log_session_expired(login_url: str) -> None:
    logger.warning("Session ended; sign in again at %s", login_url)


class BaseClient:
    """Single point of outbound HTTP communication.

    Attaches the stored bearer token to every request and, on a 401 from an
    ordinary endpoint, refreshes the access token once and replays the
    request once. Unrecoverable auth failures clear the token store and fire
    the session-expired hook.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        token_store: TokenStore | None = None,
        on_session_expired: SessionExpiredHook | None = None,
        login_url: str = "/admin/login",
    ) -> None:
        """Initialize the gateway.

        Args:
            base_url: The base URL of the API
            timeout: Request timeout in seconds
            token_store: Where session tokens live (in memory if None)
            on_session_expired: Called with ``login_url`` when the session ends
            login_url: Login entry point handed to ``on_session_expired``

        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.login_url = login_url
        self.token_store: TokenStore = (
            token_store if token_store is not None else MemoryTokenStore()
        )
        self._on_session_expired = on_session_expired or _log_session_expired

        headers = {"User-Agent": USER_AGENT}
        self._client = httpx.AsyncClient(timeout=timeout, headers=headers)
        # Never carries the Authorization header.
        self._refresh_client = httpx.AsyncClient(timeout=timeout, headers=headers)

    async def __aenter__(self) -> BaseClient:
        """Async context manager entry.

        Returns:
            The client instance.

        """
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        """Close both HTTP clients."""
        await self._client.aclose()
        await self._refresh_client.aclose()

    def set_access_token(self, token: str) -> None:
        """Set the access token for authenticated requests."""
        self.token_store.set(ACCESS_TOKEN_KEY, token)

    def get_access_token(self) -> str | None:
        """Get the current access token.

        Returns:
            Current access token or None if not set.

        """
        return self.token_store.get(ACCESS_TOKEN_KEY)

    def set_refresh_token(self, token: str) -> None:
        """Store the refresh token used to renew the access token.

        Args:
            token: Refresh token from login or refresh

        """
        self.token_store.set(REFRESH_TOKEN_KEY, token)

    def get_refresh_token(self) -> str | None:
        """Get the stored refresh token.

        Returns:
            Refresh token or None if not set.

        """
        return self.token_store.get(REFRESH_TOKEN_KEY)

    def set_permissions(self, permissions: dict[str, bool]) -> None:
        """Cache the signed-in moderator's permission set.

        Args:
            permissions: Capability name to granted flag

        """
        self.token_store.set(PERMISSIONS_KEY, permissions)

    def get_permissions(self) -> dict[str, bool] | None:
        """Get the cached permission set.

        Returns:
            Capability flags, or None when nothing is cached.

        """
        return self.token_store.get(PERMISSIONS_KEY)

    def clear_session(self) -> None:
        """Remove every stored credential."""
        self.token_store.clear()

    def end_session(self) -> None:
        """Clear stored credentials and send the user back to the login entry point."""
        self.clear_session()
        self._on_session_expired(self.login_url)

    async def make_request(
        self,
        method: str,
        endpoint: str,
        *,
        config: RequestConfig | None = None,
    ) -> Any:
        """Make an authenticated HTTP request.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint path
            config: Request configuration

        Returns:
            Parsed JSON response data (an empty dict for bodiless responses).

        Raises:
            DriptyardAdminError: For HTTP error responses
            NetworkError: When no response was received
            TimeoutError: When the request timed out

        """
        if config is None:
            config = RequestConfig()

        url = self._build_url(endpoint)
        logger.debug("%s %s", method, endpoint)
        response = await self._send(method, url, config, self.get_access_token())

        if response.status_code == HTTP_UNAUTHORIZED and not is_refresh_exempt(
            endpoint
        ):
            response = await self._refresh_and_retry(method, url, config, response)

        return self._parse_response(response)

    async def _refresh_and_retry(
        self,
        method: str,
        url: str,
        config: RequestConfig,
        response: httpx.Response,
    ) -> httpx.Response:
        """Run the one-shot refresh protocol for a request that got a 401.

        Called at most once per original request: the replayed request's
        response is returned as-is and never re-enters this method.
        """
        original_error = self._error_from_response(response)

        refresh_token = self.get_refresh_token()
        if not refresh_token:
            logger.warning("Access token rejected and no refresh token stored")
            self.end_session()
            raise original_error

        try:
            access_token = await self._refresh_access_token(refresh_token)
        except DriptyardAdminError as exc:
            logger.warning("Token refresh failed: %s", exc.message)
            self.end_session()
            raise original_error from exc

        retried = await self._send(method, url, config, access_token)
        if retried.status_code == HTTP_UNAUTHORIZED:
            logger.warning("Refreshed token rejected; ending session")
            self.end_session()
        return retried

    async def _refresh_access_token(self, refresh_token: str) -> str:
        """Exchange the refresh token for a new access token and store it.

        Returns:
            The new access token.

        """
        logger.info("Access token expired; refreshing")
        url = self._build_url(REFRESH_ENDPOINT)
        payload = RefreshTokenRequest(refresh_token=refresh_token).model_dump()
        try:
            response = await self._refresh_client.post(url, json=payload)
        except httpx.TimeoutException as e:
            raise AdminTimeoutError("Token refresh timeout") from e
        except httpx.TransportError as e:
            raise NetworkError("Network error during token refresh") from e

        if response.status_code >= HTTP_SUCCESS_THRESHOLD:
            raise self._error_from_response(response)

        msg = "Refresh response did not include an access token"
        try:
            tokens = TokenResponse.model_validate(self._parse_response(response))
        except pydantic.ValidationError as e:
            raise AuthenticationError(msg) from e
        if not tokens.access_token:
            raise AuthenticationError(msg)

        self.set_access_token(tokens.access_token)
        if tokens.refresh_token:
            self.set_refresh_token(tokens.refresh_token)
        return tokens.access_token

    async def _send(
        self,
        method: str,
        url: str,
        config: RequestConfig,
        access_token: str | None,
    ) -> httpx.Response:
        """Execute the actual HTTP request.

        Returns:
            The HTTP response.

        """
        headers: dict[str, str] = {}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"

        params = None
        if config.params:
            params = {k: v for k, v in config.params.items() if v is not None}
        timeout = config.timeout or self.timeout

        try:
            if config.form_data:
                headers["Content-Type"] = "application/x-www-form-urlencoded"
                return await self._client.request(
                    method,
                    url,
                    data=config.form_data,
                    params=params,
                    headers=headers,
                    timeout=timeout,
                )

            return await self._client.request(
                method,
                url,
                json=config.json_data,
                params=params,
                headers=headers,
                timeout=timeout,
            )
        except httpx.TimeoutException as e:
            raise AdminTimeoutError("Request timeout") from e
        except httpx.TransportError as e:
            raise NetworkError(str(e) or "Network error") from e

    def _build_url(self, endpoint: str) -> str:
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def _parse_response(self, response: httpx.Response) -> Any:
        if response.status_code >= HTTP_SUCCESS_THRESHOLD:
            raise self._error_from_response(response)
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            msg = "Server returned a non-JSON response"
            raise DriptyardAdminError(
                msg, "INVALID_RESPONSE", status_code=response.status_code
            ) from e

    @staticmethod
    def _error_from_response(response: httpx.Response) -> DriptyardAdminError:
        """Build the typed error for a failed response."""
        try:
            body = response.json()
        except ValueError:
            body = {"message": response.text} if response.text else {}
        if not isinstance(body, dict):
            body = {}
        return create_error_from_response(response.status_code, body)
