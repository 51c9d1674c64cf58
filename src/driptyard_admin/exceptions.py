"""
Exception classes for the Driptyard admin SDK.

Copyright (c) 2025 Driptyard. All rights reserved.
"""

from __future__ import annotations

from typing import Any

import pydantic


class DriptyardAdminError(Exception):
    """Base exception for Driptyard admin SDK errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Any | None = None,
        status_code: int | None = None,
        server_message: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details
        self.status_code = status_code
        # Text the server itself supplied, None when the message is a local default.
        self.server_message = server_message


class ValidationError(DriptyardAdminError):
    """Raised when request validation fails."""

    def __init__(
        self,
        message: str,
        details: Any | None = None,
        status_code: int = 400,
        server_message: str | None = None,
    ) -> None:
        super().__init__(
            message, "VALIDATION_ERROR", details, status_code, server_message
        )


class AuthenticationError(DriptyardAdminError):
    """Raised when authentication fails."""

    def __init__(
        self,
        message: str = "Authentication failed",
        details: Any | None = None,
        server_message: str | None = None,
    ) -> None:
        super().__init__(message, "AUTHENTICATION_ERROR", details, 401, server_message)


class AuthorizationError(DriptyardAdminError):
    """Raised when authorization fails."""

    def __init__(
        self,
        message: str = "Insufficient permissions",
        details: Any | None = None,
        server_message: str | None = None,
    ) -> None:
        super().__init__(message, "AUTHORIZATION_ERROR", details, 403, server_message)


class NotFoundError(DriptyardAdminError):
    """Raised when a resource is not found."""

    def __init__(
        self,
        message: str = "Resource not found",
        details: Any | None = None,
        server_message: str | None = None,
    ) -> None:
        super().__init__(message, "NOT_FOUND_ERROR", details, 404, server_message)


class ConflictError(DriptyardAdminError):
    """Raised when a resource conflict occurs."""

    def __init__(
        self,
        message: str = "Resource conflict",
        details: Any | None = None,
        server_message: str | None = None,
    ) -> None:
        super().__init__(message, "CONFLICT_ERROR", details, 409, server_message)


class RateLimitError(DriptyardAdminError):
    """Raised when rate limit is exceeded."""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        retry_after: int | None = None,
        details: Any | None = None,
        server_message: str | None = None,
    ) -> None:
        super().__init__(message, "RATE_LIMIT_ERROR", details, 429, server_message)
        self.retry_after = retry_after


class ServerError(DriptyardAdminError):
    """Raised when a server error occurs."""

    def __init__(
        self,
        message: str = "Internal server error",
        details: Any | None = None,
        status_code: int = 500,
        server_message: str | None = None,
    ) -> None:
        super().__init__(message, "SERVER_ERROR", details, status_code, server_message)


class NetworkError(DriptyardAdminError):
    """Raised when no response was received from the server."""

    def __init__(
        self, message: str = "Network error", details: Any | None = None
    ) -> None:
        super().__init__(message, "NETWORK_ERROR", details)


class TimeoutError(DriptyardAdminError):  # noqa: A001
    """Raised when a request times out."""

    def __init__(
        self, message: str = "Request timeout", details: Any | None = None
    ) -> None:
        super().__init__(message, "TIMEOUT_ERROR", details)


class LoginError(DriptyardAdminError):
    """Raised when a login attempt fails, carrying a normalized message."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message, "LOGIN_ERROR", None, status_code)


class AccessDeniedError(DriptyardAdminError):
    """Raised when the logged-in account is neither admin nor moderator."""

    def __init__(
        self,
        message: str = "Access denied. Admin or moderator privileges required.",
    ) -> None:
        super().__init__(message, "ACCESS_DENIED", None, 403)


def extract_server_message(body: Any) -> str | None:
    """Pick the server-supplied message out of an error body.

    Priority is ``detail``, then ``message``, then ``error``. ``error`` may be
    a plain string or an object carrying its own ``message``. A list-valued
    ``detail`` (field validation errors) is summarized by its first entry.
    """
    if not isinstance(body, dict):
        return None

    detail = body.get("detail")
    if isinstance(detail, str) and detail:
        return detail
    if isinstance(detail, list) and detail:
        first = detail[0]
        if isinstance(first, dict) and first.get("msg"):
            return str(first["msg"])

    message = body.get("message")
    if isinstance(message, str) and message:
        return message

    error = body.get("error")
    if isinstance(error, str) and error:
        return error
    if isinstance(error, dict):
        nested = error.get("message")
        if isinstance(nested, str) and nested:
            return nested

    return None


def create_error_from_response(
    status_code: int,
    error_response: dict[str, Any] | None = None,
    default_message: str | None = None,
) -> DriptyardAdminError:
    """Create an appropriate error instance based on HTTP status code and error body."""
    body = error_response or {}
    server_message = extract_server_message(body)
    message = server_message or default_message or "An error occurred"

    details: Any = body.get("details")
    if details is None and isinstance(body.get("detail"), list):
        details = body["detail"]
    if details is None and isinstance(body.get("error"), dict):
        details = body["error"].get("details")

    code = body.get("code")
    if code is None and isinstance(body.get("error"), dict):
        code = body["error"].get("code")
    code_str = str(code) if code is not None else "UNKNOWN_ERROR"

    if status_code in (400, 422):
        return ValidationError(message, details, status_code, server_message)
    elif status_code == 401:
        return AuthenticationError(message, details, server_message)
    elif status_code == 403:
        return AuthorizationError(message, details, server_message)
    elif status_code == 404:
        return NotFoundError(message, details, server_message)
    elif status_code == 409:
        return ConflictError(message, details, server_message)
    elif status_code == 429:
        return RateLimitError(message, body.get("retry_after"), details, server_message)
    elif status_code >= 500:
        return ServerError(message, details, status_code, server_message)
    else:
        return DriptyardAdminError(
            message, code_str, details, status_code, server_message
        )


def error_message(error: BaseException, fallback: str) -> str:
    """User-facing text for a failed call.

    Server message first, then the exception's own message, then ``fallback``.
    """
    if isinstance(error, DriptyardAdminError):
        if error.server_message:
            return error.server_message
        return error.message or fallback
    return str(error) or fallback


def login_error_message(error: BaseException) -> str:
    """Normalized message for a failed login attempt."""
    if isinstance(error, DriptyardAdminError):
        if error.server_message:
            return error.server_message
        if error.status_code == 401:
            return "Invalid credentials"
        if error.message:
            return error.message
    elif str(error):
        return str(error)
    return "Login failed"


def field_errors(error: BaseException) -> dict[str, str]:
    """Map a validation failure to ``{field: message}`` for inline display.

    Accepts either a server 422 error whose ``details`` hold ``loc``/``msg``
    entries, or a local pydantic validation error. Entries without a field
    path are dropped; callers show those through the generic notifier.
    """
    entries: list[dict[str, Any]] = []
    if isinstance(error, pydantic.ValidationError):
        entries = [
            {"loc": list(item["loc"]), "msg": item["msg"]} for item in error.errors()
        ]
    elif isinstance(error, DriptyardAdminError) and isinstance(error.details, list):
        entries = [item for item in error.details if isinstance(item, dict)]

    result: dict[str, str] = {}
    for entry in entries:
        loc = [part for part in entry.get("loc", []) if part not in ("body", "query")]
        if not loc:
            continue
        field = str(loc[-1])
        message = str(entry.get("msg", "Invalid value"))
        # Local validators prefix their messages with "Value error, ".
        result.setdefault(field, message.removeprefix("Value error, "))
    return result
