"""
Driptyard Admin Python SDK

Async client library for the Driptyard marketplace admin API.
Provides authenticated access with automatic token refresh, paginated
list controllers, confirmed admin actions, and typed view models for
users, listings, spotlights, reports, moderators, and audit logs.
"""

from ._tokens import FileTokenStore, MemoryTokenStore, TokenStore
from .actions import ActionResult, ActionRunner, Confirmation
from .client import DriptyardAdminClient
from .config import ClientSettings, configure_logging
from .exceptions import *
from .listing import ListQuery, ListState
from .models import *
from .notifications import LoggingNotifier, Notifier, RecordingNotifier

__version__ = "1.0.0"
__author__ = "Driptyard Team"
__email__ = "support@driptyard.com"

__all__ = [
    "DriptyardAdminClient",
    "ClientSettings",
    "configure_logging",
    # Session storage
    "TokenStore",
    "MemoryTokenStore",
    "FileTokenStore",
    # Controllers
    "ListQuery",
    "ListState",
    "ActionRunner",
    "ActionResult",
    "Confirmation",
    # Notifications
    "Notifier",
    "LoggingNotifier",
    "RecordingNotifier",
    # Exceptions
    "DriptyardAdminError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "ServerError",
    "NetworkError",
    "TimeoutError",
    "LoginError",
    "AccessDeniedError",
    "error_message",
    "login_error_message",
    "field_errors",
    # Models
    "CurrentUser",
    "Session",
    "AdminUser",
    "ModeratorPermissions",
    "AdminProduct",
    "ProductSpotlight",
    "Spotlight",
    "SpotlightHistoryEntry",
    "FlaggedItem",
    "LogEntry",
    "OverviewStats",
    "Page",
    "LoginRequest",
    "UpdateUserRequest",
    "CreateModeratorRequest",
    "ResetUserPasswordRequest",
    "PasswordResetVerifyRequest",
    "ChangeOwnPasswordRequest",
    "UpdateProductRequest",
    "ApplySpotlightRequest",
]
