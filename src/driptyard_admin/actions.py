"""Confirmed admin actions with per-row in-flight tracking.

Destructive or state-changing actions (delete, suspend, approve, permission
save) go through an ``ActionRunner``. Each run is keyed ``{action}-{id}`` so
two rows can be busy at the same time while a second click on the same row
is refused. After a successful run the owning list is re-fetched; entities
are never patched locally.

Copyright (c) 2025 Driptyard. All rights reserved.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from .exceptions import DriptyardAdminError, error_message, field_errors
from .notifications import LoggingNotifier, Notifier

logger = logging.getLogger(__name__)


def action_key(action: str, entity_id: Any) -> str:
    return f"{action}-{entity_id}"


@dataclass
class ActionResult:
    """Outcome of one action run."""

    ok: bool
    value: Any = None
    error: Exception | None = None
    field_errors: dict[str, str] = field(default_factory=dict)


class Confirmation:
    """Open/closed state of one confirmation dialog and the entity it targets."""

    def __init__(self) -> None:
        self._entity_id: Any = None
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    @property
    def entity_id(self) -> Any:
        return self._entity_id

    def open(self, entity_id: Any = None) -> None:
        self._entity_id = entity_id
        self._open = True

    def close(self) -> None:
        self._entity_id = None
        self._open = False


class ActionRunner:
    """Runs admin actions and reports their outcome to a notifier."""

    def __init__(self, notifier: Notifier | None = None) -> None:
        self._notifier = notifier or LoggingNotifier()
        self._running: set[str] = set()

    @property
    def running(self) -> frozenset[str]:
        return frozenset(self._running)

    def is_running(self, action: str, entity_id: Any) -> bool:
        """Whether the control for ``action`` on ``entity_id`` should be disabled."""
        return action_key(action, entity_id) in self._running

    async def run(
        self,
        action: str,
        entity_id: Any,
        call: Callable[[], Awaitable[Any]],
        *,
        success_message: str,
        error_message: str = "Action failed",
        confirmation: Confirmation | None = None,
        close_on_error: bool = False,
        on_success: Callable[[], Awaitable[Any]] | None = None,
    ) -> ActionResult:
        """Run one action.

        Args:
            action: Action name, e.g. ``"delete"``
            entity_id: Row the action applies to
            call: Coroutine factory performing the request
            success_message: Shown on success
            error_message: Shown on failure when the server gives no message
            confirmation: Dialog to close on success
            close_on_error: Also close the dialog on failure
            on_success: Re-fetch to run after success, usually ``ListQuery.refresh``

        Returns:
            The outcome. Failures of ``call`` are reported, not raised.

        """
        key = action_key(action, entity_id)
        if key in self._running:
            logger.debug("Action %s already in flight", key)
            return ActionResult(ok=False)

        self._running.add(key)
        try:
            value = await call()
        except (DriptyardAdminError, PydanticValidationError) as exc:
            logger.warning("Action %s failed: %s", key, exc)
            self._notifier.error(_message(exc, error_message))
            if confirmation is not None and close_on_error:
                confirmation.close()
            return ActionResult(ok=False, error=exc, field_errors=field_errors(exc))
        finally:
            self._running.discard(key)

        if confirmation is not None:
            confirmation.close()
        self._notifier.success(success_message)
        if on_success is not None:
            await on_success()
        return ActionResult(ok=True, value=value)


def _message(exc: Exception, fallback: str) -> str:
    if isinstance(exc, PydanticValidationError):
        errors = field_errors(exc)
        return next(iter(errors.values()), fallback)
    return error_message(exc, fallback)
