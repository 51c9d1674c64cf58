"""Token storage for the Driptyard admin SDK.

The gateway is the only writer; everything else reads tokens through it.

Copyright (c) 2025 Driptyard. All rights reserved.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

ACCESS_TOKEN_KEY = "access_token"
REFRESH_TOKEN_KEY = "refresh_token"
PERMISSIONS_KEY = "permissions"

SESSION_KEYS = (ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY, PERMISSIONS_KEY)


@runtime_checkable
class TokenStore(Protocol):
    """Key/value storage for session credentials."""

    def get(self, key: str) -> Any | None:
        """Return the stored value for ``key`` or None."""
        ...

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...

    def clear(self) -> None:
        """Remove every session key."""
        ...


class MemoryTokenStore:
    """In-process token store, used by default and in tests."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        """Initialize the store.

        Args:
            initial: Values to start with, e.g. a session restored by the caller

        """
        self._values: dict[str, Any] = dict(initial or {})

    def get(self, key: str) -> Any | None:
        """Return the stored value for ``key`` or None."""
        return self._values.get(key)

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``."""
        self._values[key] = value

    def clear(self) -> None:
        """Drop the session keys; other keys are kept."""
        for key in SESSION_KEYS:
            self._values.pop(key, None)


class FileTokenStore:
    """Token store persisted to a small JSON document.

    Writes go through a temporary file and ``os.replace`` so a reader never
    sees a half-written document.
    """

    def __init__(self, path: Path | str) -> None:
        """Initialize the store.

        Args:
            path: JSON file holding the tokens; created on first write

        """
        self._path = Path(path)

    @property
    def path(self) -> Path:
        """Location of the token file."""
        return self._path

    def _load(self) -> dict[str, Any]:
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Failed to load tokens from %s: %s", self._path, exc)
            return {}
        return payload if isinstance(payload, dict) else {}

    def _store(self, payload: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        os.replace(tmp_path, self._path)

    def get(self, key: str) -> Any | None:
        """Return the stored value for ``key`` or None.

        An unreadable file counts as empty.
        """
        return self._load().get(key)

    def set(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key`` and rewrite the file."""
        payload = self._load()
        payload[key] = value
        self._store(payload)

    def clear(self) -> None:
        """Drop the session keys, deleting the file once nothing else is in it."""
        payload = self._load()
        remaining = {k: v for k, v in payload.items() if k not in SESSION_KEYS}
        if remaining:
            self._store(remaining)
        else:
            self._path.unlink(missing_ok=True)
