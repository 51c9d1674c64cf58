"""Environment-driven settings for the Driptyard admin SDK.

Every field can be set through a ``DRIPTYARD_ADMIN_``-prefixed environment
variable or a ``.env`` file in the working directory, e.g.
``DRIPTYARD_ADMIN_API_BASE_URL=https://api.driptyard.com``.

Copyright (c) 2025 Driptyard. All rights reserved.
"""

from __future__ import annotations

import logging
import sys
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Outbound HTTP libraries; quiet unless asked otherwise.
_HTTP_LOGGERS = ("httpx", "httpcore")


class ClientSettings(BaseSettings):
    """Settings for building a ``DriptyardAdminClient``."""

    api_base_url: str = "http://localhost:8000"
    timeout: float = Field(default=30.0, gt=0)

    # Persist tokens in this JSON file; in memory when unset.
    token_file: Path | None = None
    login_url: str = "/admin/login"

    default_page_size: int = Field(default=10, ge=1)
    search_debounce: float = Field(default=0.0, ge=0)

    log_level: str = "INFO"
    log_level_http: str = "WARNING"

    model_config = SettingsConfigDict(
        env_prefix="DRIPTYARD_ADMIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> ClientSettings:
    """Cached settings instance; reads the environment once."""
    return ClientSettings()


def configure_logging(
    level: str | None = None,
    http_level: str | None = None,
) -> None:
    """Set up logging for scripts and command-line use.

    Args:
        level: Root level name; defaults to the ``log_level`` setting
        http_level: Level for httpx/httpcore; defaults to ``log_level_http``

    """
    if level is None or http_level is None:
        settings = get_settings()
        level = level or settings.log_level
        http_level = http_level or settings.log_level_http

    root = logging.getLogger()
    root.setLevel(_parse_level(level))
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s")
        )
        root.addHandler(handler)

    for name in _HTTP_LOGGERS:
        logging.getLogger(name).setLevel(_parse_level(http_level))


def _parse_level(raw: str) -> int:
    numeric = getattr(logging, raw.upper(), None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO
