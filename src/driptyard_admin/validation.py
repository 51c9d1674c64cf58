"""Client-side pre-validation for admin forms.

These checks only stop obviously bad input before it is sent; the server
still validates everything. Each validator returns the cleaned value or
raises ``ValueError`` with a message suitable for inline display, so they
plug straight into pydantic ``field_validator`` hooks.
"""

from __future__ import annotations

import re

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+$")
SPECIAL_CHARACTERS = re.compile(r"[!@#$%^&*()_+\-=\[\]{};':\"\\|,.<>/?]")
OTP_PATTERN = re.compile(r"^\d{6}$")
COUNTRY_CODE_PATTERN = re.compile(r"^\+(\d{1,3})")
SPACED_COUNTRY_CODE_PATTERN = re.compile(r"^\+(\d{1,3})\s+(.*)$")

LOGIN_PASSWORD_MIN_LENGTH = 6
RESET_PASSWORD_MIN_LENGTH = 6
ACCOUNT_PASSWORD_MIN_LENGTH = 8
OWN_PASSWORD_MAX_LENGTH = 15


def validate_email(value: str) -> str:
    value = value.strip()
    if not EMAIL_PATTERN.match(value):
        raise ValueError("Please enter a valid email address")
    return value


def validate_username(value: str) -> str:
    if not USERNAME_PATTERN.match(value):
        raise ValueError(
            "Username can only contain letters, numbers, underscores, and hyphens"
        )
    return value


def validate_account_password(value: str) -> str:
    """Password rules for accounts created from the dashboard."""
    if len(value) < ACCOUNT_PASSWORD_MIN_LENGTH:
        raise ValueError("Password must be at least 8 characters long")
    if not re.search(r"[A-Z]", value):
        raise ValueError("Password must contain at least one uppercase letter")
    if not re.search(r"[a-z]", value):
        raise ValueError("Password must contain at least one lowercase letter")
    if not re.search(r"[0-9]", value):
        raise ValueError("Password must contain at least one number")
    if not SPECIAL_CHARACTERS.search(value):
        raise ValueError("Password must contain at least one special character")
    return value


def validate_min_length(value: str, minimum: int) -> str:
    if len(value) < minimum:
        raise ValueError(f"Password must be at least {minimum} characters")
    return value


def validate_otp(value: str) -> str:
    if not OTP_PATTERN.match(value):
        raise ValueError("OTP must be a 6-digit number")
    return value


def validate_phone(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Phone number is required")
    return value


def split_phone(value: str) -> tuple[str, str]:
    """Split an international number into ``(country_code, local_number)``.

    ``"+44 7700 900123"`` becomes ``("44", "7700900123")``. Without a space after
    the code, up to three leading digits are taken as the country code. Numbers
    without a leading ``+`` come back with an empty country code.
    """
    spaced = SPACED_COUNTRY_CODE_PATTERN.match(value.strip())
    if spaced:
        return spaced.group(1), re.sub(r"\s", "", spaced.group(2))
    clean = re.sub(r"\s", "", value)
    match = COUNTRY_CODE_PATTERN.match(clean)
    if not match:
        return "", clean
    return match.group(1), clean[match.end():]
