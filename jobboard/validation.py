"""Client-side input checks, run before any request is sent."""
from __future__ import annotations

import re

from jobboard.errors import ValidationError

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6


def require_length(field: str, value: str | None, min_len: int, max_len: int) -> str:
    value = (value or "").strip()
    if not value:
        raise ValidationError(f"{field} is required")
    if len(value) < min_len:
        raise ValidationError(f"{field} must be at least {min_len} characters long")
    if len(value) > max_len:
        raise ValidationError(f"{field} cannot exceed {max_len} characters")
    return value


def require_email(value: str | None) -> str:
    value = (value or "").strip().lower()
    if not value:
        raise ValidationError("Email is required")
    if len(value) > 255 or not EMAIL_RE.match(value):
        raise ValidationError("Please provide a valid email address")
    return value


def require_password(password: str | None, confirm: str | None = None) -> str:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
    if confirm is not None and password != confirm:
        raise ValidationError("Passwords do not match")
    return password
