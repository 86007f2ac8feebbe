from __future__ import annotations

from email_validator import EmailNotValidError, validate_email

from ..core.enums import Role
from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_min_length(value: str, field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_email(value: str) -> str:
    """Syntax-only check, no DNS lookup. Special-use domains such as .local are accepted.

    The address is returned as typed.
    """
    try:
        validate_email(value or "", check_deliverability=False, globally_deliverable=False)
    except EmailNotValidError:
        raise ValidationError("Invalid email format")
    return value


def require_alpha_name(value: str) -> str:
    compact = "".join((value or "").split())
    if not compact or not (compact.isascii() and compact.isalpha()):
        raise ValidationError("Name can only contain letters")
    return value.strip()


def require_role(value) -> Role:
    try:
        return Role(value)
    except ValueError:
        raise ValidationError("Invalid role")
