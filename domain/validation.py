from __future__ import annotations

import re
from typing import Optional

ACCOUNT_NAME_MIN = 4
ACCOUNT_NAME_MAX = 128
PASSWORD_MIN = 8
PLANET_CODE_MAX = 5

ACCOUNT_NAME_PATTERN = re.compile(r"[A-Za-z0-9_]+")


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _validate_account_name(account_name: str) -> Optional[str]:
    if not ACCOUNT_NAME_MIN <= len(account_name) <= ACCOUNT_NAME_MAX:
        return (
            f"Account name must be between {ACCOUNT_NAME_MIN} "
            f"and {ACCOUNT_NAME_MAX} characters."
        )
    return None


def _validate_account_charset(account_name: str) -> Optional[str]:
    if not ACCOUNT_NAME_PATTERN.fullmatch(account_name):
        return "Account name may only contain letters, digits and underscores."
    return None


def validate_registration(
    account_name: Optional[str],
    password: Optional[str],
    confirm_password: Optional[str],
    planet_code: Optional[str],
) -> Optional[str]:
    """
    Check registration input.

    Returns the reason of the first violated rule, or None when the input
    is acceptable.
    """

    if any(is_blank(v) for v in (account_name, password, confirm_password, planet_code)):
        return "Parameters must not be empty."

    error = _validate_account_name(account_name)
    if error:
        return error

    if len(password) < PASSWORD_MIN or len(confirm_password) < PASSWORD_MIN:
        return f"Password must be at least {PASSWORD_MIN} characters."

    error = _validate_account_charset(account_name)
    if error:
        return error

    if len(planet_code) > PLANET_CODE_MAX:
        return f"Planet code must be at most {PLANET_CODE_MAX} characters."

    if password != confirm_password:
        return "Passwords do not match."

    return None


def validate_login(account_name: Optional[str], password: Optional[str]) -> Optional[str]:
    """Same as `validate_registration`, restricted to account name and password."""

    if is_blank(account_name) or is_blank(password):
        return "Parameters must not be empty."

    error = _validate_account_name(account_name)
    if error:
        return error

    if len(password) < PASSWORD_MIN:
        return f"Password must be at least {PASSWORD_MIN} characters."

    return _validate_account_charset(account_name)
