from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    INVALID_PARAMS = "invalid_params"
    DUPLICATE_ACCOUNT = "duplicate_account"
    DUPLICATE_PLANET_CODE = "duplicate_planet_code"
    AUTHENTICATION_FAILED = "authentication_failed"
    PERSISTENCE_FAILURE = "persistence_failure"
    SYSTEM_ERROR = "system_error"
    NOT_LOGGED_IN = "not_logged_in"


SYSTEM_ERROR_REASON = "System error, please try again later."


@dataclass(frozen=True)
class AuthError:
    """
    Failure value returned by the application layer.

    `kind` is meant for programmatic checks, `reason` for humans.
    """

    kind: ErrorKind
    reason: str

    @classmethod
    def system_error(cls) -> "AuthError":
        return cls(ErrorKind.SYSTEM_ERROR, SYSTEM_ERROR_REASON)


class PersistenceError(Exception):
    """
    Raised by repository implementations when the store rejects a write
    (unique constraint violation, lost connection, ...).
    """
