from __future__ import annotations

import logging
from typing import Callable, Type, TypeVar

from application.services import OperationResult
from domain.errors import AuthError
from domain.models import SanitizedAccount

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=OperationResult)

# Commands whose text may contain a password, even when malformed.
CREDENTIAL_COMMANDS = frozenset({"register", "login"})

HELP_TEXT = (
    "{p}register <account> <password> <confirm> <planet_code> - create an account\n"
    "{p}login <account> <password>                              - log in\n"
    "{p}logout                                                  - log out\n"
    "{p}whoami                                                  - show the logged-in account\n"
)


def run_guarded(operation: Callable[[], R], result_type: Type[R]) -> R:
    """
    Run an application call and turn unexpected failures into a system error.

    Expected failures already come back as results; anything raised here
    is a collaborator fault, so the details go to the log and not to the user.
    """

    try:
        return operation()
    except Exception:
        logger.exception("Unexpected error while handling %s", result_type.__name__)
        return result_type(success=False, error=AuthError.system_error())


def render_error(error: AuthError) -> str:
    return f"❌ {error.reason}"


def render_account(account: SanitizedAccount) -> str:
    lines = [
        f"Account: {account.account_name}",
        f"ID: {account.id}",
        f"Planet code: {account.planet_code}",
    ]
    if account.display_name:
        lines.append(f"Name: {account.display_name}")
    if account.email:
        lines.append(f"Email: {account.email}")
    if account.is_admin:
        lines.append("Role: admin")
    return "\n".join(lines)


def render_result(result: OperationResult, success_text: str) -> str:
    if not result.success and result.error is not None:
        return render_error(result.error)
    return success_text
