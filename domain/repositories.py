from __future__ import annotations

from typing import Optional, Protocol

from .models import Account, SanitizedAccount


class AccountRepository(Protocol):
    """
    Persistence abstraction for accounts.

    Implementations are responsible for:
    - Enforcing uniqueness of `account_name` and `planet_code` in the store
      itself; the service-level pre-checks only produce friendlier errors.
    - Making a successful insert visible to later counts/finds.
    - Raising `PersistenceError` when a write is rejected, which callers
      must be able to tell apart from "not found".
    """

    def count_by_planet_code(self, planet_code: str) -> int:
        ...

    def count_by_account_name(self, account_name: str) -> int:
        ...

    def insert_account(self, account: Account) -> int:
        """Persist a new account and return its assigned ID."""

        ...

    def find_by_account_and_digest(
        self,
        account_name: str,
        password_digest: str,
    ) -> Optional[Account]:
        """Return the account matching both fields, or None."""

        ...


class SessionStore(Protocol):
    """
    Keyed storage of the currently authenticated account per client session.

    Keys are opaque strings chosen by the caller. Implementations must be
    safe to use from several threads at once.
    """

    def get(self, session_key: str) -> Optional[SanitizedAccount]:
        ...

    def set(self, session_key: str, account: SanitizedAccount) -> None:
        ...

    def delete(self, session_key: str) -> None:
        """Remove the entry for `session_key`; absent keys are ignored."""

        ...
