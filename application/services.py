from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from domain.errors import AuthError, ErrorKind, PersistenceError
from domain.models import Account, SanitizedAccount, sanitize
from domain.passwords import PasswordHasher, SaltedDigestHasher
from domain.repositories import AccountRepository, SessionStore
from domain.validation import validate_login, validate_registration

logger = logging.getLogger(__name__)

AUTHENTICATION_FAILED_REASON = "Account does not exist or password is incorrect."


@dataclass
class SessionHandle:
    """
    Identifies the caller's session on a particular channel (Telegram, Discord, web).

    The application layer never depends on concrete SDK types; it only sees
    this small handle and its opaque `key`.
    """

    provider: str
    client_id: str

    @property
    def key(self) -> str:
        return f"{self.provider}:{self.client_id}"


@dataclass
class OperationResult:
    """Generic result type for simple operations."""

    success: bool
    error: Optional[AuthError] = None

    @property
    def error_message(self) -> Optional[str]:
        return self.error.reason if self.error else None


@dataclass
class RegisterResult(OperationResult):
    account_id: Optional[int] = None


@dataclass
class LoginResult(OperationResult):
    account: Optional[SanitizedAccount] = None


class AuthService:
    """
    Registration, login and logout on top of an `AccountRepository` and a
    `SessionStore`.

    The service keeps no state of its own between calls; everything lives
    in the collaborators.
    """

    def __init__(
        self,
        account_repo: AccountRepository,
        session_store: SessionStore,
        hasher: Optional[PasswordHasher] = None,
    ) -> None:
        self._account_repo = account_repo
        self._session_store = session_store
        self._hasher = hasher or SaltedDigestHasher()

    def register(
        self,
        account_name: str,
        password: str,
        confirm_password: str,
        planet_code: str,
    ) -> RegisterResult:
        """
        Create a new account and return its ID.

        Duplicate planet codes are reported before duplicate account names.
        The duplicate checks and the insert are not atomic: a concurrent
        registration that wins the race makes our insert fail with a
        persistence error coming from the store's unique constraints.
        """

        reason = validate_registration(account_name, password, confirm_password, planet_code)
        if reason:
            return RegisterResult(success=False, error=AuthError(ErrorKind.INVALID_PARAMS, reason))

        if self._account_repo.count_by_planet_code(planet_code) > 0:
            return RegisterResult(
                success=False,
                error=AuthError(ErrorKind.DUPLICATE_PLANET_CODE, "Planet code is already taken."),
            )

        if self._account_repo.count_by_account_name(account_name) > 0:
            return RegisterResult(
                success=False,
                error=AuthError(ErrorKind.DUPLICATE_ACCOUNT, "Account name is already taken."),
            )

        account = Account(
            account_name=account_name,
            password_digest=self._hasher.digest(password),
            planet_code=planet_code,
        )

        try:
            account_id = self._account_repo.insert_account(account)
        except PersistenceError as exc:
            logger.warning("Registration of %r failed in storage: %s", account_name, exc)
            return RegisterResult(
                success=False,
                error=AuthError(ErrorKind.PERSISTENCE_FAILURE, "Registration failed, please try again."),
            )

        logger.info("Registered account %r with id %s", account_name, account_id)
        return RegisterResult(success=True, account_id=account_id)

    def login(self, account_name: str, password: str, session: SessionHandle) -> LoginResult:
        """
        Authenticate and bind the sanitized account to `session`.

        Unknown accounts and wrong passwords produce the same error. On any
        failure the session is left untouched.
        """

        reason = validate_login(account_name, password)
        if reason:
            return LoginResult(success=False, error=AuthError(ErrorKind.INVALID_PARAMS, reason))

        digest = self._hasher.digest(password)
        account = self._account_repo.find_by_account_and_digest(account_name, digest)
        if account is None:
            logger.info("Login failed for %r: account/password mismatch", account_name)
            return LoginResult(
                success=False,
                error=AuthError(ErrorKind.AUTHENTICATION_FAILED, AUTHENTICATION_FAILED_REASON),
            )

        safe_account = sanitize(account)
        self._session_store.set(session.key, safe_account)
        logger.info("Account %r logged in on %s", account_name, session.provider)

        return LoginResult(success=True, account=safe_account)

    def logout(self, session: SessionHandle) -> OperationResult:
        # Logging out an anonymous session is fine.
        self._session_store.delete(session.key)
        return OperationResult(success=True)

    def current_account(self, session: SessionHandle) -> LoginResult:
        account = self._session_store.get(session.key)
        if account is None:
            return LoginResult(
                success=False,
                error=AuthError(ErrorKind.NOT_LOGGED_IN, "You are not logged in."),
            )
        return LoginResult(success=True, account=account)
