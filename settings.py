from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from application.services import AuthService
from domain.passwords import DEFAULT_SALT, SaltedDigestHasher
from domain.repositories import AccountRepository, SessionStore

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class Settings:
    """Runtime configuration, read from the environment (and `.env`)."""

    db_backend: str = "sqlite"
    db_path: str = "accounts.db"
    database_url: Optional[str] = None
    session_backend: str = "memory"
    password_salt: str = DEFAULT_SALT
    log_level: str = "INFO"
    discord_token: Optional[str] = None
    telegram_token: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        if environ is None:
            load_dotenv()
            environ = os.environ

        settings = cls(
            db_backend=environ.get("DB_BACKEND", "sqlite").lower(),
            db_path=environ.get("DB_PATH", "accounts.db"),
            database_url=environ.get("DATABASE_URL") or None,
            session_backend=environ.get("SESSION_BACKEND", "memory").lower(),
            password_salt=environ.get("PASSWORD_SALT", DEFAULT_SALT),
            log_level=environ.get("LOG_LEVEL", "INFO").upper(),
            discord_token=environ.get("DISCORD_TOKEN") or None,
            telegram_token=environ.get("TELEGRAM_TOKEN") or None,
        )

        if settings.db_backend not in ("sqlite", "postgres"):
            raise ValueError(f"Unsupported DB_BACKEND: {settings.db_backend}")
        if settings.session_backend not in ("memory", "sqlite"):
            raise ValueError(f"Unsupported SESSION_BACKEND: {settings.session_backend}")
        if settings.db_backend == "postgres" and not settings.database_url:
            raise ValueError("DATABASE_URL must be set when DB_BACKEND=postgres.")
        return settings


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


def _build_account_repository(settings: Settings) -> AccountRepository:
    if settings.db_backend == "postgres":
        # Imported lazily so SQLite deployments don't need a Postgres driver.
        from infrastructure.db.account_repository_postgres import PostgresAccountRepository

        return PostgresAccountRepository({"dsn": settings.database_url})

    from infrastructure.db.account_repository_sqlite import SqliteAccountRepository

    return SqliteAccountRepository(settings.db_path)


def _build_session_store(settings: Settings) -> SessionStore:
    if settings.session_backend == "sqlite":
        from infrastructure.db.session_store_sqlite import SqliteSessionStore

        return SqliteSessionStore(settings.db_path)

    from infrastructure.sessions.memory import InMemorySessionStore

    return InMemorySessionStore()


def build_auth_service(settings: Settings) -> AuthService:
    return AuthService(
        account_repo=_build_account_repository(settings),
        session_store=_build_session_store(settings),
        hasher=SaltedDigestHasher(settings.password_salt),
    )
