from __future__ import annotations

import sqlite3
from datetime import datetime
from typing import Optional

from domain.errors import PersistenceError
from domain.models import Account
from domain.repositories import AccountRepository

_COLUMNS = (
    "id, account_name, password_digest, planet_code, display_name, avatar_url, "
    "gender, phone, email, status, role, created_at, updated_at"
)


class SqliteAccountRepository(AccountRepository):
    """
    SQLite-backed implementation of `AccountRepository`.

    Manages the `accounts` table. Uniqueness of account names and planet
    codes is enforced by the table itself, so a registration that loses a
    race surfaces here as an `IntegrityError`.
    """

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        self._ensure_table()

    def _get_connection(self) -> sqlite3.Connection:
        return sqlite3.connect(self._db_path)

    def _ensure_table(self) -> None:
        with self._get_connection() as conn:
            cur = conn.cursor()
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS accounts (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    account_name TEXT NOT NULL UNIQUE,
                    password_digest TEXT NOT NULL,
                    planet_code TEXT NOT NULL UNIQUE,
                    display_name TEXT,
                    avatar_url TEXT,
                    gender INTEGER,
                    phone TEXT,
                    email TEXT,
                    status INTEGER NOT NULL DEFAULT 0,
                    role INTEGER NOT NULL DEFAULT 0,
                    created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
                    updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
                )
                """
            )
            conn.commit()

    @staticmethod
    def _parse_timestamp(value) -> Optional[datetime]:
        if value is None:
            return None
        return datetime.fromisoformat(str(value))

    @classmethod
    def _to_domain(cls, row: sqlite3.Row) -> Account:
        return Account(
            id=int(row[0]),
            account_name=row[1],
            password_digest=row[2],
            planet_code=row[3],
            display_name=row[4],
            avatar_url=row[5],
            gender=row[6],
            phone=row[7],
            email=row[8],
            status=int(row[9]),
            role=int(row[10]),
            created_at=cls._parse_timestamp(row[11]),
            updated_at=cls._parse_timestamp(row[12]),
        )

    def count_by_planet_code(self, planet_code: str) -> int:
        with self._get_connection() as conn:
            cur = conn.cursor()
            cur.execute("SELECT COUNT(*) FROM accounts WHERE planet_code = ?", (planet_code,))
            return int(cur.fetchone()[0])

    def count_by_account_name(self, account_name: str) -> int:
        with self._get_connection() as conn:
            cur = conn.cursor()
            cur.execute("SELECT COUNT(*) FROM accounts WHERE account_name = ?", (account_name,))
            return int(cur.fetchone()[0])

    def insert_account(self, account: Account) -> int:
        try:
            with self._get_connection() as conn:
                cur = conn.cursor()
                cur.execute(
                    """
                    INSERT INTO accounts (
                        account_name, password_digest, planet_code, display_name,
                        avatar_url, gender, phone, email, status, role
                    )
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        account.account_name,
                        account.password_digest,
                        account.planet_code,
                        account.display_name,
                        account.avatar_url,
                        account.gender,
                        account.phone,
                        account.email,
                        int(account.status),
                        int(account.role),
                    ),
                )
                conn.commit()
                return int(cur.lastrowid)
        except sqlite3.DatabaseError as exc:
            raise PersistenceError(str(exc)) from exc

    def find_by_account_and_digest(
        self,
        account_name: str,
        password_digest: str,
    ) -> Optional[Account]:
        with self._get_connection() as conn:
            cur = conn.cursor()
            cur.execute(
                f"SELECT {_COLUMNS} FROM accounts WHERE account_name = ? AND password_digest = ?",
                (account_name, password_digest),
            )
            row = cur.fetchone()
            if not row:
                return None
            return self._to_domain(row)
