from __future__ import annotations

from typing import Optional

import psycopg2

from domain.errors import PersistenceError
from domain.models import Account
from domain.repositories import AccountRepository


class PostgresAccountRepository(AccountRepository):
    """
    Postgres-backed implementation of `AccountRepository`.

    `db_params` is passed straight to `psycopg2.connect`, so it may hold
    either a `dsn` or the individual host/user/password/dbname keys.
    """

    def __init__(self, db_params: dict) -> None:
        self._db_params = db_params
        self._ensure_table()

    def _get_connection(self):
        return psycopg2.connect(**self._db_params)

    def _ensure_table(self) -> None:
        """
        Ensure that the `accounts` table exists.

        Both `account_name` and `planet_code` carry UNIQUE constraints; they
        are the authoritative guard against concurrent duplicate signups.
        """

        with self._get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    CREATE TABLE IF NOT EXISTS accounts (
                        id BIGSERIAL PRIMARY KEY,
                        account_name VARCHAR(128) NOT NULL UNIQUE,
                        password_digest VARCHAR(512) NOT NULL,
                        planet_code VARCHAR(5) NOT NULL UNIQUE,
                        display_name VARCHAR(256),
                        avatar_url VARCHAR(1024),
                        gender SMALLINT,
                        phone VARCHAR(128),
                        email VARCHAR(512),
                        status INTEGER NOT NULL DEFAULT 0,
                        role INTEGER NOT NULL DEFAULT 0,
                        created_at TIMESTAMP NOT NULL DEFAULT NOW(),
                        updated_at TIMESTAMP NOT NULL DEFAULT NOW()
                    )
                    """
                )
                conn.commit()

    @staticmethod
    def _to_domain(row: tuple) -> Account:
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
            created_at=row[11],
            updated_at=row[12],
        )

    def _count(self, column: str, value: str) -> int:
        # `column` is always one of our own literals, never user input.
        with self._get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(f"SELECT COUNT(*) FROM accounts WHERE {column} = %s", (value,))
                return int(cur.fetchone()[0])

    def count_by_planet_code(self, planet_code: str) -> int:
        return self._count("planet_code", planet_code)

    def count_by_account_name(self, account_name: str) -> int:
        return self._count("account_name", account_name)

    def insert_account(self, account: Account) -> int:
        try:
            with self._get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        INSERT INTO accounts (
                            account_name, password_digest, planet_code, display_name,
                            avatar_url, gender, phone, email, status, role
                        )
                        VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                        RETURNING id
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
                    account_id = cur.fetchone()[0]
                    conn.commit()
                    return int(account_id)
        except psycopg2.Error as exc:
            raise PersistenceError(str(exc)) from exc

    def find_by_account_and_digest(
        self,
        account_name: str,
        password_digest: str,
    ) -> Optional[Account]:
        with self._get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    SELECT id, account_name, password_digest, planet_code, display_name,
                           avatar_url, gender, phone, email, status, role,
                           created_at, updated_at
                    FROM accounts
                    WHERE account_name = %s AND password_digest = %s
                    """,
                    (account_name, password_digest),
                )
                row = cur.fetchone()
                if not row:
                    return None
                return self._to_domain(row)
