from __future__ import annotations

import json
import sqlite3
from typing import Optional

from domain.models import SanitizedAccount
from domain.repositories import SessionStore


class SqliteSessionStore(SessionStore):
    """
    SQLite-backed implementation of `SessionStore`.

    Stores one row per session key in a `sessions` table, with the
    sanitized account serialised as JSON. Sessions survive bot restarts.
    Each call opens its own connection, so the store can be shared between
    threads.
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
                CREATE TABLE IF NOT EXISTS sessions (
                    session_key TEXT PRIMARY KEY,
                    account_json TEXT NOT NULL,
                    created_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
                )
                """
            )
            conn.commit()

    def get(self, session_key: str) -> Optional[SanitizedAccount]:
        with self._get_connection() as conn:
            cur = conn.cursor()
            cur.execute(
                "SELECT account_json FROM sessions WHERE session_key = ?",
                (session_key,),
            )
            row = cur.fetchone()
            if not row:
                return None
            return SanitizedAccount.from_dict(json.loads(row[0]))

    def set(self, session_key: str, account: SanitizedAccount) -> None:
        """
        Upsert the session entry; a second login replaces the first.
        """

        with self._get_connection() as conn:
            cur = conn.cursor()
            cur.execute(
                """
                INSERT INTO sessions (session_key, account_json)
                VALUES (?, ?)
                ON CONFLICT (session_key)
                DO UPDATE SET account_json = excluded.account_json,
                              created_at = CURRENT_TIMESTAMP
                """,
                (session_key, json.dumps(account.to_dict())),
            )
            conn.commit()

    def delete(self, session_key: str) -> None:
        with self._get_connection() as conn:
            cur = conn.cursor()
            cur.execute("DELETE FROM sessions WHERE session_key = ?", (session_key,))
            conn.commit()
