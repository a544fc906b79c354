from __future__ import annotations

import threading
from typing import Dict, Optional

from domain.models import SanitizedAccount
from domain.repositories import SessionStore


class InMemorySessionStore(SessionStore):
    """Process-local session store. Entries are lost on restart."""

    def __init__(self) -> None:
        self._entries: Dict[str, SanitizedAccount] = {}
        self._lock = threading.Lock()

    def get(self, session_key: str) -> Optional[SanitizedAccount]:
        with self._lock:
            return self._entries.get(session_key)

    def set(self, session_key: str, account: SanitizedAccount) -> None:
        with self._lock:
            self._entries[session_key] = account

    def delete(self, session_key: str) -> None:
        with self._lock:
            self._entries.pop(session_key, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
