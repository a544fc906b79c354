from __future__ import annotations

import hashlib
from typing import Protocol

# Shared by every account. Changing it invalidates all stored digests.
DEFAULT_SALT = "rainbowsea"


class PasswordHasher(Protocol):
    def digest(self, password: str) -> str:
        """Return a deterministic one-way digest of `password`."""

        ...


class SaltedDigestHasher(PasswordHasher):
    """
    Hex MD5 of a process-wide salt followed by the plaintext password.

    Deterministic on purpose: login looks accounts up by digest, so the
    same password must always produce the same value.
    """

    def __init__(self, salt: str = DEFAULT_SALT) -> None:
        self._salt = salt

    def digest(self, password: str) -> str:
        # Lone surrogates are hashed as-is rather than rejected.
        data = (self._salt + password).encode("utf-8", errors="surrogatepass")
        return hashlib.md5(data).hexdigest()
