from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from datetime import datetime
from enum import IntEnum
from typing import Any, Dict, Optional


class AccountStatus(IntEnum):
    NORMAL = 0


class AccountRole(IntEnum):
    USER = 0
    ADMIN = 1


@dataclass
class Account:
    """
    Persisted user account.

    `id`, `created_at` and `updated_at` are assigned by the storage layer;
    a freshly built account carries `None` for them until inserted.
    """

    account_name: str
    password_digest: str
    planet_code: str
    id: Optional[int] = None
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    gender: Optional[int] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    status: int = AccountStatus.NORMAL
    role: int = AccountRole.USER
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class SanitizedAccount:
    """
    Read-only view of an `Account` without the password digest.

    This is the only shape that leaves the service or goes into a session.
    """

    id: Optional[int]
    account_name: str
    planet_code: str
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    gender: Optional[int] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    status: int = AccountStatus.NORMAL
    role: int = AccountRole.USER
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role == AccountRole.ADMIN

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for key in ("created_at", "updated_at"):
            if data[key] is not None:
                data[key] = data[key].isoformat()
        data["status"] = int(self.status)
        data["role"] = int(self.role)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SanitizedAccount":
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known}
        for key in ("created_at", "updated_at"):
            if isinstance(values.get(key), str):
                values[key] = datetime.fromisoformat(values[key])
        return cls(**values)


def sanitize(account: Optional[Account]) -> Optional[SanitizedAccount]:
    """Build a fresh `SanitizedAccount` from `account`, dropping the digest."""

    if account is None:
        return None

    return SanitizedAccount(
        id=account.id,
        account_name=account.account_name,
        planet_code=account.planet_code,
        display_name=account.display_name,
        avatar_url=account.avatar_url,
        gender=account.gender,
        phone=account.phone,
        email=account.email,
        status=account.status,
        role=account.role,
        created_at=account.created_at,
        updated_at=account.updated_at,
    )
