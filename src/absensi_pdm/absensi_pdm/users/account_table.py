from __future__ import annotations

from typing import Iterable, Optional, Sequence

from werkzeug.security import generate_password_hash

from ..core.enums import Role
from .model import Account
from .repository import AccountRepository

DEFAULT_PASSWORD = "123"

# (username, display name, role, unit)
DEFAULT_ACCOUNTS: tuple[tuple[str, str, Role, Optional[str]], ...] = (
    ("admin", "Administrator PDM", Role.ADMIN, None),
    ("sd", "Admin SD Muhammadiyah", Role.USER, "SD Muhammadiyah 1 Pagar Alam"),
    ("smp", "Admin MTs/SMP Muhammadiyah", Role.USER, "MTs Muhammadiyah Pagar Alam"),
    ("sma", "Admin SMA Muhammadiyah", Role.USER, "SMA Muhammadiyah Pagar Alam"),
    ("smk", "Admin SMK Muhammadiyah", Role.USER, "SMK Muhammadiyah Pagar Alam"),
    ("stkip", "Admin STKIP Muhammadiyah", Role.USER, "STKIP Muhammadiyah Pagar Alam"),
)


class FixedAccountRepository(AccountRepository):
    """In-memory account table built once at startup."""

    def __init__(self, accounts: Iterable[Account]):
        self._accounts = {a.username: a for a in accounts}

    @classmethod
    def with_defaults(cls, *, password: str = DEFAULT_PASSWORD) -> "FixedAccountRepository":
        return cls(
            Account(
                username=username,
                name=name,
                password_hash=generate_password_hash(password),
                role=role,
                unit=unit,
            )
            for username, name, role, unit in DEFAULT_ACCOUNTS
        )

    def get_by_username(self, username: str) -> Optional[Account]:
        return self._accounts.get(username)

    def list_all(self) -> Sequence[Account]:
        return list(self._accounts.values())
