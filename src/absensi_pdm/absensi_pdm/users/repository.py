from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Account


class AccountRepository(Protocol):
    """Interface for login accounts.

    The service layer depends on this protocol only, so the fixed table can be
    swapped for a real directory without touching AuthService.
    """

    def get_by_username(self, username: str) -> Optional[Account]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Account]:
        raise NotImplementedError
