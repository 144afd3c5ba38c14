from __future__ import annotations

import json
import logging
from typing import MutableMapping, Optional

from werkzeug.security import check_password_hash

from ..core.constants import STORAGE_KEY_CURRENT_USER
from ..core.exceptions import InvalidCredentialsError
from .model import User
from .repository import AccountRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, accounts: AccountRepository):
        self._accounts = accounts

    def authenticate(self, username: str, password: str) -> User:
        account = self._accounts.get_by_username(username or "")
        if not account:
            logger.info("Login rejected for unknown username %r", username)
            raise InvalidCredentialsError("Username atau password salah!")

        try:
            ok = check_password_hash(account.password_hash, password or "")
        except ValueError:
            # e.g. placeholder or corrupted hash values
            ok = False

        if not ok:
            logger.info("Login rejected for %r (wrong password)", username)
            raise InvalidCredentialsError("Username atau password salah!")

        return User(username=account.username, name=account.name, role=account.role, unit=account.unit)


class SessionStore:
    """Keeps the logged-in user under one key of a mutable mapping.

    The mapping is the Flask session in the web app and a plain dict in tests.
    """

    def __init__(self, storage: MutableMapping, *, key: str = STORAGE_KEY_CURRENT_USER):
        self._storage = storage
        self._key = key

    def save(self, user: User) -> None:
        self._storage[self._key] = json.dumps(user.to_dict())

    def load(self) -> Optional[User]:
        raw = self._storage.get(self._key)
        if not raw:
            return None
        try:
            return User.from_dict(json.loads(raw))
        except (ValueError, KeyError, TypeError):
            logger.warning("Discarding unreadable session record")
            self.clear()
            return None

    def clear(self) -> None:
        self._storage.pop(self._key, None)
