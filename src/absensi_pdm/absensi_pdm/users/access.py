"""Role filter shared by every feature module.

Admins see and change everything. A unit-scoped user only sees participants
and records whose unit equals ``user.unit`` and every participant they create
gets that unit stamped on it.
"""

from __future__ import annotations

from typing import Optional

from .model import User


def scope_unit(user: User) -> Optional[str]:
    if user.is_admin:
        return None
    return user.unit


def is_visible_unit(user: User, unit: str) -> bool:
    scoped = scope_unit(user)
    return scoped is None or unit == scoped


def stamp_unit(user: User, unit: Optional[str]) -> Optional[str]:
    """Unit to store for a participant created by ``user``."""
    return user.unit or unit


def can_view_reports(user: User) -> bool:
    return user.is_admin


def can_manage_periods(user: User) -> bool:
    return user.is_admin


def can_access_period(user: User, *, is_open: bool) -> bool:
    # Admins may enter a closed month (with a warning); everyone else is locked out.
    return is_open or user.is_admin
