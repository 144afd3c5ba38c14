from __future__ import annotations

import logging
from typing import Mapping

from ..common.validators import require_month_index
from ..core.constants import MONTH_NAMES
from ..core.exceptions import AuthorizationError
from ..users import access
from ..users.model import User
from .model import MonthOverview, PeriodStatus
from .repository import PeriodRepository

logger = logging.getLogger(__name__)


class PeriodService:
    """Open/closed flag per (year, month). Months start closed until an admin opens them."""

    def __init__(self, periods: PeriodRepository):
        self._periods = periods

    def is_open(self, year: int, month_index: int) -> bool:
        for p in self._periods.list_all():
            if p.year == int(year) and p.month_index == int(month_index):
                return p.is_open
        return False

    def toggle(self, user: User, year: int, month_index: int) -> bool:
        """Flip the flag (creating the entry if absent) and return the new value."""

        if not access.can_manage_periods(user):
            raise AuthorizationError("Hanya admin yang dapat membuka/menutup periode")
        month_index = require_month_index(month_index)

        items = list(self._periods.list_all())
        for i, p in enumerate(items):
            if p.year == int(year) and p.month_index == month_index:
                items[i] = PeriodStatus(year=p.year, month_index=p.month_index, is_open=not p.is_open)
                new_state = items[i].is_open
                break
        else:
            new_state = True
            items.append(PeriodStatus(year=int(year), month_index=month_index, is_open=True))

        self._periods.save_all(items)
        logger.info(
            "Period %04d-%02d %s by %s",
            int(year),
            month_index + 1,
            "opened" if new_state else "closed",
            user.username,
        )
        return new_state

    def months_for(self, user: User, year: int, counts: Mapping[int, int] | None = None) -> list[MonthOverview]:
        counts = counts or {}
        out = []
        for index, name in enumerate(MONTH_NAMES):
            is_open = self.is_open(year, index)
            out.append(
                MonthOverview(
                    year=int(year),
                    month_index=index,
                    name=name,
                    is_open=is_open,
                    can_access=access.can_access_period(user, is_open=is_open),
                    record_count=int(counts.get(index, 0)),
                )
            )
        return out
