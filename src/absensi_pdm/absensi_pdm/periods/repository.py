from __future__ import annotations

from typing import Protocol, Sequence

from .model import PeriodStatus


class PeriodRepository(Protocol):
    def list_all(self) -> Sequence[PeriodStatus]:
        raise NotImplementedError

    def save_all(self, periods: Sequence[PeriodStatus]) -> None:
        raise NotImplementedError
