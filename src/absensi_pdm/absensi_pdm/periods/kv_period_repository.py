from __future__ import annotations

from typing import Sequence

from ..core.constants import STORAGE_KEY_PERIODS
from ..database.kv_store import KeyValueStore, load_json_list, save_json_list
from .model import PeriodStatus
from .repository import PeriodRepository


class KeyValuePeriodRepository(PeriodRepository):
    def __init__(self, store: KeyValueStore):
        self._store = store

    def list_all(self) -> Sequence[PeriodStatus]:
        data = load_json_list(self._store, STORAGE_KEY_PERIODS) or []
        return [PeriodStatus.from_dict(d) for d in data]

    def save_all(self, periods: Sequence[PeriodStatus]) -> None:
        save_json_list(self._store, STORAGE_KEY_PERIODS, [p.to_dict() for p in periods])
