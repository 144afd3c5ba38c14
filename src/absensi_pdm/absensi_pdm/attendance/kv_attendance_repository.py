from __future__ import annotations

from typing import Optional, Sequence

from ..core.constants import STORAGE_KEY_ATTENDANCE
from ..core.exceptions import AlreadyRecordedError
from ..database.kv_store import KeyValueStore, load_json_list, save_json_list
from .model import AttendanceRecord
from .repository import AttendanceRepository


class KeyValueAttendanceRepository(AttendanceRepository):
    def __init__(self, store: KeyValueStore):
        self._store = store

    def list_all(self) -> Sequence[AttendanceRecord]:
        data = load_json_list(self._store, STORAGE_KEY_ATTENDANCE) or []
        return [AttendanceRecord.from_dict(d) for d in data]

    def find(self, participant_id: str, date_string: str) -> Optional[AttendanceRecord]:
        for r in self.list_all():
            if r.participant_id == participant_id and r.date_string == date_string:
                return r
        return None

    def add(self, record: AttendanceRecord) -> None:
        items = list(self.list_all())
        if any(r.participant_id == record.participant_id and r.date_string == record.date_string for r in items):
            raise AlreadyRecordedError(f"{record.participant_name} sudah absen pada {record.date_string}.")
        items.append(record)
        save_json_list(self._store, STORAGE_KEY_ATTENDANCE, [r.to_dict() for r in items])
