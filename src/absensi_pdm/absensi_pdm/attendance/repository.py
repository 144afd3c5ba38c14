from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_all(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def find(self, participant_id: str, date_string: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def add(self, record: AttendanceRecord) -> None:
        """Append a record.

        Implementations must refuse a second record for the same
        (participant_id, date_string) with ``AlreadyRecordedError``.
        """

        raise NotImplementedError
