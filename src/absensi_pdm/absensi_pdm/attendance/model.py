from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import format_timestamp, parse_timestamp
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """One participant's attendance for one local calendar day.

    ``participant_name``/``participant_unit`` are a snapshot taken at recording
    time and are not updated when the participant changes or is deleted.
    """

    record_id: str
    participant_id: str
    participant_name: str
    participant_unit: str
    timestamp: datetime
    date_string: str
    status: Optional[AttendanceStatus]
    notes: Optional[str] = None

    @property
    def effective_status(self) -> AttendanceStatus:
        """Legacy records written before statuses existed count as present."""
        return self.status or AttendanceStatus.PRESENT

    def to_dict(self) -> dict:
        data = {
            "id": self.record_id,
            "participantId": self.participant_id,
            "participantName": self.participant_name,
            "participantUnit": self.participant_unit,
            "timestamp": format_timestamp(self.timestamp),
            "dateString": self.date_string,
        }
        if self.status is not None:
            data["status"] = self.status.value
        if self.notes is not None:
            data["notes"] = self.notes
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "AttendanceRecord":
        return cls(
            record_id=str(data["id"]),
            participant_id=str(data["participantId"]),
            participant_name=str(data.get("participantName", "")),
            participant_unit=str(data.get("participantUnit", "")),
            timestamp=parse_timestamp(data["timestamp"]),
            date_string=str(data["dateString"]),
            status=_read_status(data.get("status")),
            notes=data.get("notes"),
        )


def _read_status(value) -> Optional[AttendanceStatus]:
    """Stored status, or ``None`` (read as present) when missing or unrecognised."""
    try:
        return AttendanceStatus(str(value).strip().lower()) if value else None
    except ValueError:
        return None
