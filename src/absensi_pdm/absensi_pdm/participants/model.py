from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..common.datetime_utils import format_timestamp, parse_timestamp


@dataclass(frozen=True)
class Participant:
    """Peserta pengajian; ``unit`` adalah sekolah/amal usaha asal."""

    participant_id: str
    name: str
    unit: str
    registered_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.participant_id,
            "name": self.name,
            "unit": self.unit,
            "registeredAt": format_timestamp(self.registered_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Participant":
        return cls(
            participant_id=str(data["id"]),
            name=str(data.get("name", "")),
            unit=str(data.get("unit", "")),
            registered_at=parse_timestamp(data["registeredAt"]),
        )


@dataclass(frozen=True)
class ImportResult:
    parsed: int
    added: list[Participant]

    @property
    def skipped(self) -> int:
        return self.parsed - len(self.added)
