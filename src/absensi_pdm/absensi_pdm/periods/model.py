from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PeriodStatus:
    """Status buka/tutup absensi untuk satu bulan (month_index 0-11)."""

    year: int
    month_index: int
    is_open: bool

    def to_dict(self) -> dict:
        return {"year": self.year, "monthIndex": self.month_index, "isOpen": self.is_open}

    @classmethod
    def from_dict(cls, data: dict) -> "PeriodStatus":
        return cls(
            year=int(data["year"]),
            month_index=int(data["monthIndex"]),
            is_open=bool(data.get("isOpen", False)),
        )


@dataclass(frozen=True)
class MonthOverview:
    year: int
    month_index: int
    name: str
    is_open: bool
    can_access: bool
    record_count: int
