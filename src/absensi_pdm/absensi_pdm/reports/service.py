from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..attendance.service import AttendanceService
from ..common.validators import require_month_index
from ..core.constants import MONTH_NAMES
from ..core.enums import AttendanceStatus
from ..core.exceptions import AuthorizationError
from ..participants.service import ParticipantService
from ..users import access
from ..users.model import User
from .export import export_filename, filter_by_month, sort_descending_by_timestamp, to_csv


@dataclass(frozen=True)
class MonthSummary:
    month_index: int
    name: str
    record_count: int


@dataclass(frozen=True)
class ReportData:
    year: int
    month_index: Optional[int]
    rows: list[AttendanceRecord]
    filename: str

    @property
    def title(self) -> str:
        if self.month_index is None:
            return f"Semua Data {self.year}"
        return f"{MONTH_NAMES[self.month_index]} {self.year}"

    def to_csv(self) -> str:
        return to_csv(self.rows)


class ReportService:
    """Admin-only monthly recap built from the attendance store."""

    def __init__(self, attendance: AttendanceService):
        self._attendance = attendance

    def _require_access(self, user: User) -> None:
        if not access.can_view_reports(user):
            raise AuthorizationError("Laporan hanya tersedia untuk admin")

    def month_overview(self, user: User, year: int) -> list[MonthSummary]:
        self._require_access(user)
        counts = self._attendance.month_counts(user, year)
        return [
            MonthSummary(month_index=i, name=name, record_count=counts.get(i, 0))
            for i, name in enumerate(MONTH_NAMES)
        ]

    def build(self, user: User, *, year: int, month_index: Optional[int] = None) -> ReportData:
        """Rows for one month (or every record when ``month_index`` is None), newest first."""

        self._require_access(user)
        records = self._attendance.visible_records(user)
        if month_index is not None:
            month_index = require_month_index(month_index)
            records = filter_by_month(records, year, month_index)

        return ReportData(
            year=int(year),
            month_index=month_index,
            rows=sort_descending_by_timestamp(records),
            filename=export_filename(year, month_index),
        )


@dataclass(frozen=True)
class UnitStat:
    name: str
    count: int


@dataclass(frozen=True)
class DashboardStats:
    total_participants: int
    present_today: int
    attendance_rate: str
    today: str
    unit_stats: list[UnitStat]


class DashboardService:
    def __init__(self, participants: ParticipantService, attendance: AttendanceService):
        self._participants = participants
        self._attendance = attendance

    def stats(self, user: User, *, today: date) -> DashboardStats:
        """Headline numbers; sick/excused records do not count as present."""

        participants = self._participants.list_visible(user)
        today_s = today.strftime("%Y-%m-%d")

        present = sum(
            1
            for r in self._attendance.visible_records(user)
            if r.date_string == today_s and r.effective_status == AttendanceStatus.PRESENT
        )
        total = len(participants)
        rate = f"{present / total * 100:.1f}" if total else "0"

        unit_stats: list[UnitStat] = []
        if user.is_admin:
            counts: dict[str, int] = {}
            for p in participants:
                counts[p.unit] = counts.get(p.unit, 0) + 1
            unit_stats = [UnitStat(name=k, count=v) for k, v in counts.items()]

        return DashboardStats(
            total_participants=total,
            present_today=present,
            attendance_rate=rate,
            today=today_s,
            unit_stats=unit_stats,
        )
