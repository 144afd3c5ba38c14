"""Monthly report filtering, ordering and CSV serialization."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import month_prefix, to_local
from ..core.constants import MONTH_NAMES

CSV_HEADERS = ("Tanggal", "Jam", "Nama Peserta", "Unit Asal", "Status", "Keterangan")


def filter_by_month(records: Iterable[AttendanceRecord], year: int, month_index: int) -> list[AttendanceRecord]:
    prefix = month_prefix(year, month_index)
    return [r for r in records if r.date_string.startswith(prefix)]


def sort_descending_by_timestamp(records: Iterable[AttendanceRecord]) -> list[AttendanceRecord]:
    # sorted() is stable, so equal timestamps keep their input order.
    return sorted(records, key=lambda r: r.timestamp, reverse=True)


def _quoted(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def format_time(record: AttendanceRecord) -> str:
    """Local wall-clock time as HH.MM.SS."""
    return to_local(record.timestamp).strftime("%H.%M.%S")


def to_row(record: AttendanceRecord) -> list[str]:
    return [
        record.date_string,
        format_time(record),
        _quoted(record.participant_name),
        _quoted(record.participant_unit),
        record.effective_status.value.upper(),
        _quoted(record.notes or "-"),
    ]


def to_csv(records: Sequence[AttendanceRecord]) -> str:
    lines = [",".join(CSV_HEADERS)]
    lines.extend(",".join(to_row(r)) for r in records)
    return "\n".join(lines)


def export_filename(year: int, month_index: Optional[int] = None) -> str:
    if month_index is None:
        return f"rekap_absensi_semua_{int(year)}.csv"
    return f"rekap_absensi_{MONTH_NAMES[int(month_index)]}_{int(year)}.csv"
