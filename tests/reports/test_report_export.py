from __future__ import annotations

from datetime import datetime
from typing import Optional

from src.absensi_pdm.absensi_pdm.attendance.model import AttendanceRecord
from src.absensi_pdm.absensi_pdm.core.enums import AttendanceStatus
from src.absensi_pdm.absensi_pdm.reports.export import (
    export_filename,
    filter_by_month,
    sort_descending_by_timestamp,
    to_csv,
)


def _rec(
    rid: str,
    when: datetime,
    *,
    status: Optional[AttendanceStatus] = AttendanceStatus.PRESENT,
    notes: Optional[str] = None,
    name: str = "Ahmad",
    unit: str = "SMA Muhammadiyah Pagar Alam",
) -> AttendanceRecord:
    when = when.astimezone()
    return AttendanceRecord(
        record_id=rid,
        participant_id="p-" + rid,
        participant_name=name,
        participant_unit=unit,
        timestamp=when,
        date_string=when.strftime("%Y-%m-%d"),
        status=status,
        notes=notes,
    )


def test_filter_by_month_uses_date_prefix():
    records = [
        _rec("a", datetime(2026, 1, 5, 9)),
        _rec("b", datetime(2026, 2, 1, 9)),
        _rec("c", datetime(2025, 1, 5, 9)),
    ]

    assert [r.record_id for r in filter_by_month(records, 2026, 0)] == ["a"]
    assert [r.record_id for r in filter_by_month(records, 2026, 1)] == ["b"]
    assert filter_by_month(records, 2026, 11) == []


def test_sort_puts_latest_first_and_keeps_ties_in_order():
    t1 = datetime(2026, 1, 5, 9)
    t2 = datetime(2026, 1, 6, 9)
    records = [_rec("old", t1), _rec("new", t2), _rec("tie-a", t1), _rec("tie-b", t1)]

    assert [r.record_id for r in sort_descending_by_timestamp(records)] == ["new", "old", "tie-a", "tie-b"]


def test_csv_header_and_excused_row():
    rec = _rec("a", datetime(2026, 1, 5, 9, 15, 30), status=AttendanceStatus.EXCUSED, notes="sakit keluarga")

    lines = to_csv([rec]).split("\n")

    assert lines[0] == "Tanggal,Jam,Nama Peserta,Unit Asal,Status,Keterangan"
    assert lines[1] == '2026-01-05,09.15.30,"Ahmad","SMA Muhammadiyah Pagar Alam",IZIN,"sakit keluarga"'


def test_csv_legacy_record_exports_as_present_with_dash_notes():
    rec = _rec("a", datetime(2026, 1, 5, 9), status=None)

    row = to_csv([rec]).split("\n")[1]

    assert row.endswith(',HADIR,"-"')


def test_csv_quotes_commas_and_quotes():
    rec = _rec("a", datetime(2026, 1, 5, 9), name='Budi "Ucok", S.Pd', status=AttendanceStatus.SICK)

    row = to_csv([rec]).split("\n")[1]

    assert '"Budi ""Ucok"", S.Pd"' in row
    assert ",SAKIT," in row


def test_csv_empty_has_only_header():
    assert to_csv([]) == "Tanggal,Jam,Nama Peserta,Unit Asal,Status,Keterangan"


def test_export_filename():
    assert export_filename(2026, 0) == "rekap_absensi_Januari_2026.csv"
    assert export_filename(2026, 11) == "rekap_absensi_Desember_2026.csv"
    assert export_filename(2026) == "rekap_absensi_semua_2026.csv"
