from __future__ import annotations

from datetime import datetime

import pytest

from src.absensi_pdm.absensi_pdm.attendance.kv_attendance_repository import KeyValueAttendanceRepository
from src.absensi_pdm.absensi_pdm.core.enums import AttendanceStatus
from src.absensi_pdm.absensi_pdm.core.exceptions import (
    AlreadyRecordedError,
    MissingExcuseReasonError,
    PeriodClosedError,
    ValidationError,
)
from src.absensi_pdm.absensi_pdm.reports.export import to_row


def _records(store):
    return list(KeyValueAttendanceRepository(store).list_all())


def test_checkin_creates_one_record_for_local_day(attendance_service, period_service, admin, store):
    period_service.toggle(admin, 2026, 0)

    # Late evening local time must still land on the local calendar day.
    rec = attendance_service.check_in(
        admin, "p1", AttendanceStatus.PRESENT, effective_date=datetime(2026, 1, 5, 23, 30)
    )

    assert rec.date_string == "2026-01-05"
    assert rec.participant_name == "Ahmad"
    assert rec.status == AttendanceStatus.PRESENT
    assert rec.notes is None
    assert len(_records(store)) == 1


def test_checkin_defaults_to_clock(attendance_service, period_service, admin, fixed_now):
    period_service.toggle(admin, 2026, 0)

    rec = attendance_service.check_in(admin, "p2", "sakit")

    assert rec.timestamp == fixed_now
    assert rec.date_string == "2026-01-05"
    assert rec.status == AttendanceStatus.SICK


def test_second_checkin_same_day_is_rejected(attendance_service, period_service, admin, store):
    period_service.toggle(admin, 2026, 0)
    when = datetime(2026, 1, 5, 9, 0)

    attendance_service.check_in(admin, "p1", "hadir", effective_date=when)
    with pytest.raises(AlreadyRecordedError):
        attendance_service.check_in(admin, "p1", "sakit", effective_date=when.replace(hour=15))

    assert len(_records(store)) == 1


def test_excused_without_reason_is_rejected_before_writing(attendance_service, period_service, admin, store):
    period_service.toggle(admin, 2026, 0)

    with pytest.raises(MissingExcuseReasonError):
        attendance_service.check_in(admin, "p1", AttendanceStatus.EXCUSED, notes="")
    with pytest.raises(MissingExcuseReasonError):
        attendance_service.check_in(admin, "p1", AttendanceStatus.EXCUSED, notes="   ")

    assert _records(store) == []


def test_excused_keeps_reason(attendance_service, period_service, admin):
    period_service.toggle(admin, 2026, 0)

    rec = attendance_service.check_in(admin, "p1", "izin", notes=" sakit keluarga ")

    assert rec.status == AttendanceStatus.EXCUSED
    assert rec.notes == "sakit keluarga"


@pytest.mark.parametrize("status", ["hadir", "sakit"])
def test_reason_is_dropped_for_non_excused_status(attendance_service, period_service, admin, status):
    period_service.toggle(admin, 2026, 0)

    rec = attendance_service.check_in(admin, "p1", status, notes="typed by mistake")

    assert rec.notes is None
    assert to_row(rec)[-1] == '"-"'


def test_unit_user_blocked_when_period_closed(attendance_service, sd_user, store):
    with pytest.raises(PeriodClosedError):
        attendance_service.check_in(sd_user, "p2", "hadir")

    assert _records(store) == []


def test_unit_user_can_checkin_when_period_open(attendance_service, period_service, admin, sd_user):
    period_service.toggle(admin, 2026, 0)

    rec = attendance_service.check_in(sd_user, "p2", "hadir")

    assert rec.participant_unit == "SD Muhammadiyah 1 Pagar Alam"


def test_admin_bypasses_closed_period(attendance_service, admin):
    rec = attendance_service.check_in(admin, "p1", "hadir")

    assert rec.date_string == "2026-01-05"


def test_unit_user_cannot_record_other_unit(attendance_service, period_service, admin, sd_user):
    period_service.toggle(admin, 2026, 0)

    with pytest.raises(ValidationError):
        attendance_service.check_in(sd_user, "p1", "hadir")


def test_unknown_status_rejected(attendance_service, admin):
    with pytest.raises(ValidationError):
        attendance_service.check_in(admin, "p1", "terlambat")


def test_month_checkin_is_pinned_to_first_day_nine_am(attendance_service, period_service, admin, sd_user):
    period_service.toggle(admin, 2026, 2)

    rec = attendance_service.check_in_for_month(sd_user, "p3", "hadir", year=2026, month_index=2)

    assert rec.date_string == "2026-03-01"
    assert (rec.timestamp.hour, rec.timestamp.minute) == (9, 0)
    assert attendance_service.is_recorded("p3", "2026-03-01")


def test_month_checkin_uses_target_month_period(attendance_service, period_service, admin, sd_user):
    # January is open, but the pinned date is in March.
    period_service.toggle(admin, 2026, 0)

    with pytest.raises(PeriodClosedError):
        attendance_service.check_in_for_month(sd_user, "p2", "hadir", year=2026, month_index=2)


def test_history_survives_participant_deletion(attendance_service, participant_service, admin):
    rec = attendance_service.check_in(admin, "p2", "hadir")

    participant_service.delete(admin, "p2")

    kept = attendance_service.record_for("p2", rec.date_string)
    assert kept is not None
    assert kept.participant_name == "Siti Rohimah"


def test_month_counts_respect_unit_scope(attendance_service, admin, sd_user):
    attendance_service.check_in(admin, "p1", "hadir")
    attendance_service.check_in(admin, "p2", "hadir")
    attendance_service.check_in_for_month(admin, "p3", "sakit", year=2026, month_index=1)

    assert attendance_service.month_counts(admin, 2026) == {0: 2, 1: 1}
    assert attendance_service.month_counts(sd_user, 2026) == {0: 1, 1: 1}


def test_roster_marks_recorded_participants(attendance_service, admin, sd_user):
    attendance_service.check_in(admin, "p2", "izin", notes="acara keluarga")

    rows = attendance_service.roster(sd_user, "2026-01-05", search="")

    by_id = {r.participant.participant_id: r for r in rows}
    assert set(by_id) == {"p2", "p3"}
    assert by_id["p2"].is_recorded
    assert not by_id["p3"].is_recorded
