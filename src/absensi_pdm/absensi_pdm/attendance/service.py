from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import local_date_string, now_local, pinned_month_date, to_local
from ..common.ids import new_id
from ..core.enums import AttendanceStatus
from ..core.exceptions import (
    AlreadyRecordedError,
    MissingExcuseReasonError,
    PeriodClosedError,
    ValidationError,
)
from ..participants.model import Participant
from ..participants.repository import ParticipantRepository
from ..participants.service import matches_search
from ..periods.service import PeriodService
from ..users import access
from ..users.model import User
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RosterRow:
    participant: Participant
    record: Optional[AttendanceRecord]

    @property
    def is_recorded(self) -> bool:
        return self.record is not None


def parse_status(value) -> AttendanceStatus:
    if isinstance(value, AttendanceStatus):
        return value
    try:
        return AttendanceStatus(str(value or "").strip().lower())
    except ValueError:
        raise ValidationError("Status kehadiran tidak valid")


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        participants: ParticipantRepository,
        periods: PeriodService,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._participants = participants
        self._periods = periods
        self._clock = clock

    def check_in(
        self,
        user: User,
        participant_id: str,
        status,
        *,
        notes: Optional[str] = None,
        effective_date: Optional[datetime] = None,
    ) -> AttendanceRecord:
        """Record one participant's status for the local day of ``effective_date``.

        A participant/day pair moves from "no record" to "recorded" exactly
        once; later submissions fail with ``AlreadyRecordedError``.
        """

        participant = self._participants.get_by_id(participant_id)
        if not participant or not access.is_visible_unit(user, participant.unit):
            raise ValidationError("Peserta tidak ditemukan")

        status = parse_status(status)
        notes = (notes or "").strip() or None
        if status == AttendanceStatus.EXCUSED and not notes:
            raise MissingExcuseReasonError("Mohon isi alasan izin.")
        if status != AttendanceStatus.EXCUSED:
            notes = None

        when = to_local(effective_date) if effective_date else self._clock()
        if not self._periods.is_open(when.year, when.month - 1):
            if not user.is_admin:
                logger.warning(
                    "Check-in by %s rejected: period %04d-%02d closed", user.username, when.year, when.month
                )
                raise PeriodClosedError("Periode absensi bulan ini ditutup.")
            logger.warning("Admin %s recording into closed period %04d-%02d", user.username, when.year, when.month)

        date_string = local_date_string(when)
        if self._attendance.find(participant.participant_id, date_string):
            raise AlreadyRecordedError(f"{participant.name} sudah absen di bulan ini.")

        record = AttendanceRecord(
            record_id=new_id(),
            participant_id=participant.participant_id,
            participant_name=participant.name,
            participant_unit=participant.unit,
            timestamp=when,
            date_string=date_string,
            status=status,
            notes=notes,
        )
        self._attendance.add(record)
        logger.info("Recorded %s for %s on %s", status.value, participant.participant_id, date_string)
        return record

    def check_in_for_month(
        self,
        user: User,
        participant_id: str,
        status,
        *,
        year: int,
        month_index: int,
        notes: Optional[str] = None,
    ) -> AttendanceRecord:
        """Back-dated entry pinned to the 1st of the month at 09:00."""
        return self.check_in(
            user,
            participant_id,
            status,
            notes=notes,
            effective_date=pinned_month_date(year, month_index),
        )

    def record_for(self, participant_id: str, date_string: str) -> Optional[AttendanceRecord]:
        return self._attendance.find(participant_id, date_string)

    def is_recorded(self, participant_id: str, date_string: str) -> bool:
        return self.record_for(participant_id, date_string) is not None

    def visible_records(self, user: User) -> list[AttendanceRecord]:
        return [r for r in self._attendance.list_all() if access.is_visible_unit(user, r.participant_unit)]

    def month_counts(self, user: User, year: int) -> dict[int, int]:
        """Visible record count per month index for ``year``."""

        prefix = f"{int(year):04d}-"
        counts: Counter[int] = Counter()
        for r in self.visible_records(user):
            if r.date_string.startswith(prefix):
                counts[int(r.date_string[5:7]) - 1] += 1
        return dict(counts)

    def roster(self, user: User, date_string: str, *, search: str = "") -> list[RosterRow]:
        """Visible participants matching ``search`` with their record for the day, if any."""

        by_participant = {
            r.participant_id: r for r in self._attendance.list_all() if r.date_string == date_string
        }
        return [
            RosterRow(participant=p, record=by_participant.get(p.participant_id))
            for p in self._participants.list_all()
            if access.is_visible_unit(user, p.unit) and matches_search(p, search)
        ]
