from __future__ import annotations

import io
import logging
import math
from dataclasses import dataclass, replace
from typing import Callable, Optional, Sequence

import qrcode

from ..common.datetime_utils import now_local
from ..common.ids import new_id
from ..common.validators import require_non_empty
from ..core.constants import ALL_UNITS, PARTICIPANTS_PER_PAGE
from ..core.exceptions import AuthorizationError, ValidationError
from ..users import access
from ..users.model import User
from .model import ImportResult, Participant
from .repository import ParticipantRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Page:
    items: list[Participant]
    page: int
    total_pages: int
    total: int
    start_index: int

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def matches_search(participant: Participant, search: str) -> bool:
    """Case-insensitive substring match against name or unit."""
    term = (search or "").strip().lower()
    if not term:
        return True
    return term in participant.name.lower() or term in participant.unit.lower()


class ParticipantService:
    def __init__(self, participants: ParticipantRepository, *, clock: Callable = now_local):
        self._participants = participants
        self._clock = clock

    def get(self, user: User, participant_id: str) -> Participant:
        p = self._participants.get_by_id(participant_id)
        if not p or not access.is_visible_unit(user, p.unit):
            raise ValidationError("Peserta tidak ditemukan")
        return p

    def list_visible(self, user: User, *, search: str = "", unit_filter: Optional[str] = None) -> list[Participant]:
        out = []
        for p in self._participants.list_all():
            if not access.is_visible_unit(user, p.unit):
                continue
            if not matches_search(p, search):
                continue
            if unit_filter and unit_filter != ALL_UNITS and p.unit != unit_filter:
                continue
            out.append(p)
        return out

    def unit_options(self, user: User) -> list[str]:
        units = {p.unit for p in self._participants.list_all() if access.is_visible_unit(user, p.unit)}
        return [ALL_UNITS, *sorted(units)]

    @staticmethod
    def paginate(items: Sequence[Participant], page: int, *, per_page: int = PARTICIPANTS_PER_PAGE) -> Page:
        total = len(items)
        total_pages = max(1, math.ceil(total / per_page))
        page = min(max(1, int(page or 1)), total_pages)
        start = (page - 1) * per_page
        return Page(
            items=list(items[start : start + per_page]),
            page=page,
            total_pages=total_pages,
            total=total,
            start_index=start,
        )

    def add(self, user: User, *, name: str, unit: str = "") -> Participant:
        name = require_non_empty(name, "Nama peserta")
        unit = require_non_empty(access.stamp_unit(user, (unit or "").strip()) or "", "Unit asal")

        participant = Participant(
            participant_id=new_id(),
            name=name,
            unit=unit,
            registered_at=self._clock(),
        )
        items = list(self._participants.list_all())
        items.append(participant)
        self._participants.save_all(items)

        logger.info("Participant %s added to %s by %s", participant.participant_id, unit, user.username)
        return participant

    def delete(self, user: User, participant_id: str) -> bool:
        """Remove a participant; attendance history is left untouched."""

        items = list(self._participants.list_all())
        target = next((p for p in items if p.participant_id == participant_id), None)
        if not target:
            return False
        if not access.is_visible_unit(user, target.unit):
            raise AuthorizationError("Anda tidak berhak menghapus peserta unit lain")

        self._participants.save_all([p for p in items if p.participant_id != participant_id])
        logger.info("Participant %s deleted by %s", participant_id, user.username)
        return True

    def import_batch(self, user: User, batch: Sequence[Participant]) -> list[Participant]:
        """Merge ``batch`` into the store and return the participants actually added.

        Names already present (case-insensitive) are skipped; the unit is not
        part of the comparison. Restricted users always import into their own unit.
        """

        items = list(self._participants.list_all())
        existing_names = {p.name.lower() for p in items}

        added: list[Participant] = []
        for p in batch:
            unit = access.stamp_unit(user, p.unit)
            if not p.name or not unit:
                continue
            if p.name.lower() in existing_names:
                continue
            added.append(replace(p, unit=unit) if unit != p.unit else p)

        if added:
            self._participants.save_all(items + added)
        logger.info(
            "Import by %s: %d offered, %d added", user.username, len(batch), len(added)
        )
        return added

    def parse_import_csv(self, user: User, text: str) -> list[Participant]:
        """Parse ``name,unit`` lines after a header row.

        No quoting support: each line is split on commas. Blank lines are
        skipped and rows without a name or unit are dropped silently.
        """

        now = self._clock()
        out: list[Participant] = []
        lines = (text or "").lstrip("\ufeff").split("\n")
        for line in lines[1:]:
            line = line.strip()
            if not line:
                continue

            parts = line.split(",")
            name = parts[0].strip()
            unit = parts[1].strip() if len(parts) > 1 else ""
            if user.unit:
                unit = user.unit

            if name and unit:
                out.append(Participant(participant_id=new_id(), name=name, unit=unit, registered_at=now))
        return out

    def import_csv(self, user: User, text: str) -> ImportResult:
        parsed = self.parse_import_csv(user, text)
        if not parsed:
            raise ValidationError("Gagal membaca data atau format CSV salah.")
        return ImportResult(parsed=len(parsed), added=self.import_batch(user, parsed))

    @staticmethod
    def template_csv(user: User) -> str:
        if user.unit:
            return "nama_peserta\nBudi Santoso\nSiti Aminah\n"
        return (
            "nama_peserta,asal_sekolah_atau_amal_usaha\n"
            "Ahmad Fauzan,SMA Muhammadiyah Pagar Alam\n"
            "Siti Rohimah,SD Muhammadiyah 1 Pagar Alam\n"
        )

    @staticmethod
    def make_qr_png(participant: Participant) -> bytes:
        """PNG card encoding the participant id."""

        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_L,
            box_size=10,
            border=2,
        )
        qr.add_data(participant.participant_id)
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")
        buf = io.BytesIO()
        img.save(buf, format="PNG")
        return buf.getvalue()
