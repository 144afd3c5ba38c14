from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.constants import STORAGE_KEY_PARTICIPANTS
from ..database.kv_store import KeyValueStore, load_json_list, save_json_list
from .model import Participant
from .repository import ParticipantRepository

logger = logging.getLogger(__name__)

# (id, name, unit)
SEED_PARTICIPANTS: tuple[tuple[str, str, str], ...] = (
    ("1", "Ahmad Fauzan", "SMA Muhammadiyah Pagar Alam"),
    ("2", "Siti Rohimah", "SD Muhammadiyah 1 Pagar Alam"),
    ("3", "Rizky Saputra", "MTs Muhammadiyah Pagar Alam"),
    ("4", "Nurjanah", "Panti Asuhan Muhammadiyah"),
    ("5", "Budi Santoso", "PDM Pagar Alam"),
)


class KeyValueParticipantRepository(ParticipantRepository):
    def __init__(self, store: KeyValueStore, *, clock: Callable = now_local):
        self._store = store
        self._clock = clock

    def _seed(self) -> list[Participant]:
        now = self._clock()
        seeded = [
            Participant(participant_id=pid, name=name, unit=unit, registered_at=now)
            for pid, name, unit in SEED_PARTICIPANTS
        ]
        self.save_all(seeded)
        logger.info("Seeded %d sample participants", len(seeded))
        return seeded

    def list_all(self) -> Sequence[Participant]:
        data = load_json_list(self._store, STORAGE_KEY_PARTICIPANTS)
        if data is None:
            return self._seed()
        return [Participant.from_dict(d) for d in data]

    def get_by_id(self, participant_id: str) -> Optional[Participant]:
        for p in self.list_all():
            if p.participant_id == participant_id:
                return p
        return None

    def save_all(self, participants: Sequence[Participant]) -> None:
        save_json_list(self._store, STORAGE_KEY_PARTICIPANTS, [p.to_dict() for p in participants])
