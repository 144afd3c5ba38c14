from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Participant


class ParticipantRepository(Protocol):
    def list_all(self) -> Sequence[Participant]:
        raise NotImplementedError

    def get_by_id(self, participant_id: str) -> Optional[Participant]:
        raise NotImplementedError

    def save_all(self, participants: Sequence[Participant]) -> None:
        """Replace the whole collection."""

        raise NotImplementedError
