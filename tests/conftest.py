from __future__ import annotations

import json
from datetime import datetime

import pytest

from src.absensi_pdm.absensi_pdm.attendance.kv_attendance_repository import KeyValueAttendanceRepository
from src.absensi_pdm.absensi_pdm.attendance.service import AttendanceService
from src.absensi_pdm.absensi_pdm.core.constants import STORAGE_KEY_PARTICIPANTS
from src.absensi_pdm.absensi_pdm.core.enums import Role
from src.absensi_pdm.absensi_pdm.database.kv_store import MemoryStore
from src.absensi_pdm.absensi_pdm.participants.kv_participant_repository import KeyValueParticipantRepository
from src.absensi_pdm.absensi_pdm.participants.model import Participant
from src.absensi_pdm.absensi_pdm.participants.service import ParticipantService
from src.absensi_pdm.absensi_pdm.periods.kv_period_repository import KeyValuePeriodRepository
from src.absensi_pdm.absensi_pdm.periods.service import PeriodService
from src.absensi_pdm.absensi_pdm.users.model import User

SD_UNIT = "SD Muhammadiyah 1 Pagar Alam"
SMA_UNIT = "SMA Muhammadiyah Pagar Alam"


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 1, 5, 10, 30, 0).astimezone()


@pytest.fixture
def admin() -> User:
    return User(username="admin", name="Administrator PDM", role=Role.ADMIN)


@pytest.fixture
def sd_user() -> User:
    return User(username="sd", name="Admin SD Muhammadiyah", role=Role.USER, unit=SD_UNIT)


def make_participant(pid: str, name: str, unit: str) -> Participant:
    return Participant(
        participant_id=pid,
        name=name,
        unit=unit,
        registered_at=datetime(2026, 1, 1, 8, 0, 0).astimezone(),
    )


def store_with(*participants: Participant) -> MemoryStore:
    """Store whose participant collection already exists (so no seeding happens)."""
    return MemoryStore({STORAGE_KEY_PARTICIPANTS: json.dumps([p.to_dict() for p in participants])})


@pytest.fixture
def store() -> MemoryStore:
    return store_with(
        make_participant("p1", "Ahmad", SMA_UNIT),
        make_participant("p2", "Siti Rohimah", SD_UNIT),
        make_participant("p3", "Budi, S.Pd", SD_UNIT),
    )


@pytest.fixture
def participant_service(store, fixed_now) -> ParticipantService:
    return ParticipantService(KeyValueParticipantRepository(store), clock=lambda: fixed_now)


@pytest.fixture
def period_service(store) -> PeriodService:
    return PeriodService(KeyValuePeriodRepository(store))


@pytest.fixture
def attendance_service(store, period_service, fixed_now) -> AttendanceService:
    return AttendanceService(
        KeyValueAttendanceRepository(store),
        KeyValueParticipantRepository(store),
        period_service,
        clock=lambda: fixed_now,
    )
