from __future__ import annotations

from dataclasses import dataclass

from .attendance.kv_attendance_repository import KeyValueAttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_REPORT_YEAR
from .database.kv_store import KeyValueStore
from .participants.kv_participant_repository import KeyValueParticipantRepository
from .participants.service import ParticipantService
from .periods.kv_period_repository import KeyValuePeriodRepository
from .periods.service import PeriodService
from .reports.service import DashboardService, ReportService
from .users.account_table import FixedAccountRepository
from .users.repository import AccountRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    store: KeyValueStore
    report_year: int

    accounts_repo: AccountRepository
    participants_repo: KeyValueParticipantRepository
    attendance_repo: KeyValueAttendanceRepository
    periods_repo: KeyValuePeriodRepository

    auth_service: AuthService
    participant_service: ParticipantService
    period_service: PeriodService
    attendance_service: AttendanceService
    report_service: ReportService
    dashboard_service: DashboardService


def build_container(
    *,
    store: KeyValueStore,
    report_year: int = DEFAULT_REPORT_YEAR,
    accounts_repo: AccountRepository | None = None,
) -> Container:
    accounts_repo = accounts_repo or FixedAccountRepository.with_defaults()
    participants_repo = KeyValueParticipantRepository(store)
    attendance_repo = KeyValueAttendanceRepository(store)
    periods_repo = KeyValuePeriodRepository(store)

    auth_service = AuthService(accounts_repo)
    participant_service = ParticipantService(participants_repo)
    period_service = PeriodService(periods_repo)
    attendance_service = AttendanceService(attendance_repo, participants_repo, period_service)
    report_service = ReportService(attendance_service)
    dashboard_service = DashboardService(participant_service, attendance_service)

    return Container(
        store=store,
        report_year=int(report_year),
        accounts_repo=accounts_repo,
        participants_repo=participants_repo,
        attendance_repo=attendance_repo,
        periods_repo=periods_repo,
        auth_service=auth_service,
        participant_service=participant_service,
        period_service=period_service,
        attendance_service=attendance_service,
        report_service=report_service,
        dashboard_service=dashboard_service,
    )
