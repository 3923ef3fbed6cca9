from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import CheckInStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceStore
from .attendance.service import AttendanceLedger
from .checkin.issuer import CheckInTokenIssuer
from .checkin.renderer import QRCodePngRenderer, QRRenderer
from .cohorts.mysql_cohort_repository import MySQLCohortRosterProvider
from .cohorts.repository import CohortRosterProvider
from .common.clock import Clock, SystemClock
from .core.constants import DEFAULT_GEOFENCE_RADIUS_METERS, DEFAULT_LATE_GRACE_MINUTES
from .database.connection import DBConfig, DatabaseConnection
from .points.awarder import PointsAwarder
from .points.mysql_points_awarder import MySQLPointsAwarder
from .reports.cohort_stats import CohortStatsAggregator
from .reports.session_report import SessionReportBuilder
from .sessions.mysql_session_repository import MySQLSessionRepository
from .sessions.repository import SessionRepository


@dataclass(frozen=True)
class AttendanceSettings:
    frontend_url: str
    late_grace_minutes: int = DEFAULT_LATE_GRACE_MINUTES
    enforce_geofence: bool = False
    geofence_radius_meters: float = DEFAULT_GEOFENCE_RADIUS_METERS


@dataclass(frozen=True)
class Container:
    settings: AttendanceSettings

    attendance_repo: AttendanceStore
    sessions_repo: SessionRepository
    rosters: CohortRosterProvider
    points_awarder: PointsAwarder

    attendance_ledger: AttendanceLedger
    token_issuer: CheckInTokenIssuer
    session_reports: SessionReportBuilder
    cohort_stats: CohortStatsAggregator


def wire_container(
    *,
    settings: AttendanceSettings,
    attendance_repo: AttendanceStore,
    sessions_repo: SessionRepository,
    rosters: CohortRosterProvider,
    points_awarder: PointsAwarder,
    renderer: Optional[QRRenderer] = None,
    clock: Optional[Clock] = None,
) -> Container:
    ledger = AttendanceLedger(
        attendance_repo,
        sessions_repo,
        rosters,
        points_awarder,
        clock=clock or SystemClock(),
        strategy_factory=CheckInStrategyFactory(grace_minutes=int(settings.late_grace_minutes)),
        enforce_geofence=settings.enforce_geofence,
        geofence_radius_meters=settings.geofence_radius_meters,
    )
    issuer = CheckInTokenIssuer(
        sessions_repo,
        renderer or QRCodePngRenderer(),
        frontend_url=settings.frontend_url,
    )

    return Container(
        settings=settings,
        attendance_repo=attendance_repo,
        sessions_repo=sessions_repo,
        rosters=rosters,
        points_awarder=points_awarder,
        attendance_ledger=ledger,
        token_issuer=issuer,
        session_reports=SessionReportBuilder(attendance_repo, sessions_repo, rosters),
        cohort_stats=CohortStatsAggregator(attendance_repo, sessions_repo, rosters),
    )


def build_container(*, db_config: dict, settings: AttendanceSettings) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection.get_instance(config)

    return wire_container(
        settings=settings,
        attendance_repo=MySQLAttendanceRepository(conn),
        sessions_repo=MySQLSessionRepository(conn),
        rosters=MySQLCohortRosterProvider(conn),
        points_awarder=MySQLPointsAwarder(conn),
    )
