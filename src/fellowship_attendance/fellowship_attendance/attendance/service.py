from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Sequence

from ..cohorts.repository import CohortRosterProvider
from ..common.clock import Clock, SystemClock, ensure_aware
from ..core.constants import DEFAULT_GEOFENCE_RADIUS_METERS
from ..core.enums import PointsEventType
from ..core.exceptions import ConflictError, ForbiddenError, NotFoundError
from ..geofence.validator import is_within_radius
from ..points.awarder import PointsAwarder
from ..points.model import PointsAwardEvent
from ..sessions.model import Session
from ..sessions.repository import SessionRepository
from .factory import CheckInStrategyFactory
from .model import (
    AttendanceRecord,
    AttendanceView,
    CheckInContext,
    CheckInResult,
    SessionSummary,
    UserSummary,
)
from .repository import AttendanceStore

logger = logging.getLogger(__name__)


def _excused(record: AttendanceRecord, notes: Optional[str]) -> AttendanceRecord:
    # Missing notes leave the stored ones alone.
    return replace(record, is_excused=True, notes=notes if notes is not None else record.notes)


class AttendanceLedger:
    """Owns the per-(user, session) attendance record lifecycle."""

    def __init__(
        self,
        attendance: AttendanceStore,
        sessions: SessionRepository,
        rosters: CohortRosterProvider,
        points: PointsAwarder,
        *,
        clock: Clock | None = None,
        strategy_factory: CheckInStrategyFactory | None = None,
        enforce_geofence: bool = False,
        geofence_radius_meters: float = DEFAULT_GEOFENCE_RADIUS_METERS,
    ):
        self._attendance = attendance
        self._sessions = sessions
        self._rosters = rosters
        self._points = points
        self._clock = clock or SystemClock()
        self._factory = strategy_factory or CheckInStrategyFactory()
        self._enforce_geofence = bool(enforce_geofence)
        self._radius = float(geofence_radius_meters)

    def _require_session(self, session_id: str) -> Session:
        session = self._sessions.get_by_id(session_id)
        if not session:
            raise NotFoundError("Session", session_id)
        return session

    def _check_geofence(self, session: Session, context: CheckInContext) -> None:
        if not self._enforce_geofence or session.location is None:
            return
        if not context.has_coordinates:
            raise ForbiddenError("Location is required to check in to this session")
        if not is_within_radius(
            context.latitude,
            context.longitude,
            session.location.latitude,
            session.location.longitude,
            self._radius,
        ):
            raise ForbiddenError("You are too far from the session location to check in")

    def check_in(
        self,
        user_id: str,
        session_id: str,
        context: CheckInContext | None = None,
    ) -> CheckInResult:
        context = context or CheckInContext()
        session = self._require_session(session_id)

        if not self._rosters.is_member(session.cohort_id, user_id):
            raise ForbiddenError("User is not part of this cohort")

        self._check_geofence(session, context)

        now = self._clock.now()
        strategy = self._factory.for_checkin(now=now, session=session)
        decision = strategy.decide_checkin(session=session)

        # insert() is the uniqueness check; a concurrent loser gets ConflictError here.
        try:
            record = self._attendance.insert(
                AttendanceRecord(
                    user_id=user_id,
                    session_id=session_id,
                    check_in_time=now,
                    is_late=decision.is_late,
                    is_excused=False,
                    latitude=context.latitude,
                    longitude=context.longitude,
                    ip_address=context.ip_address,
                    user_agent=context.user_agent,
                )
            )
        except ConflictError:
            raise ConflictError("User already checked in for this session") from None

        logger.info(
            "check-in user=%s session=%s late=%s", user_id, session_id, record.is_late
        )

        event = PointsAwardEvent(
            user_id=user_id,
            amount=decision.points,
            reason=PointsEventType.SESSION_ATTEND,
            description=decision.description,
        )
        points_awarded = self._emit_points(event)

        return CheckInResult(
            attendance=self._to_view(record, session=session, with_user=True),
            points=decision.points,
            points_awarded=points_awarded,
        )

    def _emit_points(self, event: PointsAwardEvent) -> bool:
        try:
            self._points.award(event)
        except Exception:
            logger.exception(
                "points award failed user=%s amount=%s reason=%s",
                event.user_id,
                event.amount,
                event.reason.value,
            )
            return False
        return True

    def check_out(self, user_id: str, session_id: str) -> AttendanceView:
        record = self._attendance.get(user_id, session_id)
        if not record:
            raise NotFoundError("Attendance record", message="Attendance record not found")
        if record.check_out_time is not None:
            raise ConflictError("User already checked out")

        now = self._clock.now()
        # Excused placeholders carry the scheduled date as check-in time.
        check_out_time = max(ensure_aware(now), ensure_aware(record.check_in_time))

        updated = self._attendance.update(replace(record, check_out_time=check_out_time))
        logger.info("check-out user=%s session=%s", user_id, session_id)
        return self._to_view(updated, with_user=True)

    def mark_excused(self, session_id: str, user_id: str, notes: Optional[str] = None) -> AttendanceView:
        record = self._attendance.get(user_id, session_id)
        if record:
            updated = self._attendance.update(_excused(record, notes))
            logger.info("excused existing record user=%s session=%s", user_id, session_id)
            return self._to_view(updated)

        session = self._require_session(session_id)
        try:
            created = self._attendance.insert(
                AttendanceRecord(
                    user_id=user_id,
                    session_id=session_id,
                    check_in_time=session.scheduled_date,
                    is_late=False,
                    is_excused=True,
                    notes=notes,
                )
            )
        except ConflictError:
            # Someone checked in (or excused) between get() and insert().
            existing = self._attendance.get(user_id, session_id)
            if existing is None:
                raise
            created = self._attendance.update(_excused(existing, notes))

        logger.info("excused absence user=%s session=%s", user_id, session_id)
        return self._to_view(created, session=session)

    def get_user_attendance(self, user_id: str, session_id: str) -> Optional[AttendanceView]:
        record = self._attendance.get(user_id, session_id)
        if not record:
            return None
        return self._to_view(record)

    def get_user_attendance_history(
        self,
        user_id: str,
        cohort_id: Optional[str] = None,
    ) -> Sequence[AttendanceView]:
        cohort_name = None
        if cohort_id:
            sessions = list(self._sessions.list_for_cohort(cohort_id))
            if not sessions:
                return []
            by_id = {s.session_id: s for s in sessions}
            records = self._attendance.list_for_user(user_id, session_ids=list(by_id))
            cohort = self._rosters.get_cohort(cohort_id)
            cohort_name = cohort.name if cohort else None
        else:
            records = self._attendance.list_for_user(user_id)
            by_id = {}

        cohort_names: dict[str, Optional[str]] = {}
        views = []
        for r in records:
            session = by_id.get(r.session_id) or self._sessions.get_by_id(r.session_id)
            if session and session.cohort_id not in cohort_names:
                if cohort_id and session.cohort_id == cohort_id:
                    cohort_names[session.cohort_id] = cohort_name
                else:
                    cohort = self._rosters.get_cohort(session.cohort_id)
                    cohort_names[session.cohort_id] = cohort.name if cohort else None
            views.append(
                self._to_view(
                    r,
                    session=session,
                    cohort_name=cohort_names.get(session.cohort_id) if session else None,
                )
            )

        views.sort(key=lambda v: ensure_aware(v.record.check_in_time), reverse=True)
        return views

    def _to_view(
        self,
        record: AttendanceRecord,
        *,
        session: Session | None = None,
        cohort_name: Optional[str] = None,
        with_user: bool = False,
    ) -> AttendanceView:
        if session is None:
            session = self._sessions.get_by_id(record.session_id)

        session_summary = None
        if session:
            session_summary = SessionSummary(
                session_id=session.session_id,
                title=session.title,
                session_number=session.session_number,
                scheduled_date=session.scheduled_date,
                cohort_id=session.cohort_id,
                cohort_name=cohort_name,
            )

        user_summary = None
        if with_user:
            fellow = self._rosters.get_fellow(record.user_id)
            if fellow:
                user_summary = UserSummary(
                    user_id=fellow.user_id,
                    first_name=fellow.first_name,
                    last_name=fellow.last_name,
                    email=fellow.email,
                )

        return AttendanceView(
            record=record,
            duration=record.duration_minutes(),
            session=session_summary,
            user=user_summary,
        )
