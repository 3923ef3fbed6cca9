from __future__ import annotations

from ..attendance.repository import AttendanceStore
from ..cohorts.repository import CohortRosterProvider
from ..common.rates import percent_one_decimal
from ..core.exceptions import NotFoundError
from ..sessions.repository import SessionRepository
from .model import AbsenteeRow, AttendeeRow, SessionReport


class SessionReportBuilder:
    """Attendee/absentee breakdown for one session against its cohort roster."""

    def __init__(
        self,
        attendance: AttendanceStore,
        sessions: SessionRepository,
        rosters: CohortRosterProvider,
    ):
        self._attendance = attendance
        self._sessions = sessions
        self._rosters = rosters

    def build(self, session_id: str) -> SessionReport:
        session = self._sessions.get_by_id(session_id)
        if not session:
            raise NotFoundError("Session", session_id)

        fellows = list(self._rosters.list_fellows(session.cohort_id))
        records = list(self._attendance.list_for_session(session_id))
        fellows_by_id = {f.user_id: f for f in fellows}

        attendees: list[AttendeeRow] = []
        for r in records:
            # Records may outlive roster membership; fall back to a direct user lookup.
            fellow = fellows_by_id.get(r.user_id) or self._rosters.get_fellow(r.user_id)
            attendees.append(
                AttendeeRow(
                    user_id=r.user_id,
                    user_name=fellow.full_name if fellow else "",
                    email=fellow.email if fellow else "",
                    check_in_time=r.check_in_time,
                    check_out_time=r.check_out_time,
                    is_late=r.is_late,
                    is_excused=r.is_excused,
                    duration=r.duration_minutes(),
                )
            )

        attended_ids = {r.user_id for r in records}
        absentees = [
            AbsenteeRow(user_id=f.user_id, user_name=f.full_name, email=f.email)
            for f in fellows
            if f.user_id not in attended_ids
        ]

        total_fellows = len(fellows)
        attended_count = len(records)

        return SessionReport(
            session_id=session.session_id,
            session_title=session.title,
            scheduled_date=session.scheduled_date,
            total_fellows=total_fellows,
            attended_count=attended_count,
            attendance_rate=percent_one_decimal(attended_count, total_fellows),
            late_count=sum(1 for r in records if r.is_late),
            excused_count=sum(1 for r in records if r.is_excused),
            attendees=attendees,
            absentees=absentees,
        )
