from __future__ import annotations

from collections import Counter

from ..attendance.repository import AttendanceStore
from ..cohorts.repository import CohortRosterProvider
from ..common.rates import percent_one_decimal
from ..core.exceptions import NotFoundError
from ..sessions.repository import SessionRepository
from .model import CohortStats, SessionStatsRow


class CohortStatsAggregator:
    """Cumulative and per-session attendance statistics for a cohort."""

    def __init__(
        self,
        attendance: AttendanceStore,
        sessions: SessionRepository,
        rosters: CohortRosterProvider,
    ):
        self._attendance = attendance
        self._sessions = sessions
        self._rosters = rosters

    def build(self, cohort_id: str) -> CohortStats:
        cohort = self._rosters.get_cohort(cohort_id)
        if not cohort:
            raise NotFoundError("Cohort", cohort_id)

        total_fellows = len(self._rosters.list_fellows(cohort_id))
        sessions = sorted(self._sessions.list_for_cohort(cohort_id), key=lambda s: s.session_number)

        records = self._attendance.list_for_sessions([s.session_id for s in sessions]) if sessions else []
        attended = Counter(r.session_id for r in records)
        late = Counter(r.session_id for r in records if r.is_late)

        session_stats = [
            SessionStatsRow(
                session_id=s.session_id,
                session_number=s.session_number,
                session_title=s.title,
                scheduled_date=s.scheduled_date,
                attended=attended[s.session_id],
                attendance_rate=percent_one_decimal(attended[s.session_id], total_fellows),
                late_count=late[s.session_id],
            )
            for s in sessions
        ]

        total_attendances = sum(row.attended for row in session_stats)
        total_late_arrivals = sum(row.late_count for row in session_stats)
        total_possible = total_fellows * len(sessions)

        return CohortStats(
            cohort_id=cohort.cohort_id,
            cohort_name=cohort.name,
            total_fellows=total_fellows,
            total_sessions=len(sessions),
            total_attendances=total_attendances,
            total_possible_attendances=total_possible,
            overall_attendance_rate=percent_one_decimal(total_attendances, total_possible),
            total_late_arrivals=total_late_arrivals,
            session_stats=session_stats,
        )
