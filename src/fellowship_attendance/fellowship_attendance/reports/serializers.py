from __future__ import annotations

from typing import Any

from ..common.clock import to_iso
from .model import CohortStats, SessionReport


def session_report_to_dict(report: SessionReport) -> dict[str, Any]:
    return {
        "sessionId": report.session_id,
        "sessionTitle": report.session_title,
        "scheduledDate": to_iso(report.scheduled_date),
        "totalFellows": report.total_fellows,
        "attendedCount": report.attended_count,
        "attendanceRate": report.attendance_rate,
        "lateCount": report.late_count,
        "excusedCount": report.excused_count,
        "attendees": [
            {
                "userId": a.user_id,
                "userName": a.user_name,
                "email": a.email,
                "checkInTime": to_iso(a.check_in_time),
                "checkOutTime": to_iso(a.check_out_time),
                "isLate": a.is_late,
                "isExcused": a.is_excused,
                "duration": a.duration,
            }
            for a in report.attendees
        ],
        "absentees": [
            {"userId": a.user_id, "userName": a.user_name, "email": a.email}
            for a in report.absentees
        ],
    }


def cohort_stats_to_dict(stats: CohortStats) -> dict[str, Any]:
    return {
        "cohortId": stats.cohort_id,
        "cohortName": stats.cohort_name,
        "totalFellows": stats.total_fellows,
        "totalSessions": stats.total_sessions,
        "totalAttendances": stats.total_attendances,
        "totalPossibleAttendances": stats.total_possible_attendances,
        "overallAttendanceRate": stats.overall_attendance_rate,
        "totalLateArrivals": stats.total_late_arrivals,
        "sessionStats": [
            {
                "sessionId": s.session_id,
                "sessionNumber": s.session_number,
                "sessionTitle": s.session_title,
                "scheduledDate": to_iso(s.scheduled_date),
                "attended": s.attended,
                "attendanceRate": s.attendance_rate,
                "lateCount": s.late_count,
            }
            for s in stats.session_stats
        ],
    }
