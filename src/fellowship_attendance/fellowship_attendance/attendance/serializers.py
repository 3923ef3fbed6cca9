from __future__ import annotations

from typing import Any, Optional

from ..common.clock import to_iso
from .model import AttendanceView, CheckInResult


def attendance_to_dict(view: Optional[AttendanceView]) -> Optional[dict[str, Any]]:
    """JSON shape consumed by the front-end (camelCase keys, ISO instants)."""
    if view is None:
        return None

    r = view.record
    out: dict[str, Any] = {
        "id": r.attendance_id,
        "userId": r.user_id,
        "sessionId": r.session_id,
        "checkInTime": to_iso(r.check_in_time),
        "checkOutTime": to_iso(r.check_out_time),
        "isLate": r.is_late,
        "isExcused": r.is_excused,
        "notes": r.notes,
        "latitude": r.latitude,
        "longitude": r.longitude,
        "ipAddress": r.ip_address,
        "userAgent": r.user_agent,
        "duration": view.duration,
    }

    if view.session:
        s = view.session
        session: dict[str, Any] = {
            "id": s.session_id,
            "title": s.title,
            "sessionNumber": s.session_number,
            "scheduledDate": to_iso(s.scheduled_date),
        }
        if s.cohort_name is not None:
            session["cohort"] = {"id": s.cohort_id, "name": s.cohort_name}
        out["session"] = session

    if view.user:
        u = view.user
        out["user"] = {
            "id": u.user_id,
            "firstName": u.first_name,
            "lastName": u.last_name,
            "email": u.email,
        }

    return out


def check_in_to_dict(result: CheckInResult) -> dict[str, Any]:
    out = attendance_to_dict(result.attendance) or {}
    out["pointsAwarded"] = result.points if result.points_awarded else 0
    out["pointsPending"] = not result.points_awarded
    return out
