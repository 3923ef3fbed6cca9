from __future__ import annotations

import csv
import io

from ..common.clock import to_iso
from ..core.enums import AttendanceStatus
from .model import AttendeeRow, SessionReport

FIELDNAMES = [
    "session_id",
    "session_title",
    "user_id",
    "full_name",
    "email",
    "status",
    "check_in",
    "check_out",
    "duration_minutes",
]


def _status(row: AttendeeRow) -> AttendanceStatus:
    if row.is_excused:
        return AttendanceStatus.EXCUSED
    if row.is_late:
        return AttendanceStatus.LATE
    return AttendanceStatus.PRESENT


def session_report_to_csv(report: SessionReport) -> bytes:
    """One row per roster member (attendees first). UTF-8 with BOM for spreadsheet apps."""
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=FIELDNAMES)
    writer.writeheader()

    for a in report.attendees:
        writer.writerow(
            {
                "session_id": report.session_id,
                "session_title": report.session_title,
                "user_id": a.user_id,
                "full_name": a.user_name,
                "email": a.email,
                "status": _status(a).value,
                "check_in": to_iso(a.check_in_time),
                "check_out": to_iso(a.check_out_time) or "",
                "duration_minutes": "" if a.duration is None else a.duration,
            }
        )

    for a in report.absentees:
        writer.writerow(
            {
                "session_id": report.session_id,
                "session_title": report.session_title,
                "user_id": a.user_id,
                "full_name": a.user_name,
                "email": a.email,
                "status": AttendanceStatus.ABSENT.value,
                "check_in": "",
                "check_out": "",
                "duration_minutes": "",
            }
        )

    return out.getvalue().encode("utf-8-sig")
