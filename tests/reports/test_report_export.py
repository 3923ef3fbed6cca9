from __future__ import annotations

import csv
import io

from src.fellowship_attendance.fellowship_attendance.reports.export import session_report_to_csv
from src.fellowship_attendance.fellowship_attendance.reports.model import AbsenteeRow, AttendeeRow, SessionReport
from tests.fakes import utc


def test_csv_has_one_row_per_roster_member_with_status():
    report = SessionReport(
        session_id="s1",
        session_title="Intro",
        scheduled_date=utc(2024, 3, 1, 10, 0, 0),
        total_fellows=3,
        attended_count=2,
        attendance_rate=66.7,
        late_count=1,
        excused_count=0,
        attendees=[
            AttendeeRow("u1", "Ada Lovelace", "u1@example.com", utc(2024, 3, 1, 9, 58), utc(2024, 3, 1, 11, 0), False, False, 62),
            AttendeeRow("u2", "Alan Turing", "u2@example.com", utc(2024, 3, 1, 10, 12), None, True, False, None),
        ],
        absentees=[AbsenteeRow("u3", "Grace Hopper", "u3@example.com")],
    )

    data = session_report_to_csv(report)

    assert data.startswith(b"\xef\xbb\xbf")
    rows = list(csv.DictReader(io.StringIO(data.decode("utf-8-sig"))))
    assert [r["status"] for r in rows] == ["PRESENT", "LATE", "ABSENT"]
    assert rows[0]["check_in"] == "2024-03-01T09:58:00Z"
    assert rows[0]["duration_minutes"] == "62"
    assert rows[1]["check_out"] == ""
    assert rows[2]["full_name"] == "Grace Hopper"
