from __future__ import annotations

import pytest

from src.fellowship_attendance.fellowship_attendance.cohorts.model import Cohort
from src.fellowship_attendance.fellowship_attendance.container import AttendanceSettings, wire_container
from src.fellowship_attendance.fellowship_attendance.main import create_app
from src.fellowship_attendance.fellowship_attendance.sessions.model import GeoPoint
from tests.fakes import (
    InMemoryAttendance,
    InMemoryRosters,
    InMemorySessions,
    ManualClock,
    RecordingPointsAwarder,
    make_fellow,
    make_session,
    utc,
)


class StubRenderer:
    mime_type = "image/png"

    def render(self, data: str) -> bytes:
        return b"\x89PNG\r\n\x1a\nstub"


@pytest.fixture
def env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")

    sessions = InMemorySessions()
    sessions.add(make_session("s1", scheduled=utc(2024, 3, 1, 10, 0, 0), location=GeoPoint(6.5244, 3.3792)))
    rosters = InMemoryRosters()
    rosters.add_cohort(
        Cohort("c1", "Cohort One"),
        [make_fellow("u1", "Ada", "Lovelace"), make_fellow("u2", "Alan", "Turing"), make_fellow("u3", "Grace", "Hopper")],
    )
    attendance = InMemoryAttendance()
    points = RecordingPointsAwarder()
    clock = ManualClock(utc(2024, 3, 1, 10, 5, 0))

    container = wire_container(
        settings=AttendanceSettings(frontend_url="http://frontend.test"),
        attendance_repo=attendance,
        sessions_repo=sessions,
        rosters=rosters,
        points_awarder=points,
        renderer=StubRenderer(),
        clock=clock,
    )
    app = create_app(container)
    return app, attendance, points, clock


def _login(client, user_id: str, role: str = "fellow") -> None:
    with client.session_transaction() as sess:
        sess["user_id"] = user_id
        sess["role"] = role


def test_requires_login(env):
    app, *_ = env
    client = app.test_client()

    resp = client.post("/attendance/check-in/s1", json={})

    assert resp.status_code == 401


def test_check_in_then_check_out_flow(env):
    app, _, points, clock = env
    client = app.test_client()
    _login(client, "u1")

    resp = client.post(
        "/attendance/check-in/s1",
        json={"latitude": 6.5244, "longitude": 3.3792},
        headers={"User-Agent": "pytest-agent"},
    )
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["isLate"] is True
    assert body["pointsAwarded"] == 10
    assert body["pointsPending"] is False
    assert body["userAgent"] == "pytest-agent"
    assert body["checkInTime"] == "2024-03-01T10:05:00Z"
    assert body["session"]["title"] == "Intro to Python"
    assert body["user"]["firstName"] == "Ada"
    assert points.events[0].amount == 10

    again = client.post("/attendance/check-in/s1", json={})
    assert again.status_code == 400
    assert "already checked in" in again.get_json()["message"]

    clock.set(utc(2024, 3, 1, 11, 5, 0))
    out = client.post("/attendance/check-out/s1")
    assert out.status_code == 200
    assert out.get_json()["duration"] == 60

    twice = client.post("/attendance/check-out/s1")
    assert twice.status_code == 400

    me = client.get("/attendance/session/s1/me")
    assert me.get_json()["duration"] == 60


def test_check_in_errors(env):
    app, *_ = env
    client = app.test_client()
    _login(client, "outsider")

    assert client.post("/attendance/check-in/s1", json={}).status_code == 400
    assert client.post("/attendance/check-in/missing", json={}).status_code == 404
    assert client.post("/attendance/check-in/s1", json={"latitude": "north"}).status_code == 400


def test_check_out_without_record_is_404(env):
    app, *_ = env
    client = app.test_client()
    _login(client, "u1")

    assert client.post("/attendance/check-out/s1").status_code == 404


def test_my_record_is_null_when_absent(env):
    app, *_ = env
    client = app.test_client()
    _login(client, "u1")

    resp = client.get("/attendance/session/s1/me")

    assert resp.status_code == 200
    assert resp.get_json() is None


def test_history_with_cohort_filter(env):
    app, *_ = env
    client = app.test_client()
    _login(client, "u1")
    client.post("/attendance/check-in/s1", json={})

    resp = client.get("/attendance/me?cohortId=c1")

    assert resp.status_code == 200
    items = resp.get_json()
    assert [i["sessionId"] for i in items] == ["s1"]
    assert items[0]["session"]["cohort"] == {"id": "c1", "name": "Cohort One"}


def test_facilitator_only_routes_reject_fellows(env):
    app, *_ = env
    client = app.test_client()
    _login(client, "u1", "fellow")

    assert client.get("/attendance/session/s1/report").status_code == 403
    assert client.get("/attendance/cohort/c1/stats").status_code == 403
    assert client.get("/attendance/session/s1/qr-code").status_code == 403
    assert client.patch("/attendance/session/s1/user/u2/excuse", json={}).status_code == 403


def test_report_stats_and_excuse(env):
    app, attendance, points, clock = env
    fellow = app.test_client()
    _login(fellow, "u1")
    fellow.post("/attendance/check-in/s1", json={})

    staff = app.test_client()
    _login(staff, "f1", "facilitator")

    excused = staff.patch("/attendance/session/s1/user/u2/excuse", json={"notes": "sick"})
    assert excused.status_code == 200
    assert excused.get_json()["isExcused"] is True
    assert excused.get_json()["checkInTime"] == "2024-03-01T10:00:00Z"
    assert len(points.events) == 1

    report = staff.get("/attendance/session/s1/report").get_json()
    assert report["totalFellows"] == 3
    assert report["attendedCount"] == 2
    assert report["attendanceRate"] == 66.7
    assert report["lateCount"] == 1
    assert report["excusedCount"] == 1
    assert [a["userId"] for a in report["absentees"]] == ["u3"]

    stats = staff.get("/attendance/cohort/c1/stats").get_json()
    assert stats["totalSessions"] == 1
    assert stats["totalAttendances"] == 2
    assert stats["overallAttendanceRate"] == 66.7
    assert stats["sessionStats"][0]["sessionNumber"] == 1

    csv_resp = staff.get("/attendance/session/s1/report.csv")
    assert csv_resp.status_code == 200
    assert csv_resp.mimetype == "text/csv"

    assert staff.get("/attendance/session/missing/report").status_code == 404
    assert staff.get("/attendance/cohort/missing/stats").status_code == 404
    assert staff.patch("/attendance/session/missing/user/u2/excuse", json={}).status_code == 404


def test_qr_code_json_and_png(env):
    app, *_ = env
    client = app.test_client()
    _login(client, "a1", "admin")

    resp = client.get("/attendance/session/s1/qr-code")
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["checkInUrl"] == "http://frontend.test/attendance/check-in/s1"
    assert body["qrCode"].startswith("data:image/png;base64,")

    png = client.get("/attendance/session/s1/qr-code?format=png")
    assert png.status_code == 200
    assert png.mimetype == "image/png"

    assert client.get("/attendance/session/missing/qr-code").status_code == 404


def test_geofence_advisory_endpoint(env):
    app, attendance, *_ = env
    client = app.test_client()
    _login(client, "u1")

    near = client.post("/attendance/session/s1/geofence", json={"latitude": 6.5244, "longitude": 3.3792}).get_json()
    far = client.post("/attendance/session/s1/geofence", json={"latitude": 7.5244, "longitude": 3.3792}).get_json()

    assert near["withinRadius"] is True
    assert near["distanceMeters"] == 0
    assert far["withinRadius"] is False
    assert far["radiusMeters"] == 100
    assert attendance.all() == []
    assert client.post("/attendance/session/s1/geofence", json={}).status_code == 400


def test_excuse_without_notes_key_keeps_notes(env):
    app, *_ = env
    staff = app.test_client()
    _login(staff, "f1", "facilitator")

    staff.patch("/attendance/session/s1/user/u2/excuse", json={"notes": "sick"})
    kept = staff.patch("/attendance/session/s1/user/u2/excuse", json={})
    assert kept.get_json()["notes"] == "sick"

    cleared = staff.patch("/attendance/session/s1/user/u2/excuse", json={"notes": ""})
    assert not cleared.get_json()["notes"]
