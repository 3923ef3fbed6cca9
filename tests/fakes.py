from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from typing import Optional

from src.fellowship_attendance.fellowship_attendance.attendance.model import AttendanceRecord
from src.fellowship_attendance.fellowship_attendance.cohorts.model import Cohort, Fellow
from src.fellowship_attendance.fellowship_attendance.core.exceptions import ConflictError, StaleRecordError
from src.fellowship_attendance.fellowship_attendance.points.model import PointsAwardEvent
from src.fellowship_attendance.fellowship_attendance.sessions.model import Session


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


class ManualClock:
    def __init__(self, now: datetime):
        self._now = now

    def now(self) -> datetime:
        return self._now

    def set(self, now: datetime) -> None:
        self._now = now

    def advance(self, **kwargs) -> None:
        self._now = self._now + timedelta(**kwargs)


@dataclass
class InMemorySessions:
    sessions: dict[str, Session] = field(default_factory=dict)

    def add(self, session: Session) -> Session:
        self.sessions[session.session_id] = session
        return session

    def get_by_id(self, session_id: str) -> Optional[Session]:
        return self.sessions.get(session_id)

    def list_for_cohort(self, cohort_id: str):
        items = [s for s in self.sessions.values() if s.cohort_id == cohort_id]
        items.sort(key=lambda s: s.session_number)
        return items


@dataclass
class InMemoryRosters:
    cohorts: dict[str, Cohort] = field(default_factory=dict)
    members: dict[str, list[str]] = field(default_factory=dict)
    fellows: dict[str, Fellow] = field(default_factory=dict)

    def add_cohort(self, cohort: Cohort, fellows: list[Fellow]) -> None:
        self.cohorts[cohort.cohort_id] = cohort
        self.members[cohort.cohort_id] = [f.user_id for f in fellows]
        for f in fellows:
            self.fellows[f.user_id] = f

    def get_cohort(self, cohort_id: str) -> Optional[Cohort]:
        return self.cohorts.get(cohort_id)

    def list_fellows(self, cohort_id: str):
        return [self.fellows[uid] for uid in self.members.get(cohort_id, [])]

    def is_member(self, cohort_id: str, user_id: str) -> bool:
        return user_id in self.members.get(cohort_id, [])

    def get_fellow(self, user_id: str) -> Optional[Fellow]:
        return self.fellows.get(user_id)


class InMemoryAttendance:
    """Thread-safe store; insert is atomic insert-if-absent like a UNIQUE KEY."""

    def __init__(self):
        self._lock = threading.Lock()
        self._by_key: dict[tuple[str, str], AttendanceRecord] = {}
        self._id = 0
        self.insert_calls = 0

    def get(self, user_id: str, session_id: str) -> Optional[AttendanceRecord]:
        with self._lock:
            return self._by_key.get((user_id, session_id))

    def insert(self, record: AttendanceRecord) -> AttendanceRecord:
        with self._lock:
            self.insert_calls += 1
            if record.key in self._by_key:
                raise ConflictError("Attendance record already exists")
            self._id += 1
            stored = replace(record, attendance_id=self._id, version=0)
            self._by_key[record.key] = stored
            return stored

    def update(self, record: AttendanceRecord) -> AttendanceRecord:
        with self._lock:
            current = self._by_key.get(record.key)
            if current is None or current.version != record.version:
                raise StaleRecordError("Attendance record was modified concurrently, please retry")
            stored = replace(
                current,
                check_out_time=record.check_out_time,
                is_excused=record.is_excused,
                notes=record.notes,
                version=current.version + 1,
            )
            self._by_key[record.key] = stored
            return stored

    def list_for_session(self, session_id: str):
        with self._lock:
            return [r for r in self._by_key.values() if r.session_id == session_id]

    def list_for_sessions(self, session_ids):
        wanted = set(session_ids)
        with self._lock:
            return [r for r in self._by_key.values() if r.session_id in wanted]

    def list_for_user(self, user_id: str, *, session_ids=None):
        wanted = set(session_ids) if session_ids is not None else None
        with self._lock:
            items = [
                r
                for r in self._by_key.values()
                if r.user_id == user_id and (wanted is None or r.session_id in wanted)
            ]
        items.sort(key=lambda r: r.check_in_time, reverse=True)
        return items

    def all(self) -> list[AttendanceRecord]:
        with self._lock:
            return list(self._by_key.values())


class RecordingPointsAwarder:
    def __init__(self):
        self.events: list[PointsAwardEvent] = []

    def award(self, event: PointsAwardEvent) -> None:
        self.events.append(event)


class FailingPointsAwarder:
    def __init__(self):
        self.calls = 0

    def award(self, event: PointsAwardEvent) -> None:
        self.calls += 1
        raise ConnectionError("points service unavailable")


def make_fellow(user_id: str, first: str = "Ada", last: str = "Lovelace") -> Fellow:
    return Fellow(user_id=user_id, first_name=first, last_name=last, email=f"{user_id}@example.com")


def make_session(
    session_id: str = "s1",
    *,
    cohort_id: str = "c1",
    number: int = 1,
    title: str = "Intro to Python",
    scheduled: Optional[datetime] = None,
    location=None,
) -> Session:
    return Session(
        session_id=session_id,
        cohort_id=cohort_id,
        title=title,
        session_number=number,
        scheduled_date=scheduled or utc(2024, 3, 1, 10, 0, 0),
        location=location,
    )


class FakeCursor:
    """DB-API cursor double; `error` is raised once `error_after` statements have run."""

    def __init__(self, *, rows=None, rowcount=1, error=None, error_after=0):
        self._rows = rows or []
        self.rowcount = rowcount
        self.lastrowid = 42
        self._error = error
        self._error_after = error_after
        self.executed: list[tuple[str, tuple]] = []

    def execute(self, sql, params=()):
        self.executed.append((sql, params))
        if self._error is not None and len(self.executed) > self._error_after:
            raise self._error

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return list(self._rows)

    def close(self):
        pass


class FakeConnection:
    def __init__(self, cursor: FakeCursor):
        self._cursor = cursor
        self.commits = 0
        self.rolled_back = False

    @property
    def committed(self) -> bool:
        return self.commits > 0

    def cursor(self, dictionary=True):
        return self._cursor

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rolled_back = True

    def close(self):
        pass


class FakeConnFactory:
    def __init__(self, cursor: FakeCursor):
        self.cursor = cursor
        self.conn = FakeConnection(cursor)

    def connect(self):
        return self.conn
