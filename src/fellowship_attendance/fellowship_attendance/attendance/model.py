from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.clock import ensure_aware


@dataclass(frozen=True)
class CheckInContext:
    """Optional client metadata captured at check-in. Stored verbatim."""

    latitude: Optional[float] = None
    longitude: Optional[float] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance record per (user_id, session_id)."""

    user_id: str
    session_id: str
    check_in_time: datetime
    check_out_time: Optional[datetime] = None
    is_late: bool = False
    is_excused: bool = False
    notes: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    attendance_id: Optional[int] = None
    version: int = 0

    @property
    def key(self) -> tuple[str, str]:
        return (self.user_id, self.session_id)

    def duration_minutes(self) -> Optional[int]:
        return duration_minutes(self.check_in_time, self.check_out_time)


def duration_minutes(check_in_time: datetime, check_out_time: Optional[datetime]) -> Optional[int]:
    """Whole minutes between check-in and check-out, rounded half-up; None until checked out."""
    if check_out_time is None:
        return None
    seconds = (ensure_aware(check_out_time) - ensure_aware(check_in_time)).total_seconds()
    return int(math.floor(seconds / 60 + 0.5))


@dataclass(frozen=True)
class SessionSummary:
    session_id: str
    title: str
    session_number: int
    scheduled_date: datetime
    cohort_id: str
    cohort_name: Optional[str] = None


@dataclass(frozen=True)
class UserSummary:
    user_id: str
    first_name: str
    last_name: str
    email: str


@dataclass(frozen=True)
class AttendanceView:
    """Read-model returned to callers: record + duration + display fields."""

    record: AttendanceRecord
    duration: Optional[int]
    session: Optional[SessionSummary] = None
    user: Optional[UserSummary] = None


@dataclass(frozen=True)
class CheckInResult:
    """Outcome of a check-in.

    points_awarded is False when the points collaborator failed; the check-in
    itself is still persisted (degraded success).
    """

    attendance: AttendanceView
    points: int
    points_awarded: bool
