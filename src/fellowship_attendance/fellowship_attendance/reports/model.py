from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class AttendeeRow:
    user_id: str
    user_name: str
    email: str
    check_in_time: datetime
    check_out_time: Optional[datetime]
    is_late: bool
    is_excused: bool
    duration: Optional[int]


@dataclass(frozen=True)
class AbsenteeRow:
    user_id: str
    user_name: str
    email: str


@dataclass(frozen=True)
class SessionReport:
    session_id: str
    session_title: str
    scheduled_date: datetime
    total_fellows: int
    attended_count: int
    attendance_rate: float
    late_count: int
    excused_count: int
    attendees: list[AttendeeRow] = field(default_factory=list)
    absentees: list[AbsenteeRow] = field(default_factory=list)


@dataclass(frozen=True)
class SessionStatsRow:
    session_id: str
    session_number: int
    session_title: str
    scheduled_date: datetime
    attended: int
    attendance_rate: float
    late_count: int


@dataclass(frozen=True)
class CohortStats:
    cohort_id: str
    cohort_name: str
    total_fellows: int
    total_sessions: int
    total_attendances: int
    total_possible_attendances: int
    overall_attendance_rate: float
    total_late_arrivals: int
    session_stats: list[SessionStatsRow] = field(default_factory=list)
