from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used by the controller guards."""

    FELLOW = "fellow"
    FACILITATOR = "facilitator"
    ADMIN = "admin"


class PointsEventType(str, Enum):
    """Reason tags carried by points events."""

    SESSION_ATTEND = "SESSION_ATTEND"


class AttendanceStatus(str, Enum):
    """Display status of a roster member for one session."""

    PRESENT = "PRESENT"
    LATE = "LATE"
    EXCUSED = "EXCUSED"
    ABSENT = "ABSENT"
