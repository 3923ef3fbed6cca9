from __future__ import annotations

from ...core.constants import ON_TIME_ATTENDANCE_POINTS
from ...sessions.model import Session
from .base import CheckInDecision, CheckInStrategy


class OnTimeStrategy(CheckInStrategy):
    """Check-in at or before the scheduled start."""

    def decide_checkin(self, *, session: Session) -> CheckInDecision:
        return CheckInDecision(
            is_late=False,
            points=ON_TIME_ATTENDANCE_POINTS,
            description=f"Attended session: {session.title}",
        )
