from __future__ import annotations

from ...core.constants import LATE_ATTENDANCE_POINTS
from ...sessions.model import Session
from .base import CheckInDecision, CheckInStrategy


class LateStrategy(CheckInStrategy):
    """Late check-in."""

    def decide_checkin(self, *, session: Session) -> CheckInDecision:
        return CheckInDecision(
            is_late=True,
            points=LATE_ATTENDANCE_POINTS,
            description=f"Attended session: {session.title} (late)",
        )
