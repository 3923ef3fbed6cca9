from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from ..common.clock import ensure_aware
from ..sessions.model import Session
from .strategies.base import CheckInStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.on_time_strategy import OnTimeStrategy


@dataclass
class CheckInStrategyFactory:
    """Factory Pattern: choose the check-in strategy from the session schedule."""

    grace_minutes: int = 0

    def for_checkin(self, *, now: datetime, session: Session) -> CheckInStrategy:
        deadline = ensure_aware(session.scheduled_date) + timedelta(minutes=self.grace_minutes)
        if ensure_aware(now) > deadline:
            return LateStrategy()
        return OnTimeStrategy()
