from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ...sessions.model import Session


@dataclass(frozen=True)
class CheckInDecision:
    is_late: bool
    points: int
    description: str


class CheckInStrategy(ABC):
    """Strategy Pattern: encapsulate how a check-in is classified and rewarded."""

    @abstractmethod
    def decide_checkin(self, *, session: Session) -> CheckInDecision:
        raise NotImplementedError
