from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import PointsEventType


@dataclass(frozen=True)
class PointsAwardEvent:
    user_id: str
    amount: int
    reason: PointsEventType
    description: str
