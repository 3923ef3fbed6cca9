from __future__ import annotations

from typing import Protocol

from .model import PointsAwardEvent


class PointsAwarder(Protocol):
    """Credits a user's point ledger.

    Delivery guarantees (retry/queue) belong to the implementation; callers hand
    over each event once.
    """

    def award(self, event: PointsAwardEvent) -> None:
        raise NotImplementedError
