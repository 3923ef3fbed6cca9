from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Session


class SessionRepository(Protocol):
    def get_by_id(self, session_id: str) -> Optional[Session]:
        raise NotImplementedError

    def list_for_cohort(self, cohort_id: str) -> Sequence[Session]:
        """Sessions of a cohort ordered by session_number ascending."""

        raise NotImplementedError
