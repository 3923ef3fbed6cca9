from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Cohort, Fellow


class CohortRosterProvider(Protocol):
    """Roster of a cohort at query time. Owned by the cohort subsystem."""

    def get_cohort(self, cohort_id: str) -> Optional[Cohort]:
        raise NotImplementedError

    def list_fellows(self, cohort_id: str) -> Sequence[Fellow]:
        raise NotImplementedError

    def is_member(self, cohort_id: str, user_id: str) -> bool:
        raise NotImplementedError

    def get_fellow(self, user_id: str) -> Optional[Fellow]:
        """Display fields for any user, roster member or not."""

        raise NotImplementedError
