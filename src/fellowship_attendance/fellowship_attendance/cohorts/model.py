from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Cohort:
    cohort_id: str
    name: str


@dataclass(frozen=True)
class Fellow:
    """Roster member with the display fields reports need."""

    user_id: str
    first_name: str
    last_name: str
    email: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
