from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Session:
    """Domain entity: a scheduled meeting of a cohort (read-only for attendance)."""

    session_id: str
    cohort_id: str
    title: str
    session_number: int
    scheduled_date: datetime
    location: Optional[GeoPoint] = None
