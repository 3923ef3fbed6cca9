from __future__ import annotations

import math


def percent_one_decimal(part: int, whole: int) -> float:
    """part / whole as a percentage rounded half-up to one decimal; 0 when whole is 0."""
    if whole <= 0:
        return 0.0
    return math.floor(part / whole * 1000 + 0.5) / 10
