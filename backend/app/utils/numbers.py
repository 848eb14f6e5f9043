from __future__ import annotations

import math


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like a calculator: halves go away from zero for positive values."""

    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


__all__ = ["clamp", "round_half_up"]
