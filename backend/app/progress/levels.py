from __future__ import annotations

import math
from collections.abc import Sequence

from ..utils.numbers import clamp, round_half_up
from .catalog import LEVEL_THRESHOLDS
from .models import InvalidInput, LevelInfo, LevelThreshold


def level_for(
    total_points: int,
    *,
    thresholds: Sequence[LevelThreshold] = LEVEL_THRESHOLDS,
) -> LevelInfo:
    """Map an accumulated point total onto the level ladder."""

    if isinstance(total_points, bool) or not isinstance(total_points, (int, float)):
        raise InvalidInput(f"total points must be a number, got {total_points!r}")
    if not math.isfinite(total_points) or total_points < 0:
        raise InvalidInput(f"total points must be a non-negative number, got {total_points!r}")
    if isinstance(total_points, float) and not total_points.is_integer():
        raise InvalidInput(f"total points must be a whole number, got {total_points!r}")
    total_points = int(total_points)

    index = 0
    for position, threshold in enumerate(thresholds):
        if threshold.points <= total_points:
            index = position
        else:
            break

    current = thresholds[index]
    following = thresholds[index + 1] if index + 1 < len(thresholds) else None

    if following is None:
        points_to_next = 0
        progress = 100
    else:
        points_to_next = following.points - total_points
        span = following.points - current.points
        ratio = (total_points - current.points) / span * 100
        progress = int(clamp(round_half_up(ratio), 0, 100))

    return LevelInfo(
        level=current.level,
        title=current.title,
        icon=current.icon,
        total_points=total_points,
        points_to_next=points_to_next,
        progress_percent=progress,
    )


def max_level_points(thresholds: Sequence[LevelThreshold] = LEVEL_THRESHOLDS) -> int:
    return thresholds[-1].points


__all__ = ["level_for", "max_level_points"]
