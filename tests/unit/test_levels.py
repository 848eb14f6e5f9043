from __future__ import annotations

import pytest

from backend.app.progress import LEVEL_THRESHOLDS, InvalidInput, level_for
from backend.app.progress.levels import max_level_points


def test_level_one_at_zero_points() -> None:
    info = level_for(0)
    assert info.level == 1
    assert info.title == "Beginner"
    assert info.points_to_next == 100
    assert info.progress_percent == 0


def test_progress_within_a_level() -> None:
    info = level_for(450)
    assert info.level == 3
    assert info.points_to_next == 150
    assert info.progress_percent == 50


def test_progress_rounds_half_up() -> None:
    # (101 - 100) / 200 * 100 = 0.5; (1005 - 1000) / 500 * 100 = 1.0
    assert level_for(101).progress_percent == 1
    assert level_for(1005).progress_percent == 1


def test_whole_float_points_are_accepted() -> None:
    info = level_for(1000.0)
    assert info.total_points == 1000
    assert isinstance(info.total_points, int)
    assert info.level == level_for(1000).level


def test_exact_threshold_starts_the_next_level() -> None:
    info = level_for(100)
    assert info.level == 2
    assert info.progress_percent == 0
    assert level_for(99).level == 1


def test_max_level_is_complete() -> None:
    top = max_level_points()
    for points in (top, top + 10_000):
        info = level_for(points)
        assert info.level == LEVEL_THRESHOLDS[-1].level
        assert info.points_to_next == 0
        assert info.progress_percent == 100


def test_levels_are_monotonic() -> None:
    previous = 0
    for points in range(0, max_level_points() + 500, 25):
        current = level_for(points).level
        assert current >= previous
        previous = current


@pytest.mark.parametrize("points", [-1, 1002.5, 0.5, float("nan"), float("-inf"), "100", True])
def test_invalid_points_are_rejected(points) -> None:
    with pytest.raises(InvalidInput):
        level_for(points)
