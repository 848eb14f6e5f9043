from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence

from . import catalog as _catalog
from .models import AchievementDefinition, AchievementRule, ExtendedSignals, StatsSnapshot

logger = logging.getLogger(__name__)

RuleHandler = Callable[[StatsSnapshot, ExtendedSignals | None, AchievementRule], bool]


def _streak_rule(snapshot: StatsSnapshot, _: ExtendedSignals | None, rule: AchievementRule) -> bool:
    return snapshot.mood_streak >= rule.threshold


def _sessions_rule(
    snapshot: StatsSnapshot, _: ExtendedSignals | None, rule: AchievementRule
) -> bool:
    return snapshot.total_sessions >= rule.threshold


def _avg_mood_rule(
    snapshot: StatsSnapshot, _: ExtendedSignals | None, rule: AchievementRule
) -> bool:
    # an average over zero sessions is not an achievement
    return snapshot.avg_mood_score >= rule.threshold and snapshot.total_sessions > 0


def _signal_at_least(field: str) -> RuleHandler:
    def handler(
        _: StatsSnapshot, history: ExtendedSignals | None, rule: AchievementRule
    ) -> bool:
        if history is None:
            return False
        value = getattr(history, field)
        return value is not None and value >= rule.threshold

    return handler


def _signal_flag(field: str) -> RuleHandler:
    def handler(
        _: StatsSnapshot, history: ExtendedSignals | None, __: AchievementRule
    ) -> bool:
        return history is not None and getattr(history, field) is True

    return handler


_RULE_HANDLERS: dict[str, RuleHandler] = {
    _catalog.METRIC_STREAK: _streak_rule,
    _catalog.METRIC_TOTAL_SESSIONS: _sessions_rule,
    _catalog.METRIC_AVG_MOOD: _avg_mood_rule,
    _catalog.METRIC_PERFECT_MOOD_DAYS: _signal_at_least("perfect_mood_days"),
    _catalog.METRIC_MOOD_IMPROVEMENT: _signal_at_least("mood_improvement"),
    _catalog.METRIC_EARLY_MORNING: _signal_at_least("early_morning_days"),
    _catalog.METRIC_LATE_EVENING: _signal_at_least("late_evening_days"),
    _catalog.METRIC_WEEKEND_CONSISTENCY: _signal_at_least("weekend_streak"),
    _catalog.METRIC_DAYS_ACTIVE: _signal_at_least("total_active_days"),
    _catalog.METRIC_COMEBACK: _signal_flag("has_comeback"),
    _catalog.METRIC_UNIQUE_EMOTIONS: _signal_at_least("unique_emotions"),
    _catalog.METRIC_LONG_ENTRY: _signal_flag("has_long_entry"),
}


def evaluate(
    snapshot: StatsSnapshot,
    history: ExtendedSignals | None = None,
    *,
    catalog: Sequence[AchievementDefinition] = _catalog.ACHIEVEMENTS,
) -> list[AchievementDefinition]:
    """Return the achievements currently earned, in catalog order.

    Users without any recorded activity earn nothing, even where a threshold
    would be met by zero. Rules backed by history signals are not earned when
    ``history`` (or the specific signal) is missing.
    """

    if not snapshot.has_activity:
        logger.debug("No activity recorded, skipping achievement evaluation")
        return []

    earned: list[AchievementDefinition] = []
    for achievement in catalog:
        handler = _RULE_HANDLERS.get(achievement.rule.metric)
        if handler is None:
            logger.debug(
                "Unknown rule metric %s for achievement %s",
                achievement.rule.metric,
                achievement.id,
            )
            continue
        if handler(snapshot, history, achievement.rule):
            earned.append(achievement)

    logger.debug("Achievements earned: %d", len(earned))
    return earned


def total_points(achievements: Iterable[AchievementDefinition]) -> int:
    return sum(achievement.points for achievement in achievements)


__all__ = ["evaluate", "total_points"]
