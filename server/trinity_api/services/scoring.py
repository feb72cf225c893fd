"""
Trinity Score composition.

Combines the per-domain aggregates into a 0-100 health sub-score, an overall
score across the three pillars and a sleep-quality trend string. Everything
here is a pure function over already-fetched aggregates; scores are computed
fresh for each request and never stored.
"""

import logging
from typing import Optional

from ..models.score import PillarScore, TrinityScore
from .aggregators import ExerciseAggregate, MoodAggregate, SleepAggregate, round_half_up

logger = logging.getLogger(__name__)

SCORE_MIN = 0
SCORE_MAX = 100

SLEEP_QUALITY_WEIGHT = 5
SLEEP_TARGET_HOURS = 7
SLEEP_TARGET_POINTS = 25
SLEEP_HOUR_WEIGHT = 3
EXERCISE_MINUTES_PER_POINT = 5
EXERCISE_MAX_POINTS = 35
MOOD_WEIGHT = 3
STRESS_WEIGHT = 1

# Wealth and relations have no data sources wired up yet.
WEALTH_SCORE = 0
RELATIONS_SCORE = 0
WEALTH_INTEGRATED = False
RELATIONS_INTEGRATED = False


def health_score(sleep: SleepAggregate, exercise: ExerciseAggregate, mood: MoodAggregate) -> int:
    """Compute the health pillar score, clamped to [0, 100].

    Sleep contributes quality * 5 plus 25 points once the average reaches
    seven hours (3 points per hour below that). Exercise contributes one
    point per five weekly minutes, up to 35. Mood adds mood * 3 and
    subtracts stress. A domain without data contributes nothing.
    """
    score = 0.0

    if sleep.has_data:
        avg_quality = sleep.avg_quality or 0
        avg_duration = sleep.avg_duration or 0
        score += avg_quality * SLEEP_QUALITY_WEIGHT
        if avg_duration >= SLEEP_TARGET_HOURS:
            score += SLEEP_TARGET_POINTS
        else:
            score += avg_duration * SLEEP_HOUR_WEIGHT

    if exercise.has_data:
        score += min(exercise.total_minutes / EXERCISE_MINUTES_PER_POINT, EXERCISE_MAX_POINTS)

    if mood.has_data:
        score += (mood.avg_mood or 0) * MOOD_WEIGHT - (mood.avg_stress or 0) * STRESS_WEIGHT

    return int(min(max(round_half_up(score), SCORE_MIN), SCORE_MAX))


def overall_score(health: int, wealth: int = WEALTH_SCORE, relations: int = RELATIONS_SCORE) -> int:
    """Average the three pillars.

    Always divides by three, even while wealth and relations are not
    integrated, so a user with only health data tops out at 33.
    """
    return int(round_half_up((health + wealth + relations) / 3))


def trend_percentage(current: Optional[float], previous: Optional[float]) -> str:
    """Format the change from ``previous`` to ``current`` as ``+N%`` or ``-N%``.

    Returns ``"0%"`` whenever there is nothing to compare against.
    """
    if current is None or previous is None or previous == 0:
        return "0%"

    change = round_half_up((current - previous) / previous * 100)
    sign = "+" if change >= 0 else ""
    return f"{sign}{int(change)}%"


def compose_trinity_score(
    sleep: SleepAggregate,
    exercise: ExerciseAggregate,
    mood: MoodAggregate,
    previous_sleep: Optional[SleepAggregate] = None,
) -> TrinityScore:
    """Build the Trinity Score view-model from the domain aggregates."""
    health = health_score(sleep, exercise, mood)
    overall = overall_score(health, WEALTH_SCORE, RELATIONS_SCORE)
    previous_quality = previous_sleep.avg_quality if previous_sleep else None
    trend = trend_percentage(sleep.avg_quality, previous_quality)

    logger.debug(
        f"[SCORE] health={health} overall={overall} trend={trend} "
        f"(sleep={sleep.count}, exercise={exercise.count}, mood={mood.count})"
    )

    return TrinityScore(
        health_score=health,
        wealth_score=WEALTH_SCORE,
        relations_score=RELATIONS_SCORE,
        overall=overall,
        trend=trend,
        pillars=[
            PillarScore(pillar="health", score=health, integrated=True),
            PillarScore(pillar="wealth", score=WEALTH_SCORE, integrated=WEALTH_INTEGRATED),
            PillarScore(pillar="relations", score=RELATIONS_SCORE, integrated=RELATIONS_INTEGRATED),
        ],
    )
