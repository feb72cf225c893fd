"""
Metric aggregators for sleep, exercise and mood records.

Each aggregator reduces a small window of recent records into summary
statistics. They are total over their input: empty lists and records with
missing fields produce zero/None results instead of raising, because a new
user simply has no data yet.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional, Sequence

from ..models.exercise import ExerciseRecord
from ..models.sleep import SleepRecord
from ..models.wellness import MentalHealthLog

RECENT_WINDOW = 7
RATING_MIN = 1
RATING_MAX = 10
STREAK_MIN_SLEEP_HOURS = 6.0
WEEKLY_EXERCISE_GOAL_MINUTES = 150  # WHO recommendation
DAILY_STEP_GOAL = 10000


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like JavaScript's Math.round: halves go toward +infinity."""
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def clamp_rating(value: Optional[float]) -> float:
    """Coalesce a missing rating to 0 and pull stored ratings into [1, 10]."""
    if value is None:
        return 0.0
    return float(min(max(value, RATING_MIN), RATING_MAX))


def _mean(values: Sequence[float]) -> Optional[float]:
    if not values:
        return None
    return sum(values) / len(values)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@dataclass(frozen=True)
class SleepAggregate:
    """Average quality and duration over the recent sleep window."""

    avg_quality: Optional[float] = None
    avg_duration: Optional[float] = None
    count: int = 0

    @property
    def has_data(self) -> bool:
        return self.count > 0


@dataclass(frozen=True)
class ExerciseAggregate:
    """Totals over the trailing exercise window."""

    total_minutes: float = 0
    total_calories: float = 0
    count: int = 0

    @property
    def has_data(self) -> bool:
        return self.count > 0


@dataclass(frozen=True)
class MoodAggregate:
    """Average check-in ratings over the recent window."""

    avg_mood: Optional[float] = None
    avg_stress: Optional[float] = None
    avg_anxiety: Optional[float] = None
    avg_energy: Optional[float] = None
    count: int = 0

    @property
    def has_data(self) -> bool:
        return self.count > 0


def aggregate_sleep(records: Sequence[SleepRecord], window: int = RECENT_WINDOW) -> SleepAggregate:
    """Average the most recent ``window`` sleep records (input is newest first)."""
    recent = list(records)[:window]
    if not recent:
        return SleepAggregate()

    qualities = [clamp_rating(r.sleep_quality) for r in recent]
    durations = [float(r.sleep_duration_hours or 0) for r in recent]
    return SleepAggregate(
        avg_quality=_mean(qualities),
        avg_duration=_mean(durations),
        count=len(recent),
    )


def aggregate_exercise(
    records: Iterable[ExerciseRecord],
    now: Optional[datetime] = None,
    days: int = RECENT_WINDOW,
) -> ExerciseAggregate:
    """Sum workouts completed within the trailing ``days`` (inclusive) of ``now``."""
    now = _as_utc(now or datetime.now(timezone.utc))
    start = now - timedelta(days=days)

    in_window = [
        r for r in records
        if r.completed_at is not None and start <= _as_utc(r.completed_at) <= now
    ]
    return ExerciseAggregate(
        total_minutes=sum(r.duration_minutes or 0 for r in in_window),
        total_calories=sum(r.calories_burned or 0 for r in in_window),
        count=len(in_window),
    )


def aggregate_mood(logs: Sequence[MentalHealthLog], window: int = RECENT_WINDOW) -> MoodAggregate:
    """Average the most recent ``window`` check-ins (input is newest first)."""
    recent = list(logs)[:window]
    if not recent:
        return MoodAggregate()

    return MoodAggregate(
        avg_mood=_mean([clamp_rating(log.mood_rating) for log in recent]),
        avg_stress=_mean([clamp_rating(log.stress_level) for log in recent]),
        avg_anxiety=_mean([clamp_rating(log.anxiety_level) for log in recent]),
        avg_energy=_mean([clamp_rating(log.energy_level) for log in recent]),
        count=len(recent),
    )


def sleep_streak(
    records: Iterable[SleepRecord],
    now: Optional[datetime] = None,
    min_hours: float = STREAK_MIN_SLEEP_HOURS,
) -> int:
    """Count consecutive days, ending today, with at least ``min_hours`` of sleep.

    A record logged ``n`` whole days ago extends the streak only when the
    streak so far is exactly ``n``.
    """
    now = _as_utc(now or datetime.now(timezone.utc))
    qualifying = sorted(
        (r for r in records if (r.sleep_duration_hours or 0) >= min_hours),
        key=lambda r: _as_utc(r.created_at),
        reverse=True,
    )

    streak = 0
    for record in qualifying:
        days_ago = math.floor((now - _as_utc(record.created_at)).total_seconds() / 86400)
        if days_ago == streak:
            streak += 1
        else:
            break
    return streak


def goal_progress(current: float, target: float) -> float:
    """Progress toward ``target`` as a percentage capped at 100."""
    if target <= 0:
        return 0.0
    return min((current / target) * 100, 100.0)
