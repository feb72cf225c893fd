"""Cycle length and next-period prediction."""
import math
from datetime import date, timedelta
from typing import Optional, Sequence

from ..models.cycle import CyclePrediction, MenstrualCycle
from .aggregators import round_half_up

MIN_CYCLES_FOR_PREDICTION = 2


def cycle_length_days(start: date, end: Optional[date]) -> Optional[int]:
    """Whole days from ``start`` to ``end`` (rounded up), or None without an end date."""
    if end is None:
        return None
    return math.ceil((end - start).total_seconds() / 86400)


def predict_next_period(cycles: Sequence[MenstrualCycle], today: date) -> CyclePrediction:
    """Predict the next start date from the logged cycles (newest first).

    The average length sums the cycles that have a length but divides by
    every cycle in the list, so open cycles pull the average down.
    """
    if len(cycles) < MIN_CYCLES_FOR_PREDICTION:
        return CyclePrediction(cycle_count=len(cycles))

    total = sum(c.cycle_length_days for c in cycles if c.cycle_length_days)
    avg_length = total / len(cycles)
    predicted = cycles[0].cycle_start_date + timedelta(days=int(round_half_up(avg_length)))

    return CyclePrediction(
        predicted_date=predicted,
        days_until=(predicted - today).days,
        avg_cycle_length=round_half_up(avg_length, 1),
        cycle_count=len(cycles),
    )
