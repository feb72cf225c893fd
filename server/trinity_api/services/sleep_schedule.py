"""Clock-time arithmetic for the sleep log form."""
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional

from .aggregators import round_half_up

OPTIMAL_SLEEP_HOURS = 8


def _parse_clock(value: str) -> time:
    hours, minutes = (int(part) for part in value.split(":", 1))
    return time(hours, minutes)


def sleep_duration_hours(bedtime: str, wake_time: str) -> float:
    """Hours between two ``HH:MM`` clock times, rolling wake time to the next day if needed."""
    if not bedtime or not wake_time:
        return 0.0

    anchor = date(2000, 1, 1)
    bed = datetime.combine(anchor, _parse_clock(bedtime))
    wake = datetime.combine(anchor, _parse_clock(wake_time))
    if wake < bed:
        wake += timedelta(days=1)

    return round_half_up((wake - bed).total_seconds() / 3600, 2)


def session_bounds(day: date, bedtime: str, wake_time: str) -> tuple[datetime, datetime]:
    """Place a sleep session on the calendar, in UTC.

    ``day`` is the morning the user woke up. Bedtime falls on the previous
    day when the wake hour is earlier than the bed hour.
    """
    bed_clock = _parse_clock(bedtime)
    wake_clock = _parse_clock(wake_time)

    bed_day = day - timedelta(days=1) if wake_clock.hour < bed_clock.hour else day
    return (
        datetime.combine(bed_day, bed_clock, tzinfo=timezone.utc),
        datetime.combine(day, wake_clock, tzinfo=timezone.utc),
    )


def suggested_bedtime(wake_time: str, hours: int = OPTIMAL_SLEEP_HOURS) -> Optional[str]:
    """``HH:MM`` bedtime giving ``hours`` of sleep before ``wake_time``."""
    if not wake_time:
        return None
    wake = datetime.combine(date(2000, 1, 2), _parse_clock(wake_time))
    return (wake - timedelta(hours=hours)).strftime("%H:%M")
