"""Sleep tracking API routes."""
from fastapi import APIRouter, Depends, Query

from ..config import get_settings
from ..identity import get_user_id
from ..models.sleep import CLOCK_PATTERN, SleepLogRequest, SleepRecord, SleepSummary, SuggestedBedtime
from ..repository import insert_sleep_record, recent_sleep_records
from ..services.aggregators import STREAK_MIN_SLEEP_HOURS, aggregate_sleep, round_half_up, sleep_streak
from ..services.sleep_schedule import session_bounds, sleep_duration_hours, suggested_bedtime

router = APIRouter(prefix="/api/sleep", tags=["Sleep"])


@router.post("", response_model=SleepRecord, status_code=201)
async def log_sleep(request: SleepLogRequest, user_id: str = Depends(get_user_id)):
    """Log a night of sleep from bedtime and wake time on the given morning."""
    duration = sleep_duration_hours(request.bedtime, request.wake_time)
    bedtime, wake_time = session_bounds(request.sleep_date, request.bedtime, request.wake_time)
    return insert_sleep_record(
        user_id,
        bedtime=bedtime,
        wake_time=wake_time,
        duration_hours=duration,
        quality=request.sleep_quality,
        notes=request.notes,
    )


@router.get("", response_model=list[SleepRecord])
async def get_sleep_records(
    limit: int = Query(default=30, ge=1, le=200, description="Maximum number of records"),
    user_id: str = Depends(get_user_id),
):
    """Get the user's most recent sleep records."""
    return recent_sleep_records(user_id, limit=limit)


@router.get("/summary", response_model=SleepSummary, response_model_by_alias=True)
async def get_sleep_summary(user_id: str = Depends(get_user_id)):
    """
    Average quality and duration over the most recent records,
    plus the current streak of nights with at least six hours.
    """
    window = get_settings().recent_window
    aggregate = aggregate_sleep(recent_sleep_records(user_id, limit=window), window=window)
    streak = sleep_streak(recent_sleep_records(user_id, limit=None, min_hours=STREAK_MIN_SLEEP_HOURS))

    return SleepSummary(
        avg_quality=round_half_up(aggregate.avg_quality or 0, 1),
        avg_duration=round_half_up(aggregate.avg_duration or 0, 2),
        streak_days=streak,
        record_count=aggregate.count,
    )


@router.get("/suggested-bedtime", response_model=SuggestedBedtime, response_model_by_alias=True)
async def get_suggested_bedtime(
    wake_time: str = Query(pattern=CLOCK_PATTERN, description="Wake time as HH:MM"),
):
    """Suggest a bedtime eight hours before the given wake time."""
    return SuggestedBedtime(wake_time=wake_time, suggested_bedtime=suggested_bedtime(wake_time))
