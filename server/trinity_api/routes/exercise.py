"""Exercise and step tracking API routes."""
from datetime import timedelta

from fastapi import APIRouter, Depends

from ..database import utc_now
from ..identity import get_user_id
from ..models.exercise import (
    ExerciseLogRequest,
    ExerciseRecord,
    ExerciseSummary,
    StepRecord,
    StepUpdateRequest,
)
from ..repository import exercise_records_since, get_steps, insert_exercise_record, upsert_steps
from ..services.aggregators import (
    DAILY_STEP_GOAL,
    RECENT_WINDOW,
    WEEKLY_EXERCISE_GOAL_MINUTES,
    aggregate_exercise,
    goal_progress,
)

router = APIRouter(prefix="/api/exercise", tags=["Exercise"])


@router.post("", response_model=ExerciseRecord, status_code=201)
async def log_exercise(request: ExerciseLogRequest, user_id: str = Depends(get_user_id)):
    """Log a workout completed now."""
    return insert_exercise_record(user_id, request)


@router.get("/week", response_model=list[ExerciseRecord])
async def get_weekly_exercise(user_id: str = Depends(get_user_id)):
    """Get workouts completed in the trailing seven days."""
    return exercise_records_since(user_id, utc_now() - timedelta(days=RECENT_WINDOW))


@router.put("/steps", response_model=StepRecord)
async def update_steps(request: StepUpdateRequest, user_id: str = Depends(get_user_id)):
    """Set today's step count (one record per day)."""
    return upsert_steps(user_id, utc_now().date(), request.steps)


@router.get("/summary", response_model=ExerciseSummary, response_model_by_alias=True)
async def get_exercise_summary(user_id: str = Depends(get_user_id)):
    """Weekly minutes and calories against the 150-minute goal, plus today's steps."""
    now = utc_now()
    records = exercise_records_since(user_id, now - timedelta(days=RECENT_WINDOW))
    aggregate = aggregate_exercise(records, now=now)
    today = get_steps(user_id, now.date())
    today_steps = today.steps if today else 0

    return ExerciseSummary(
        total_minutes=int(aggregate.total_minutes),
        total_calories=int(aggregate.total_calories),
        workout_count=aggregate.count,
        weekly_goal_minutes=WEEKLY_EXERCISE_GOAL_MINUTES,
        weekly_progress=goal_progress(aggregate.total_minutes, WEEKLY_EXERCISE_GOAL_MINUTES),
        today_steps=today_steps,
        daily_step_goal=DAILY_STEP_GOAL,
        step_progress=goal_progress(today_steps, DAILY_STEP_GOAL),
    )
