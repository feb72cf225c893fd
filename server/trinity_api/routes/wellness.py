"""Mental health check-in API routes."""
from fastapi import APIRouter, Depends, Query

from ..config import get_settings
from ..identity import get_user_id
from ..models.wellness import MentalHealthLog, MentalHealthLogRequest, MoodSummary
from ..repository import insert_mental_health_log, recent_mental_health_logs
from ..services.aggregators import aggregate_mood

router = APIRouter(prefix="/api/mental-health", tags=["Mental Health"])


@router.post("", response_model=MentalHealthLog, status_code=201)
async def log_mental_health(request: MentalHealthLogRequest, user_id: str = Depends(get_user_id)):
    """Record a mental health check-in."""
    return insert_mental_health_log(user_id, request)


@router.get("", response_model=list[MentalHealthLog])
async def get_mental_health_logs(
    limit: int = Query(default=10, ge=1, le=100, description="Maximum number of check-ins"),
    user_id: str = Depends(get_user_id),
):
    """Get the user's most recent check-ins."""
    return recent_mental_health_logs(user_id, limit=limit)


@router.get("/summary", response_model=MoodSummary, response_model_by_alias=True)
async def get_mood_summary(user_id: str = Depends(get_user_id)):
    """Average mood, stress, anxiety and energy over the last seven check-ins."""
    window = get_settings().recent_window
    aggregate = aggregate_mood(recent_mental_health_logs(user_id, limit=window), window=window)
    return MoodSummary(
        avg_mood=aggregate.avg_mood,
        avg_stress=aggregate.avg_stress,
        avg_anxiety=aggregate.avg_anxiety,
        avg_energy=aggregate.avg_energy,
        log_count=aggregate.count,
    )
