"""Trinity Score API route."""
import asyncio
import logging
from datetime import timedelta

from fastapi import APIRouter, Depends

from ..config import get_settings
from ..database import utc_now
from ..identity import get_user_id
from ..models.score import TrinityScore
from ..repository import exercise_records_since, recent_mental_health_logs, recent_sleep_records
from ..services.aggregators import aggregate_exercise, aggregate_mood, aggregate_sleep
from ..services.scoring import compose_trinity_score

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/trinity", tags=["Trinity Score"])


@router.get("/score", response_model=TrinityScore, response_model_by_alias=True)
async def get_trinity_score(user_id: str = Depends(get_user_id)):
    """
    Compute the Trinity Score from the user's recent records.

    The four reads are independent and run concurrently; the score is
    composed only after all of them finish. Nothing is cached.
    """
    window = get_settings().recent_window
    now = utc_now()
    week_ago = now - timedelta(days=window)

    sleep, previous_sleep, exercise, mood = await asyncio.gather(
        asyncio.to_thread(recent_sleep_records, user_id, window),
        asyncio.to_thread(recent_sleep_records, user_id, window, week_ago),
        asyncio.to_thread(exercise_records_since, user_id, week_ago),
        asyncio.to_thread(recent_mental_health_logs, user_id, window),
    )

    score = compose_trinity_score(
        aggregate_sleep(sleep, window=window),
        aggregate_exercise(exercise, now=now, days=window),
        aggregate_mood(mood, window=window),
        previous_sleep=aggregate_sleep(previous_sleep, window=window),
    )
    log.info(f"[SCORE] {user_id}: overall={score.overall} health={score.health_score} trend={score.trend}")
    return score
