"""Women's health (cycle tracking) API routes."""
from fastapi import APIRouter, Depends, Query

from ..database import utc_now
from ..identity import get_user_id
from ..models.cycle import CycleLogRequest, CyclePrediction, MenstrualCycle
from ..repository import insert_cycle, recent_cycles
from ..services.cycles import cycle_length_days, predict_next_period

router = APIRouter(prefix="/api/womens-health", tags=["Women's Health"])

RECENT_CYCLES = 10


@router.post("/cycles", response_model=MenstrualCycle, status_code=201)
async def log_cycle(request: CycleLogRequest, user_id: str = Depends(get_user_id)):
    """Log a period; the cycle length is derived when an end date is given."""
    length = cycle_length_days(request.cycle_start_date, request.cycle_end_date)
    return insert_cycle(user_id, request, length)


@router.get("/cycles", response_model=list[MenstrualCycle])
async def get_cycles(
    limit: int = Query(default=RECENT_CYCLES, ge=1, le=100, description="Maximum number of cycles"),
    user_id: str = Depends(get_user_id),
):
    """Get the user's most recent cycles, latest start date first."""
    return recent_cycles(user_id, limit=limit)


@router.get("/prediction", response_model=CyclePrediction, response_model_by_alias=True)
async def get_prediction(user_id: str = Depends(get_user_id)):
    """Predict the next period from the last ten cycles."""
    cycles = recent_cycles(user_id, limit=RECENT_CYCLES)
    return predict_next_period(cycles, utc_now().date())
