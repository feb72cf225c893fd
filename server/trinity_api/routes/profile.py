"""Health profile API routes."""
from fastapi import APIRouter, Depends, HTTPException

from ..identity import get_user_id
from ..models.profile import HealthProfile, HealthProfileUpdate
from ..repository import get_health_profile, upsert_health_profile

router = APIRouter(prefix="/api/profile", tags=["Profile"])


@router.get("/health", response_model=HealthProfile, response_model_by_alias=True)
async def read_health_profile(user_id: str = Depends(get_user_id)):
    """Get the user's health profile, including BMI when height and weight are known."""
    profile = get_health_profile(user_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="Health profile not found")
    return profile


@router.put("/health", response_model=HealthProfile, response_model_by_alias=True)
async def update_health_profile(update: HealthProfileUpdate, user_id: str = Depends(get_user_id)):
    """Create or update the user's health profile. Omitted fields keep their value."""
    return upsert_health_profile(user_id, update)
