"""Diet logging API routes."""
from datetime import datetime, time, timedelta, timezone

from fastapi import APIRouter, Depends

from ..database import utc_now
from ..identity import get_user_id
from ..models.diet import (
    DailyNutrition,
    FoodEntry,
    FoodEntryCreate,
    LogFoodRequest,
    MealLogResult,
    MealRequest,
)
from ..repository import food_entries_between, get_health_profile, insert_food_entries, insert_food_entry
from ..services.aggregators import goal_progress
from ..services.nutrition import (
    DAILY_TARGETS,
    daily_totals,
    group_by_meal,
    meal_totals,
    scale_food,
    target_progress,
)

router = APIRouter(prefix="/api/diet", tags=["Diet"])


@router.post("/entries", response_model=FoodEntry, status_code=201)
async def log_food_entry(entry: FoodEntryCreate, user_id: str = Depends(get_user_id)):
    """Log a manually entered food item."""
    return insert_food_entry(user_id, entry)


@router.post("/foods", response_model=FoodEntry, status_code=201)
async def log_searched_food(request: LogFoodRequest, user_id: str = Depends(get_user_id)):
    """Log a food picked from search results, scaled by the number of servings."""
    entry = scale_food(request.food, request.servings, request.meal_type, consumed_at=utc_now())
    return insert_food_entry(user_id, entry)


@router.post("/meals", response_model=MealLogResult, status_code=201)
async def log_meal(request: MealRequest, user_id: str = Depends(get_user_id)):
    """
    Log a meal built from several ingredients.
    Each ingredient becomes its own food entry named "<meal> - <food>".
    """
    consumed_at = utc_now()
    entries = [
        scale_food(
            ingredient.food,
            ingredient.amount,
            request.meal_type,
            consumed_at=consumed_at,
            food_name=f"{request.name} - {ingredient.food.description}",
        )
        for ingredient in request.ingredients
    ]
    saved = insert_food_entries(user_id, entries)
    return MealLogResult(name=request.name, entries=saved, totals=meal_totals(request.ingredients))


@router.get("/today", response_model=DailyNutrition, response_model_by_alias=True)
async def get_today_nutrition(user_id: str = Depends(get_user_id)):
    """Today's food entries with totals, target progress and per-meal grouping."""
    today = utc_now().date()
    start = datetime.combine(today, time.min, tzinfo=timezone.utc)
    entries = food_entries_between(user_id, start, start + timedelta(days=1))
    totals = daily_totals(entries)

    profile = get_health_profile(user_id)
    calorie_target = profile.daily_caloric_target if profile else None

    return DailyNutrition(
        date=today.isoformat(),
        totals=totals,
        targets=DAILY_TARGETS,
        progress=target_progress(totals),
        meals=group_by_meal(entries),
        calorie_target=calorie_target,
        calorie_progress=goal_progress(totals.calories, calorie_target) if calorie_target else None,
    )
