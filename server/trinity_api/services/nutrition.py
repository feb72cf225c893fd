"""Nutrition arithmetic: serving scaling, meal totals, daily totals and targets."""
from collections import defaultdict
from datetime import datetime
from typing import Iterable, Optional

from ..models.diet import FoodEntry, FoodEntryCreate, MealIngredient, NutritionTotals
from ..models.nutrition import FoodItem
from .aggregators import goal_progress, round_half_up

DAILY_TARGETS = NutritionTotals(
    calories=2000,
    protein=150,
    carbs=250,
    fat=67,
    fiber=25,
    sodium=2300,
    sugar=50,
)

# Nutrient field -> food entry column.
ENTRY_COLUMNS = {
    "calories": "total_calories",
    "protein": "protein_g",
    "carbs": "carbs_g",
    "fat": "fat_g",
    "fiber": "fiber_g",
    "sodium": "sodium_mg",
    "sugar": "sugar_g",
}


def scale_food(
    food: FoodItem,
    servings: Optional[float],
    meal_type: str,
    consumed_at: Optional[datetime] = None,
    food_name: Optional[str] = None,
) -> FoodEntryCreate:
    """Turn a per-100 g search hit into a food entry for ``servings`` portions.

    Calories and sodium are whole numbers; macros keep one decimal.
    """
    if not servings or servings <= 0:
        servings = 1.0
    nutrients = food.nutrients

    def scaled(key: str, digits: int) -> float:
        return round_half_up((nutrients.get(key) or 0) * servings, digits)

    return FoodEntryCreate(
        food_name=food_name or food.description,
        meal_type=meal_type,
        servings=servings,
        calories_per_serving=int(round_half_up(nutrients.get("calories") or 0)),
        total_calories=int(scaled("calories", 0)),
        protein_g=scaled("protein", 1),
        carbs_g=scaled("carbs", 1),
        fat_g=scaled("fat", 1),
        fiber_g=scaled("fiber", 1),
        sugar_g=scaled("sugar", 1),
        sodium_mg=int(scaled("sodium", 0)),
        consumed_at=consumed_at,
    )


def meal_totals(ingredients: Iterable[MealIngredient]) -> dict[str, float]:
    """Sum every nutrient across ingredients, weighted by ingredient amount."""
    totals: dict[str, float] = defaultdict(float)
    for ingredient in ingredients:
        for key, value in ingredient.food.nutrients.items():
            if value:
                totals[key] += value * ingredient.amount
    return dict(totals)


def daily_totals(entries: Iterable[FoodEntry]) -> NutritionTotals:
    """Sum logged entries; missing values count as zero."""
    totals = {key: 0.0 for key in ENTRY_COLUMNS}
    for entry in entries:
        for key, column in ENTRY_COLUMNS.items():
            totals[key] += getattr(entry, column) or 0
    return NutritionTotals(**totals)


def target_progress(totals: NutritionTotals, targets: NutritionTotals = DAILY_TARGETS) -> dict[str, float]:
    """Per-nutrient progress toward the daily targets, each capped at 100."""
    return {
        key: goal_progress(getattr(totals, key), getattr(targets, key))
        for key in ENTRY_COLUMNS
    }


def group_by_meal(entries: Iterable[FoodEntry]) -> dict[str, list[FoodEntry]]:
    grouped: dict[str, list[FoodEntry]] = defaultdict(list)
    for entry in entries:
        grouped[entry.meal_type or "other"].append(entry)
    return dict(grouped)


def calculate_bmi(height_cm: Optional[float], weight_kg: Optional[float]) -> Optional[float]:
    """Body-mass index to one decimal, or None without both measurements."""
    if not height_cm or not weight_kg or height_cm <= 0 or weight_kg <= 0:
        return None
    height_m = height_cm / 100
    return round_half_up(weight_kg / (height_m * height_m), 1)
