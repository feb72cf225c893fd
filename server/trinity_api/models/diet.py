"""Diet data models."""
from datetime import datetime
from typing import Annotated, Optional, Literal

from pydantic import BaseModel, ConfigDict, Field

from .nutrition import FoodItem

MealType = Literal["breakfast", "lunch", "dinner", "snack"]
NonNegativeAmount = Annotated[float, Field(ge=0)]


class FoodEntry(BaseModel):
    """Logged food item."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    user_id: str
    food_name: str
    meal_type: Optional[str] = None
    servings: Optional[float] = None
    calories_per_serving: Optional[int] = None
    total_calories: Optional[int] = None
    protein_g: Optional[float] = None
    carbs_g: Optional[float] = None
    fat_g: Optional[float] = None
    fiber_g: Optional[float] = None
    sugar_g: Optional[float] = None
    sodium_mg: Optional[int] = None
    consumed_at: Optional[datetime] = None
    created_at: datetime


class FoodEntryCreate(BaseModel):
    """Values written for a new food entry."""

    model_config = ConfigDict(populate_by_name=True)

    food_name: str = Field(min_length=1, alias="foodName")
    meal_type: MealType = Field(alias="mealType")
    servings: float = 1
    calories_per_serving: Optional[int] = Field(default=None, alias="caloriesPerServing")
    total_calories: int = Field(default=0, ge=0, alias="totalCalories")
    protein_g: float = Field(default=0, ge=0, alias="proteinG")
    carbs_g: float = Field(default=0, ge=0, alias="carbsG")
    fat_g: float = Field(default=0, ge=0, alias="fatG")
    fiber_g: float = Field(default=0, ge=0, alias="fiberG")
    sugar_g: float = Field(default=0, ge=0, alias="sugarG")
    sodium_mg: int = Field(default=0, ge=0, alias="sodiumMg")
    consumed_at: Optional[datetime] = Field(default=None, alias="consumedAt")


class SelectedFood(FoodItem):
    """Search hit sent back by the client; nutrient amounts may not be negative."""

    nutrients: dict[str, NonNegativeAmount] = Field(default_factory=dict)


class LogFoodRequest(BaseModel):
    """A food picked from search results, eaten in some number of servings."""

    model_config = ConfigDict(populate_by_name=True)

    food: SelectedFood
    servings: Optional[float] = None
    meal_type: MealType = Field(alias="mealType")


class MealIngredient(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    food: SelectedFood
    amount: float = Field(default=1, gt=0)
    unit: str = "100g"


class MealRequest(BaseModel):
    """Meal built from several searched ingredients."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1)
    meal_type: MealType = Field(alias="mealType")
    ingredients: list[MealIngredient] = Field(min_length=1)


class NutritionTotals(BaseModel):
    """Summed nutrients across food entries."""

    model_config = ConfigDict(populate_by_name=True)

    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0
    fiber: float = 0
    sodium: float = 0
    sugar: float = 0


class MealLogResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    entries: list[FoodEntry]
    totals: dict[str, float]


class DailyNutrition(BaseModel):
    """Today's nutrition with progress against the daily targets."""

    model_config = ConfigDict(populate_by_name=True)

    date: str
    totals: NutritionTotals
    targets: NutritionTotals
    progress: dict[str, float]
    meals: dict[str, list[FoodEntry]]
    calorie_target: Optional[int] = Field(default=None, serialization_alias="calorieTarget")
    calorie_progress: Optional[float] = Field(default=None, serialization_alias="calorieProgress")
