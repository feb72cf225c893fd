"""Pydantic models for TrinityOS API requests and responses."""
from .sleep import SleepRecord, SleepLogRequest, SleepSummary, SuggestedBedtime
from .exercise import ExerciseRecord, ExerciseLogRequest, StepRecord, StepUpdateRequest, ExerciseSummary
from .wellness import MentalHealthLog, MentalHealthLogRequest, MoodSummary
from .nutrition import FoodSearchRequest, FoodItem, FoodSearchResponse, ErrorResponse
from .diet import (
    FoodEntry,
    FoodEntryCreate,
    LogFoodRequest,
    SelectedFood,
    MealIngredient,
    MealRequest,
    MealLogResult,
    NutritionTotals,
    DailyNutrition,
)
from .profile import HealthProfile, HealthProfileUpdate
from .score import PillarScore, TrinityScore
from .cycle import MenstrualCycle, CycleLogRequest, CyclePrediction

__all__ = [
    "SleepRecord",
    "SleepLogRequest",
    "SleepSummary",
    "SuggestedBedtime",
    "ExerciseRecord",
    "ExerciseLogRequest",
    "StepRecord",
    "StepUpdateRequest",
    "ExerciseSummary",
    "MentalHealthLog",
    "MentalHealthLogRequest",
    "MoodSummary",
    "FoodSearchRequest",
    "FoodItem",
    "FoodSearchResponse",
    "ErrorResponse",
    "FoodEntry",
    "FoodEntryCreate",
    "LogFoodRequest",
    "SelectedFood",
    "MealIngredient",
    "MealRequest",
    "MealLogResult",
    "NutritionTotals",
    "DailyNutrition",
    "HealthProfile",
    "HealthProfileUpdate",
    "PillarScore",
    "TrinityScore",
    "MenstrualCycle",
    "CycleLogRequest",
    "CyclePrediction",
]
