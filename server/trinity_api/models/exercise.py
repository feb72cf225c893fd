"""Exercise and step data models."""
from datetime import datetime
from typing import Optional, Literal

from pydantic import BaseModel, ConfigDict, Field

Intensity = Literal["low", "moderate", "high"]


class ExerciseRecord(BaseModel):
    """Completed workout."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    user_id: str
    exercise_name: str
    exercise_type: Optional[str] = None
    duration_minutes: Optional[int] = None
    calories_burned: Optional[int] = None
    intensity: Optional[str] = None
    notes: Optional[str] = None
    completed_at: Optional[datetime] = None
    created_at: datetime


class ExerciseLogRequest(BaseModel):
    """Workout form submission."""

    model_config = ConfigDict(populate_by_name=True)

    exercise_name: str = Field(min_length=1, alias="exerciseName")
    exercise_type: str = Field(min_length=1, alias="exerciseType")
    duration_minutes: int = Field(gt=0, alias="durationMinutes")
    calories_burned: int = Field(default=0, ge=0, alias="caloriesBurned")
    intensity: Intensity
    notes: Optional[str] = None


class StepRecord(BaseModel):
    """Daily step count, one row per user and day."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    user_id: str
    date: str
    steps: int
    created_at: datetime


class StepUpdateRequest(BaseModel):
    steps: int = Field(ge=0)


class ExerciseSummary(BaseModel):
    """Trailing-week exercise summary with goal progress."""

    model_config = ConfigDict(populate_by_name=True)

    total_minutes: int = Field(serialization_alias="totalMinutes")
    total_calories: int = Field(serialization_alias="totalCalories")
    workout_count: int = Field(serialization_alias="workoutCount")
    weekly_goal_minutes: int = Field(serialization_alias="weeklyGoalMinutes")
    weekly_progress: float = Field(serialization_alias="weeklyProgress")
    today_steps: int = Field(serialization_alias="todaySteps")
    daily_step_goal: int = Field(serialization_alias="dailyStepGoal")
    step_progress: float = Field(serialization_alias="stepProgress")
