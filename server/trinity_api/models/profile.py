"""Health profile models."""
from datetime import datetime
from typing import Optional, Literal

from pydantic import BaseModel, ConfigDict, Field

Gender = Literal["female", "male", "other"]


class HealthProfileUpdate(BaseModel):
    """Fields a user may set on their health profile."""

    model_config = ConfigDict(populate_by_name=True)

    height_cm: Optional[float] = Field(default=None, gt=0, alias="heightCm")
    weight_kg: Optional[float] = Field(default=None, gt=0, alias="weightKg")
    target_weight_kg: Optional[float] = Field(default=None, gt=0, alias="targetWeightKg")
    daily_caloric_target: Optional[int] = Field(default=None, gt=0, alias="dailyCaloricTarget")
    gender: Optional[Gender] = None
    activity_level: Optional[str] = Field(default=None, alias="activityLevel")
    goal_type: Optional[str] = Field(default=None, alias="goalType")
    birth_date: Optional[str] = Field(default=None, alias="birthDate")


class HealthProfile(BaseModel):
    """Stored health profile with derived BMI."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    user_id: str = Field(serialization_alias="userId")
    height_cm: Optional[float] = Field(default=None, serialization_alias="heightCm")
    weight_kg: Optional[float] = Field(default=None, serialization_alias="weightKg")
    target_weight_kg: Optional[float] = Field(default=None, serialization_alias="targetWeightKg")
    daily_caloric_target: Optional[int] = Field(default=None, serialization_alias="dailyCaloricTarget")
    gender: Optional[str] = None
    activity_level: Optional[str] = Field(default=None, serialization_alias="activityLevel")
    goal_type: Optional[str] = Field(default=None, serialization_alias="goalType")
    birth_date: Optional[str] = Field(default=None, serialization_alias="birthDate")
    bmi: Optional[float] = None
    updated_at: Optional[datetime] = Field(default=None, serialization_alias="updatedAt")
