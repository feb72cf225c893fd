"""Menstrual cycle models."""
from datetime import date, datetime
from typing import Optional, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

FlowIntensity = Literal["light", "normal", "heavy"]


class MenstrualCycle(BaseModel):
    """Logged period."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    user_id: str
    cycle_start_date: date
    cycle_end_date: Optional[date] = None
    cycle_length_days: Optional[int] = None
    flow_intensity: Optional[str] = None
    pain_level: Optional[int] = None
    mood_rating: Optional[int] = None
    symptoms: Optional[list[str]] = None
    notes: Optional[str] = None
    created_at: datetime


class CycleLogRequest(BaseModel):
    """Cycle form submission. The end date may be filled in later."""

    model_config = ConfigDict(populate_by_name=True)

    cycle_start_date: date = Field(alias="cycleStartDate")
    cycle_end_date: Optional[date] = Field(default=None, alias="cycleEndDate")
    flow_intensity: Optional[FlowIntensity] = Field(default=None, alias="flowIntensity")
    pain_level: int = Field(default=1, ge=1, le=10, alias="painLevel")
    mood_rating: int = Field(default=5, ge=1, le=10, alias="moodRating")
    symptoms: list[str] = Field(default_factory=list)
    notes: Optional[str] = None

    @model_validator(mode="after")
    def check_dates(self) -> "CycleLogRequest":
        if self.cycle_end_date and self.cycle_end_date < self.cycle_start_date:
            raise ValueError("cycleEndDate must not be before cycleStartDate")
        return self


class CyclePrediction(BaseModel):
    """Next expected period; dates are None until two cycles are logged."""

    model_config = ConfigDict(populate_by_name=True)

    predicted_date: Optional[date] = Field(default=None, serialization_alias="predictedDate")
    days_until: Optional[int] = Field(default=None, serialization_alias="daysUntil")
    avg_cycle_length: Optional[float] = Field(default=None, serialization_alias="avgCycleLength")
    cycle_count: int = Field(serialization_alias="cycleCount")
