"""Mental health check-in models."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MentalHealthLog(BaseModel):
    """Stored mental health check-in.

    Ratings are not range-checked here: rows written by older clients may
    hold anything, and the aggregators clamp on read.
    """

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    user_id: str
    mood_rating: Optional[int] = None
    stress_level: Optional[int] = None
    anxiety_level: Optional[int] = None
    energy_level: Optional[int] = None
    sleep_quality_rating: Optional[int] = None
    thoughts: Optional[str] = None
    activities: Optional[list[str]] = None
    triggers: Optional[list[str]] = None
    coping_strategies: Optional[list[str]] = None
    notes: Optional[str] = None
    logged_at: Optional[datetime] = None
    created_at: datetime


class MentalHealthLogRequest(BaseModel):
    """Check-in form submission. Sliders default to the midpoint."""

    model_config = ConfigDict(populate_by_name=True)

    mood_rating: int = Field(default=5, ge=1, le=10, alias="moodRating")
    stress_level: int = Field(default=5, ge=1, le=10, alias="stressLevel")
    anxiety_level: int = Field(default=5, ge=1, le=10, alias="anxietyLevel")
    energy_level: int = Field(default=5, ge=1, le=10, alias="energyLevel")
    sleep_quality_rating: int = Field(default=5, ge=1, le=10, alias="sleepQuality")
    thoughts: Optional[str] = None
    activities: list[str] = Field(default_factory=list)
    triggers: list[str] = Field(default_factory=list)
    coping_strategies: list[str] = Field(default_factory=list, alias="copingStrategies")
    notes: Optional[str] = None


class MoodSummary(BaseModel):
    """Averages over the most recent check-ins; None when there are none."""

    model_config = ConfigDict(populate_by_name=True)

    avg_mood: Optional[float] = Field(default=None, serialization_alias="avgMood")
    avg_stress: Optional[float] = Field(default=None, serialization_alias="avgStress")
    avg_anxiety: Optional[float] = Field(default=None, serialization_alias="avgAnxiety")
    avg_energy: Optional[float] = Field(default=None, serialization_alias="avgEnergy")
    log_count: int = Field(serialization_alias="logCount")
