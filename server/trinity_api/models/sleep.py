"""Sleep data models."""
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

CLOCK_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class SleepRecord(BaseModel):
    """Logged sleep session."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: str
    user_id: str
    bedtime: Optional[datetime] = None
    wake_time: Optional[datetime] = None
    sleep_duration_hours: Optional[float] = None
    sleep_quality: Optional[int] = None
    notes: Optional[str] = None
    created_at: datetime


class SleepLogRequest(BaseModel):
    """Sleep form submission: clock times plus the morning the user woke up."""

    model_config = ConfigDict(populate_by_name=True)

    sleep_date: date = Field(alias="date")
    bedtime: str = Field(pattern=CLOCK_PATTERN)
    wake_time: str = Field(pattern=CLOCK_PATTERN, alias="wakeTime")
    sleep_quality: int = Field(default=5, ge=1, le=10, alias="sleepQuality")
    notes: Optional[str] = None


class SleepSummary(BaseModel):
    """Aggregated sleep summary over the most recent records."""

    model_config = ConfigDict(populate_by_name=True)

    avg_quality: float = Field(serialization_alias="avgQuality")
    avg_duration: float = Field(serialization_alias="avgDuration")
    streak_days: int = Field(serialization_alias="streakDays")
    record_count: int = Field(serialization_alias="recordCount")


class SuggestedBedtime(BaseModel):
    """Bedtime that yields eight hours of sleep before the given wake time."""

    model_config = ConfigDict(populate_by_name=True)

    wake_time: str = Field(serialization_alias="wakeTime")
    suggested_bedtime: Optional[str] = Field(default=None, serialization_alias="suggestedBedtime")
