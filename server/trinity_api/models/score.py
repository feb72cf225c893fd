"""Trinity Score models."""
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Pillar = Literal["health", "wealth", "relations"]


class PillarScore(BaseModel):
    """Sub-score for one pillar.

    ``integrated`` is False for pillars that have no data source yet; their
    score is a fixed 0 rather than a measurement.
    """

    model_config = ConfigDict(populate_by_name=True)

    pillar: Pillar
    score: int = Field(ge=0, le=100)
    integrated: bool


class TrinityScore(BaseModel):
    """Overall wellness score across the three pillars."""

    model_config = ConfigDict(populate_by_name=True)

    health_score: int = Field(serialization_alias="healthScore")
    wealth_score: int = Field(serialization_alias="wealthScore")
    relations_score: int = Field(serialization_alias="relationsScore")
    overall: int
    trend: str
    pillars: list[PillarScore]
