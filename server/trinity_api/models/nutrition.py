"""Food search proxy models."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class FoodSearchRequest(BaseModel):
    """Search body; query is optional here so the route can answer 400 itself."""

    model_config = ConfigDict(populate_by_name=True)

    query: Optional[str] = None
    page_size: int = Field(default=25, ge=1, le=200, alias="pageSize")


class FoodItem(BaseModel):
    """Food search hit with nutrients keyed by field name, per 100 g."""

    model_config = ConfigDict(populate_by_name=True)

    fdc_id: int = Field(alias="fdcId")
    description: str
    data_type: Optional[str] = Field(default=None, alias="dataType")
    nutrients: dict[str, float] = Field(default_factory=dict)


class FoodSearchResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    foods: list[FoodItem]
    total_hits: int = Field(default=0, alias="totalHits")


class ErrorResponse(BaseModel):
    error: str
