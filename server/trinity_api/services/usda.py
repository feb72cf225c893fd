"""USDA FoodData Central search client.

Searches the public FDC API and reduces each hit's ``foodNutrients`` list to
a flat dict of named nutrients using a fixed nutrient-ID table.
"""
import logging
from typing import Any, Optional

import httpx

from ..config import get_settings
from ..models.nutrition import FoodItem, FoodSearchResponse

logger = logging.getLogger(__name__)

SEARCH_DATA_TYPES = "Survey (FNDDS),Foundation,SR Legacy"

# FDC nutrient ID -> response field name
NUTRIENT_FIELDS: dict[int, str] = {
    1008: "calories",  # Energy (kcal)
    1003: "protein",
    1005: "carbs",  # Carbohydrate, by difference
    1004: "fat",  # Total lipid
    1079: "fiber",
    2000: "sugar",  # Sugars, total
    1093: "sodium",
    # Vitamins
    1106: "vitaminA",
    1162: "vitaminC",
    1114: "vitaminD",
    1109: "vitaminE",
    1185: "vitaminK",
    1165: "thiamin",  # B1
    1166: "riboflavin",  # B2
    1167: "niacin",  # B3
    1175: "vitaminB6",
    1177: "folate",
    1178: "vitaminB12",
    # Minerals
    1087: "calcium",
    1089: "iron",
    1090: "magnesium",
    1091: "phosphorus",
    1092: "potassium",
    1095: "zinc",
}


class FoodSearchError(Exception):
    """Raised when the upstream food search fails for any reason."""


def map_nutrients(food_nutrients: Optional[list[dict[str, Any]]]) -> dict[str, float]:
    """Translate FDC ``foodNutrients`` entries into named fields; unknown IDs are dropped."""
    nutrients: dict[str, float] = {}
    for nutrient in food_nutrients or []:
        field = NUTRIENT_FIELDS.get(nutrient.get("nutrientId"))
        value = nutrient.get("value")
        if field is not None and value is not None:
            nutrients[field] = value
    return nutrients


def transform_search_result(data: dict[str, Any]) -> FoodSearchResponse:
    """Convert a raw FDC search payload into the proxy response."""
    foods = [
        FoodItem(
            fdc_id=food["fdcId"],
            description=food.get("description", ""),
            data_type=food.get("dataType"),
            nutrients=map_nutrients(food.get("foodNutrients")),
        )
        for food in data.get("foods") or []
    ]
    return FoodSearchResponse(foods=foods, total_hits=data.get("totalHits") or 0)


class USDAClient:
    """
    Thin async client for the FDC ``/foods/search`` endpoint.

    A transport may be injected for tests (``httpx.MockTransport``).
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self.api_key = api_key or settings.usda_api_key
        self.base_url = (base_url or settings.usda_base_url).rstrip("/")
        self.timeout = timeout or settings.usda_timeout
        self._transport = transport

    async def search_foods(self, query: str, page_size: int = 25) -> FoodSearchResponse:
        """Search foods by free text.

        Raises:
            FoodSearchError: on transport errors, non-2xx responses or
                an unreadable payload.
        """
        params = {
            "api_key": self.api_key,
            "query": query,
            "pageSize": page_size,
            "dataType": SEARCH_DATA_TYPES,
        }
        logger.debug(f"[USDA] Searching '{query}' (pageSize={page_size})")

        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout), transport=self._transport
            ) as client:
                response = await client.get(f"{self.base_url}/foods/search", params=params)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            raise FoodSearchError(f"USDA API error: {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise FoodSearchError(f"USDA API request failed: {e}") from e
        except ValueError as e:
            raise FoodSearchError("USDA API returned invalid JSON") from e

        try:
            result = transform_search_result(data)
        except (KeyError, TypeError, ValueError) as e:
            raise FoodSearchError(f"Unexpected USDA payload: {e}") from e

        logger.info(f"[USDA] '{query}' -> {len(result.foods)} foods ({result.total_hits} hits)")
        return result


def get_usda_client() -> USDAClient:
    """FastAPI dependency; overridden in tests."""
    return USDAClient()
