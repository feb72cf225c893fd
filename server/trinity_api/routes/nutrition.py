"""Food search proxy route.

Forwards free-text searches to USDA FoodData Central and returns foods with
nutrients keyed by name. Every failure, including a malformed body, uses an
``{"error": ...}`` body rather than FastAPI's ``detail`` so existing clients
of the search function keep working.
"""
import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ..models.nutrition import ErrorResponse, FoodSearchRequest, FoodSearchResponse
from ..services.usda import FoodSearchError, USDAClient, get_usda_client

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/nutrition", tags=["Nutrition"])


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post(
    "/search-food",
    response_model=FoodSearchResponse,
    response_model_by_alias=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    openapi_extra={
        "requestBody": {
            "content": {"application/json": {"schema": FoodSearchRequest.model_json_schema()}},
        }
    },
)
async def search_food(request: Request, client: USDAClient = Depends(get_usda_client)):
    """Search foods by name."""
    raw = await request.body()
    try:
        payload = json.loads(raw) if raw.strip() else {}
    except ValueError:
        return _error(400, "Request body must be valid JSON")

    try:
        search = FoodSearchRequest.model_validate(payload)
    except ValidationError as e:
        field = ".".join(str(part) for part in e.errors()[0]["loc"]) or "body"
        log.info(f"[USDA] Rejected search body: invalid {field}")
        return _error(400, f"Invalid {field}")

    if not search.query or not search.query.strip():
        return _error(400, "Query parameter is required")

    try:
        return await client.search_foods(search.query, page_size=search.page_size)
    except FoodSearchError:
        log.exception("[USDA] Error in search-food")
        return _error(500, "Failed to search foods")
