"""API route modules."""
from .sleep import router as sleep_router
from .exercise import router as exercise_router
from .wellness import router as wellness_router
from .diet import router as diet_router
from .nutrition import router as nutrition_router
from .profile import router as profile_router
from .score import router as score_router
from .womens_health import router as womens_health_router

__all__ = [
    "sleep_router",
    "exercise_router",
    "wellness_router",
    "diet_router",
    "nutrition_router",
    "profile_router",
    "score_router",
    "womens_health_router",
]
