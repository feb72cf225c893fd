"""
Pytest fixtures for TrinityOS API tests.
"""
from datetime import datetime, timedelta, timezone

import pytest
from dotenv import load_dotenv
from fastapi.testclient import TestClient

from server.trinity_api.config import Settings
from server.trinity_api.database import DatabaseManager, db_manager
from server.trinity_api.models.exercise import ExerciseRecord
from server.trinity_api.models.sleep import SleepRecord
from server.trinity_api.models.wellness import MentalHealthLog

# Load environment variables
load_dotenv()

NOW = datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)
USER_ID = "user-123"


# ============================================================================
# Record factories
# ============================================================================


def make_sleep(quality=7, hours=7.5, days_ago=0, now=NOW) -> SleepRecord:
    """Build a SleepRecord created ``days_ago`` days before ``now``."""
    created = now - timedelta(days=days_ago)
    return SleepRecord(
        id=f"sleep-{days_ago}-{quality}-{hours}",
        user_id=USER_ID,
        sleep_duration_hours=hours,
        sleep_quality=quality,
        created_at=created,
    )


def make_exercise(minutes=30, calories=200, days_ago=0, now=NOW) -> ExerciseRecord:
    completed = now - timedelta(days=days_ago) if days_ago is not None else None
    return ExerciseRecord(
        id=f"ex-{days_ago}-{minutes}",
        user_id=USER_ID,
        exercise_name="Run",
        exercise_type="cardio",
        duration_minutes=minutes,
        calories_burned=calories,
        intensity="moderate",
        completed_at=completed,
        created_at=now,
    )


def make_mood(mood=7, stress=4, anxiety=3, energy=6, days_ago=0, now=NOW) -> MentalHealthLog:
    logged = now - timedelta(days=days_ago)
    return MentalHealthLog(
        id=f"mood-{days_ago}-{mood}",
        user_id=USER_ID,
        mood_rating=mood,
        stress_level=stress,
        anxiety_level=anxiety,
        energy_level=energy,
        logged_at=logged,
        created_at=logged,
    )


# ============================================================================
# Database and API fixtures
# ============================================================================


@pytest.fixture
def temp_db(tmp_path, monkeypatch) -> DatabaseManager:
    """
    Point the shared database manager at a fresh SQLite file.

    Repository functions default to the module-level ``db_manager``, so
    swapping its settings redirects every query made during the test.
    """
    monkeypatch.setattr(db_manager, "settings", Settings(data_path=str(tmp_path)))
    db_manager.init_schema()
    return db_manager


@pytest.fixture
def client(temp_db):
    """TestClient for the API, backed by the temporary database."""
    from server.trinity_api.main import app

    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return {"X-User-Id": USER_ID}
