"""SQLite connection manager and schema for TrinityOS wellness data."""
import os
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Generator
import logging

from .config import get_settings

log = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"

SCHEMA = """
CREATE TABLE IF NOT EXISTS sleep_records (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    bedtime TEXT,
    wake_time TEXT,
    sleep_duration_hours REAL,
    sleep_quality INTEGER,
    notes TEXT,
    created_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_sleep_user_created ON sleep_records (user_id, created_at);

CREATE TABLE IF NOT EXISTS exercise_records (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    exercise_name TEXT NOT NULL,
    exercise_type TEXT,
    duration_minutes INTEGER,
    calories_burned INTEGER,
    intensity TEXT,
    notes TEXT,
    completed_at TEXT,
    created_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_exercise_user_completed ON exercise_records (user_id, completed_at);

CREATE TABLE IF NOT EXISTS step_records (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    date TEXT NOT NULL,
    steps INTEGER NOT NULL,
    created_at TEXT NOT NULL,
    UNIQUE (user_id, date)
);

CREATE TABLE IF NOT EXISTS mental_health_logs (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    mood_rating INTEGER,
    stress_level INTEGER,
    anxiety_level INTEGER,
    energy_level INTEGER,
    sleep_quality_rating INTEGER,
    thoughts TEXT,
    activities TEXT,
    triggers TEXT,
    coping_strategies TEXT,
    notes TEXT,
    logged_at TEXT,
    created_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_mental_user_logged ON mental_health_logs (user_id, logged_at);

CREATE TABLE IF NOT EXISTS food_entries (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    food_name TEXT NOT NULL,
    meal_type TEXT,
    servings REAL,
    calories_per_serving INTEGER,
    total_calories INTEGER,
    protein_g REAL,
    carbs_g REAL,
    fat_g REAL,
    fiber_g REAL,
    sugar_g REAL,
    sodium_mg INTEGER,
    consumed_at TEXT,
    created_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_food_user_consumed ON food_entries (user_id, consumed_at);

CREATE TABLE IF NOT EXISTS menstrual_cycles (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    cycle_start_date TEXT NOT NULL,
    cycle_end_date TEXT,
    cycle_length_days INTEGER,
    flow_intensity TEXT,
    pain_level INTEGER,
    mood_rating INTEGER,
    symptoms TEXT,
    notes TEXT,
    created_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_cycles_user_start ON menstrual_cycles (user_id, cycle_start_date);

CREATE TABLE IF NOT EXISTS health_profiles (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL UNIQUE,
    height_cm REAL,
    weight_kg REAL,
    target_weight_kg REAL,
    daily_caloric_target INTEGER,
    gender TEXT,
    activity_level TEXT,
    goal_type TEXT,
    birth_date TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
"""


def format_timestamp(value: datetime) -> str:
    """Render a datetime as the fixed-width UTC string stored in every table.

    Fixed width keeps lexicographic order equal to chronological order, so
    range filters can compare the TEXT columns directly.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DatabaseManager:
    """
    SQLite database manager for per-user wellness records.
    Each unit of work gets its own short-lived connection so that
    concurrent reads issued from worker threads never share state.
    """

    def __init__(self, settings=None):
        self.settings = settings or get_settings()

    @contextmanager
    def get_conn(self) -> Generator[sqlite3.Connection, None, None]:
        """Get a connection that commits on success and rolls back on error."""
        yield from self._connect(self.settings.db_path)

    def init_schema(self) -> None:
        """Create tables and indexes if they do not exist yet."""
        os.makedirs(os.path.dirname(self.settings.db_path) or ".", exist_ok=True)
        with self.get_conn() as conn:
            conn.executescript(SCHEMA)
        log.info(f"[DB] Schema ready at {self.settings.db_path}")

    def _connect(self, db_path: str) -> Generator[sqlite3.Connection, None, None]:
        conn = sqlite3.connect(db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row  # Enable dict-like row access
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()


# Singleton instance
db_manager = DatabaseManager()
