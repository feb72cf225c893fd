"""User-scoped reads and writes against the wellness tables.

Every query filters by ``user_id``. Reads return newest first, ordered by
each table's timestamp column, optionally bounded by a time range and a
record limit. Writes are plain inserts, except steps and the health profile,
which are upserted on their natural key.
"""
import json
import logging
import uuid
from datetime import date, datetime
from typing import Optional

from .database import DatabaseManager, db_manager, format_timestamp, utc_now
from .models.cycle import CycleLogRequest, MenstrualCycle
from .models.diet import FoodEntry, FoodEntryCreate
from .models.exercise import ExerciseLogRequest, ExerciseRecord, StepRecord
from .models.profile import HealthProfile, HealthProfileUpdate
from .models.sleep import SleepRecord
from .models.wellness import MentalHealthLog, MentalHealthLogRequest
from .services.nutrition import calculate_bmi

log = logging.getLogger(__name__)

PROFILE_COLUMNS = (
    "height_cm",
    "weight_kg",
    "target_weight_kg",
    "daily_caloric_target",
    "gender",
    "activity_level",
    "goal_type",
    "birth_date",
)


def _new_id() -> str:
    return uuid.uuid4().hex


def _row_to_sleep(row) -> SleepRecord:
    """Convert SQLite row to SleepRecord model."""
    return SleepRecord.model_validate(dict(row))


def _row_to_exercise(row) -> ExerciseRecord:
    """Convert SQLite row to ExerciseRecord model."""
    return ExerciseRecord.model_validate(dict(row))


def _row_to_steps(row) -> StepRecord:
    return StepRecord.model_validate(dict(row))


def _row_to_mental_health(row) -> MentalHealthLog:
    """Convert SQLite row to MentalHealthLog, decoding the JSON list columns."""
    data = dict(row)
    for column in ("activities", "triggers", "coping_strategies"):
        data[column] = json.loads(data[column]) if data[column] else None
    return MentalHealthLog.model_validate(data)


def _row_to_cycle(row) -> MenstrualCycle:
    data = dict(row)
    data["symptoms"] = json.loads(data["symptoms"]) if data["symptoms"] else None
    return MenstrualCycle.model_validate(data)


def _row_to_food(row) -> FoodEntry:
    return FoodEntry.model_validate(dict(row))


def _row_to_profile(row) -> HealthProfile:
    data = dict(row)
    return HealthProfile(
        user_id=data["user_id"],
        **{column: data[column] for column in PROFILE_COLUMNS},
        bmi=calculate_bmi(data["height_cm"], data["weight_kg"]),
        updated_at=data["updated_at"],
    )


def _encode_list(values: list[str]) -> Optional[str]:
    return json.dumps(values) if values else None


# ---------------------------------------------------------------------------
# Sleep
# ---------------------------------------------------------------------------


def insert_sleep_record(
    user_id: str,
    bedtime: datetime,
    wake_time: datetime,
    duration_hours: float,
    quality: int,
    notes: Optional[str] = None,
    created_at: Optional[datetime] = None,
    db: DatabaseManager = db_manager,
) -> SleepRecord:
    record_id = _new_id()
    with db.get_conn() as conn:
        conn.execute(
            """
            INSERT INTO sleep_records
                (id, user_id, bedtime, wake_time, sleep_duration_hours, sleep_quality, notes, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                record_id,
                user_id,
                format_timestamp(bedtime),
                format_timestamp(wake_time),
                duration_hours,
                quality,
                notes,
                format_timestamp(created_at or utc_now()),
            ),
        )
        row = conn.execute("SELECT * FROM sleep_records WHERE id = ?", (record_id,)).fetchone()
    return _row_to_sleep(row)


def recent_sleep_records(
    user_id: str,
    limit: Optional[int] = 7,
    before: Optional[datetime] = None,
    min_hours: Optional[float] = None,
    db: DatabaseManager = db_manager,
) -> list[SleepRecord]:
    """Newest-first sleep records, optionally only those created strictly before ``before``."""
    sql = "SELECT * FROM sleep_records WHERE user_id = ?"
    params: list = [user_id]
    if before is not None:
        sql += " AND created_at < ?"
        params.append(format_timestamp(before))
    if min_hours is not None:
        sql += " AND sleep_duration_hours >= ?"
        params.append(min_hours)
    sql += " ORDER BY created_at DESC"
    if limit is not None:
        sql += " LIMIT ?"
        params.append(limit)

    with db.get_conn() as conn:
        rows = conn.execute(sql, params).fetchall()
    return [_row_to_sleep(row) for row in rows]


# ---------------------------------------------------------------------------
# Exercise and steps
# ---------------------------------------------------------------------------


def insert_exercise_record(
    user_id: str,
    request: ExerciseLogRequest,
    completed_at: Optional[datetime] = None,
    db: DatabaseManager = db_manager,
) -> ExerciseRecord:
    record_id = _new_id()
    now = utc_now()
    with db.get_conn() as conn:
        conn.execute(
            """
            INSERT INTO exercise_records
                (id, user_id, exercise_name, exercise_type, duration_minutes, calories_burned,
                 intensity, notes, completed_at, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                record_id,
                user_id,
                request.exercise_name,
                request.exercise_type,
                request.duration_minutes,
                request.calories_burned,
                request.intensity,
                request.notes,
                format_timestamp(completed_at or now),
                format_timestamp(now),
            ),
        )
        row = conn.execute("SELECT * FROM exercise_records WHERE id = ?", (record_id,)).fetchone()
    return _row_to_exercise(row)


def exercise_records_since(
    user_id: str,
    since: datetime,
    db: DatabaseManager = db_manager,
) -> list[ExerciseRecord]:
    """Workouts completed at or after ``since``, newest first."""
    with db.get_conn() as conn:
        rows = conn.execute(
            """
            SELECT * FROM exercise_records
            WHERE user_id = ? AND completed_at >= ?
            ORDER BY completed_at DESC
            """,
            (user_id, format_timestamp(since)),
        ).fetchall()
    return [_row_to_exercise(row) for row in rows]


def upsert_steps(
    user_id: str,
    day: date,
    steps: int,
    db: DatabaseManager = db_manager,
) -> StepRecord:
    """Set the step count for ``day``, replacing any earlier value for that day."""
    with db.get_conn() as conn:
        conn.execute(
            """
            INSERT INTO step_records (id, user_id, date, steps, created_at)
            VALUES (?, ?, ?, ?, ?)
            ON CONFLICT (user_id, date) DO UPDATE SET steps = excluded.steps
            """,
            (_new_id(), user_id, day.isoformat(), steps, format_timestamp(utc_now())),
        )
        row = conn.execute(
            "SELECT * FROM step_records WHERE user_id = ? AND date = ?",
            (user_id, day.isoformat()),
        ).fetchone()
    return _row_to_steps(row)


def get_steps(user_id: str, day: date, db: DatabaseManager = db_manager) -> Optional[StepRecord]:
    with db.get_conn() as conn:
        row = conn.execute(
            "SELECT * FROM step_records WHERE user_id = ? AND date = ?",
            (user_id, day.isoformat()),
        ).fetchone()
    return _row_to_steps(row) if row else None


# ---------------------------------------------------------------------------
# Mental health
# ---------------------------------------------------------------------------


def insert_mental_health_log(
    user_id: str,
    request: MentalHealthLogRequest,
    logged_at: Optional[datetime] = None,
    db: DatabaseManager = db_manager,
) -> MentalHealthLog:
    log_id = _new_id()
    now = utc_now()
    with db.get_conn() as conn:
        conn.execute(
            """
            INSERT INTO mental_health_logs
                (id, user_id, mood_rating, stress_level, anxiety_level, energy_level,
                 sleep_quality_rating, thoughts, activities, triggers, coping_strategies,
                 notes, logged_at, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                log_id,
                user_id,
                request.mood_rating,
                request.stress_level,
                request.anxiety_level,
                request.energy_level,
                request.sleep_quality_rating,
                request.thoughts or None,
                _encode_list(request.activities),
                _encode_list(request.triggers),
                _encode_list(request.coping_strategies),
                request.notes or None,
                format_timestamp(logged_at or now),
                format_timestamp(now),
            ),
        )
        row = conn.execute("SELECT * FROM mental_health_logs WHERE id = ?", (log_id,)).fetchone()
    return _row_to_mental_health(row)


def recent_mental_health_logs(
    user_id: str,
    limit: int = 10,
    db: DatabaseManager = db_manager,
) -> list[MentalHealthLog]:
    with db.get_conn() as conn:
        rows = conn.execute(
            """
            SELECT * FROM mental_health_logs
            WHERE user_id = ?
            ORDER BY logged_at DESC
            LIMIT ?
            """,
            (user_id, limit),
        ).fetchall()
    return [_row_to_mental_health(row) for row in rows]


# ---------------------------------------------------------------------------
# Food entries
# ---------------------------------------------------------------------------


def insert_food_entries(
    user_id: str,
    entries: list[FoodEntryCreate],
    db: DatabaseManager = db_manager,
) -> list[FoodEntry]:
    """Insert several food entries in one transaction, e.g. every ingredient of a meal."""
    now = utc_now()
    ids = [_new_id() for _ in entries]
    with db.get_conn() as conn:
        conn.executemany(
            """
            INSERT INTO food_entries
                (id, user_id, food_name, meal_type, servings, calories_per_serving, total_calories,
                 protein_g, carbs_g, fat_g, fiber_g, sugar_g, sodium_mg, consumed_at, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            [
                (
                    entry_id,
                    user_id,
                    entry.food_name,
                    entry.meal_type,
                    entry.servings,
                    entry.calories_per_serving,
                    entry.total_calories,
                    entry.protein_g,
                    entry.carbs_g,
                    entry.fat_g,
                    entry.fiber_g,
                    entry.sugar_g,
                    entry.sodium_mg,
                    format_timestamp(entry.consumed_at or now),
                    format_timestamp(now),
                )
                for entry_id, entry in zip(ids, entries)
            ],
        )
        rows = [
            conn.execute("SELECT * FROM food_entries WHERE id = ?", (entry_id,)).fetchone()
            for entry_id in ids
        ]
    return [_row_to_food(row) for row in rows]


def insert_food_entry(
    user_id: str,
    entry: FoodEntryCreate,
    db: DatabaseManager = db_manager,
) -> FoodEntry:
    return insert_food_entries(user_id, [entry], db=db)[0]


def food_entries_between(
    user_id: str,
    start: datetime,
    end: datetime,
    db: DatabaseManager = db_manager,
) -> list[FoodEntry]:
    """Food entries consumed in ``[start, end)``, newest first."""
    with db.get_conn() as conn:
        rows = conn.execute(
            """
            SELECT * FROM food_entries
            WHERE user_id = ? AND consumed_at >= ? AND consumed_at < ?
            ORDER BY consumed_at DESC
            """,
            (user_id, format_timestamp(start), format_timestamp(end)),
        ).fetchall()
    return [_row_to_food(row) for row in rows]


# ---------------------------------------------------------------------------
# Menstrual cycles
# ---------------------------------------------------------------------------


def insert_cycle(
    user_id: str,
    request: CycleLogRequest,
    cycle_length: Optional[int],
    db: DatabaseManager = db_manager,
) -> MenstrualCycle:
    cycle_id = _new_id()
    with db.get_conn() as conn:
        conn.execute(
            """
            INSERT INTO menstrual_cycles
                (id, user_id, cycle_start_date, cycle_end_date, cycle_length_days, flow_intensity,
                 pain_level, mood_rating, symptoms, notes, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                cycle_id,
                user_id,
                request.cycle_start_date.isoformat(),
                request.cycle_end_date.isoformat() if request.cycle_end_date else None,
                cycle_length,
                request.flow_intensity,
                request.pain_level,
                request.mood_rating,
                _encode_list(request.symptoms),
                request.notes or None,
                format_timestamp(utc_now()),
            ),
        )
        row = conn.execute("SELECT * FROM menstrual_cycles WHERE id = ?", (cycle_id,)).fetchone()
    return _row_to_cycle(row)


def recent_cycles(
    user_id: str,
    limit: int = 10,
    db: DatabaseManager = db_manager,
) -> list[MenstrualCycle]:
    """Most recent cycles by start date."""
    with db.get_conn() as conn:
        rows = conn.execute(
            """
            SELECT * FROM menstrual_cycles
            WHERE user_id = ?
            ORDER BY cycle_start_date DESC
            LIMIT ?
            """,
            (user_id, limit),
        ).fetchall()
    return [_row_to_cycle(row) for row in rows]


# ---------------------------------------------------------------------------
# Health profile
# ---------------------------------------------------------------------------


def get_health_profile(user_id: str, db: DatabaseManager = db_manager) -> Optional[HealthProfile]:
    with db.get_conn() as conn:
        row = conn.execute("SELECT * FROM health_profiles WHERE user_id = ?", (user_id,)).fetchone()
    return _row_to_profile(row) if row else None


def upsert_health_profile(
    user_id: str,
    update: HealthProfileUpdate,
    db: DatabaseManager = db_manager,
) -> HealthProfile:
    """Merge the provided fields into the user's profile, creating it if needed."""
    changes = update.model_dump(exclude_unset=True)
    now = format_timestamp(utc_now())

    with db.get_conn() as conn:
        existing = conn.execute("SELECT * FROM health_profiles WHERE user_id = ?", (user_id,)).fetchone()
        values = {column: (existing[column] if existing else None) for column in PROFILE_COLUMNS}
        values.update(changes)

        columns = ", ".join(PROFILE_COLUMNS)
        placeholders = ", ".join("?" for _ in PROFILE_COLUMNS)
        assignments = ", ".join(f"{column} = excluded.{column}" for column in PROFILE_COLUMNS)
        conn.execute(
            f"""
            INSERT INTO health_profiles (id, user_id, {columns}, created_at, updated_at)
            VALUES (?, ?, {placeholders}, ?, ?)
            ON CONFLICT (user_id) DO UPDATE SET {assignments}, updated_at = excluded.updated_at
            """,
            (_new_id(), user_id, *[values[column] for column in PROFILE_COLUMNS], now, now),
        )
        row = conn.execute("SELECT * FROM health_profiles WHERE user_id = ?", (user_id,)).fetchone()

    log.info(f"[DB] Profile updated for {user_id}: {sorted(changes)}")
    return _row_to_profile(row)
