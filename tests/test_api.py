"""
Integration tests for the TrinityOS API routes.

Runs the FastAPI app in-process with a temporary SQLite database. The USDA
client is replaced through ``app.dependency_overrides`` with one backed by
``httpx.MockTransport``.

Usage:
    pytest tests/test_api.py -v
"""
import sqlite3
from datetime import date, timedelta
from unittest.mock import patch

import httpx
import pytest

from conftest import USER_ID
from server.trinity_api.database import utc_now
from server.trinity_api.main import app
from server.trinity_api.repository import insert_sleep_record
from server.trinity_api.services.usda import USDAClient, get_usda_client

APPLE = {
    "fdcId": 171688,
    "description": "Apples, raw, with skin",
    "dataType": "SR Legacy",
    "nutrients": {"calories": 52, "protein": 0.26, "carbs": 13.81, "fiber": 2.4, "sodium": 1},
}

USDA_PAYLOAD = {
    "totalHits": 1,
    "foods": [
        {
            "fdcId": 171688,
            "description": "Apples, raw, with skin",
            "dataType": "SR Legacy",
            "foodNutrients": [
                {"nutrientId": 1008, "value": 52},
                {"nutrientId": 1003, "value": 0.26},
                {"nutrientId": 1005, "value": 13.81},
                {"nutrientId": 1092, "value": 107},
                {"nutrientId": 1051, "value": 85.56},
            ],
        }
    ],
}


def use_usda_handler(handler):
    app.dependency_overrides[get_usda_client] = lambda: USDAClient(
        api_key="TEST_KEY",
        base_url="https://fdc.test/v1",
        transport=httpx.MockTransport(handler),
    )


def log_sleep(client, headers, quality=8, bedtime="23:00", wake_time="07:00"):
    return client.post(
        "/api/sleep",
        json={"date": "2026-10-17", "bedtime": bedtime, "wakeTime": wake_time, "sleepQuality": quality},
        headers=headers,
    )


class TestHealthAndIdentity:
    """Test health check and user identity."""

    def test_health_check(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "service": "trinity-api"}

    @pytest.mark.parametrize(
        "path",
        ["/api/trinity/score", "/api/sleep", "/api/exercise/summary", "/api/mental-health", "/api/diet/today"],
    )
    def test_missing_user_is_unauthorized(self, client, path):
        assert client.get(path).status_code == 401

    def test_blank_user_is_unauthorized(self, client):
        response = client.get("/api/trinity/score", headers={"X-User-Id": "  "})
        assert response.status_code == 401


class TestTrinityScore:
    """Test the composed score endpoint."""

    def test_new_user_scores_zero(self, client, auth_headers):
        response = client.get("/api/trinity/score", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["healthScore"] == 0
        assert data["wealthScore"] == 0
        assert data["relationsScore"] == 0
        assert data["overall"] == 0
        assert data["trend"] == "0%"

    def test_score_from_logged_data(self, client, auth_headers):
        assert log_sleep(client, auth_headers, quality=8).status_code == 201
        client.post(
            "/api/exercise",
            json={
                "exerciseName": "Cycling",
                "exerciseType": "cardio",
                "durationMinutes": 100,
                "caloriesBurned": 600,
                "intensity": "moderate",
            },
            headers=auth_headers,
        )
        client.post("/api/mental-health", json={"moodRating": 5, "stressLevel": 4}, headers=auth_headers)

        data = client.get("/api/trinity/score", headers=auth_headers).json()

        # sleep 8*5+25, exercise 100/5, mood 5*3-4
        assert data["healthScore"] == 96
        assert data["overall"] == 32
        assert data["trend"] == "0%"
        assert [p["pillar"] for p in data["pillars"]] == ["health", "wealth", "relations"]

    def test_scores_are_per_user(self, client, auth_headers):
        log_sleep(client, auth_headers, quality=8)

        data = client.get("/api/trinity/score", headers={"X-User-Id": "someone-else"}).json()
        assert data["healthScore"] == 0

    def test_trend_against_sleep_older_than_a_week(self, client, auth_headers):
        """Records created more than seven days ago form the comparison window."""
        insert_sleep_record(
            USER_ID,
            bedtime=utc_now() - timedelta(days=10, hours=8),
            wake_time=utc_now() - timedelta(days=10),
            duration_hours=8,
            quality=4,
            created_at=utc_now() - timedelta(days=10),
        )
        log_sleep(client, auth_headers, quality=8)

        data = client.get("/api/trinity/score", headers=auth_headers).json()

        # current window holds both nights (avg 6), previous only the old one (4)
        assert data["trend"] == "+50%"


class TestSleepRoutes:
    """Test sleep logging and summary."""

    def test_log_sleep_across_midnight(self, client, auth_headers):
        response = log_sleep(client, auth_headers, bedtime="22:30", wake_time="06:45")

        assert response.status_code == 201
        record = response.json()
        assert record["user_id"] == USER_ID
        assert record["sleep_duration_hours"] == 8.25
        assert record["bedtime"].startswith("2026-10-16T22:30")
        assert record["wake_time"].startswith("2026-10-17T06:45")

    def test_invalid_quality(self, client, auth_headers):
        assert log_sleep(client, auth_headers, quality=11).status_code == 422

    def test_invalid_clock_time(self, client, auth_headers):
        assert log_sleep(client, auth_headers, bedtime="25:00").status_code == 422

    def test_summary(self, client, auth_headers):
        log_sleep(client, auth_headers, quality=8)
        log_sleep(client, auth_headers, quality=7, bedtime="01:00", wake_time="06:00")

        data = client.get("/api/sleep/summary", headers=auth_headers).json()

        assert data["avgQuality"] == 7.5
        assert data["avgDuration"] == 6.5
        assert data["recordCount"] == 2
        assert data["streakDays"] == 1

    def test_list(self, client, auth_headers):
        log_sleep(client, auth_headers)
        log_sleep(client, auth_headers)

        response = client.get("/api/sleep", params={"limit": 1}, headers=auth_headers)
        assert len(response.json()) == 1

    def test_suggested_bedtime(self, client):
        data = client.get("/api/sleep/suggested-bedtime", params={"wake_time": "06:30"}).json()
        assert data == {"wakeTime": "06:30", "suggestedBedtime": "22:30"}


class TestExerciseRoutes:
    """Test workouts and steps."""

    def test_steps_upsert(self, client, auth_headers):
        client.put("/api/exercise/steps", json={"steps": 4000}, headers=auth_headers)
        response = client.put("/api/exercise/steps", json={"steps": 12000}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["steps"] == 12000

        summary = client.get("/api/exercise/summary", headers=auth_headers).json()
        assert summary["todaySteps"] == 12000
        assert summary["stepProgress"] == 100

    def test_negative_steps(self, client, auth_headers):
        response = client.put("/api/exercise/steps", json={"steps": -5}, headers=auth_headers)
        assert response.status_code == 422

    def test_weekly_summary(self, client, auth_headers):
        for minutes in (30, 45):
            client.post(
                "/api/exercise",
                json={
                    "exerciseName": "Run",
                    "exerciseType": "cardio",
                    "durationMinutes": minutes,
                    "caloriesBurned": 300,
                    "intensity": "high",
                },
                headers=auth_headers,
            )

        summary = client.get("/api/exercise/summary", headers=auth_headers).json()

        assert summary["totalMinutes"] == 75
        assert summary["totalCalories"] == 600
        assert summary["workoutCount"] == 2
        assert summary["weeklyGoalMinutes"] == 150
        assert summary["weeklyProgress"] == 50
        assert len(client.get("/api/exercise/week", headers=auth_headers).json()) == 2

    def test_invalid_intensity(self, client, auth_headers):
        response = client.post(
            "/api/exercise",
            json={"exerciseName": "Run", "exerciseType": "cardio", "durationMinutes": 10, "intensity": "extreme"},
            headers=auth_headers,
        )
        assert response.status_code == 422


class TestMentalHealthRoutes:
    """Test check-ins and mood summary."""

    def test_log_and_list(self, client, auth_headers):
        response = client.post(
            "/api/mental-health",
            json={"moodRating": 8, "activities": ["walk"], "copingStrategies": ["journaling"]},
            headers=auth_headers,
        )

        assert response.status_code == 201
        logs = client.get("/api/mental-health", headers=auth_headers).json()
        assert len(logs) == 1
        assert logs[0]["activities"] == ["walk"]
        assert logs[0]["stress_level"] == 5

    def test_summary_empty(self, client, auth_headers):
        data = client.get("/api/mental-health/summary", headers=auth_headers).json()

        assert data["avgMood"] is None
        assert data["logCount"] == 0

    def test_out_of_range_rating(self, client, auth_headers):
        response = client.post("/api/mental-health", json={"moodRating": 0}, headers=auth_headers)
        assert response.status_code == 422


class TestDietRoutes:
    """Test food logging and daily nutrition."""

    def test_log_searched_food(self, client, auth_headers):
        response = client.post(
            "/api/diet/foods",
            json={"food": APPLE, "servings": 2, "mealType": "snack"},
            headers=auth_headers,
        )

        assert response.status_code == 201
        entry = response.json()
        assert entry["total_calories"] == 104
        assert entry["carbs_g"] == 27.6
        assert entry["sodium_mg"] == 2

    def test_log_meal(self, client, auth_headers):
        response = client.post(
            "/api/diet/meals",
            json={
                "name": "Fruit bowl",
                "mealType": "breakfast",
                "ingredients": [{"food": APPLE, "amount": 2}],
            },
            headers=auth_headers,
        )

        assert response.status_code == 201
        data = response.json()
        assert data["entries"][0]["food_name"] == "Fruit bowl - Apples, raw, with skin"
        assert data["totals"]["calories"] == 104

    def test_meal_requires_ingredients(self, client, auth_headers):
        response = client.post(
            "/api/diet/meals",
            json={"name": "Empty", "mealType": "lunch", "ingredients": []},
            headers=auth_headers,
        )
        assert response.status_code == 422

    def test_today(self, client, auth_headers):
        client.post("/api/diet/foods", json={"food": APPLE, "servings": 2, "mealType": "snack"}, headers=auth_headers)
        client.post(
            "/api/diet/entries",
            json={"foodName": "Oatmeal", "mealType": "breakfast", "totalCalories": 300, "proteinG": 10},
            headers=auth_headers,
        )

        data = client.get("/api/diet/today", headers=auth_headers).json()

        assert data["totals"]["calories"] == 404
        assert data["targets"]["calories"] == 2000
        assert data["progress"]["calories"] == pytest.approx(20.2)
        assert set(data["meals"]) == {"snack", "breakfast"}
        assert data["calorieTarget"] is None

    def test_today_uses_profile_target(self, client, auth_headers):
        client.put("/api/profile/health", json={"dailyCaloricTarget": 1040}, headers=auth_headers)
        client.post("/api/diet/foods", json={"food": APPLE, "servings": 2, "mealType": "snack"}, headers=auth_headers)

        data = client.get("/api/diet/today", headers=auth_headers).json()

        assert data["calorieTarget"] == 1040
        assert data["calorieProgress"] == pytest.approx(10.0)

    def test_negative_nutrient_rejected(self, client, auth_headers):
        food = {**APPLE, "nutrients": {"calories": 50, "fat": -0.2}}

        response = client.post(
            "/api/diet/foods",
            json={"food": food, "servings": 1, "mealType": "snack"},
            headers=auth_headers,
        )

        assert response.status_code == 422
        assert client.get("/api/diet/today", headers=auth_headers).json()["totals"]["calories"] == 0

    def test_negative_nutrient_in_meal_rejected(self, client, auth_headers):
        food = {**APPLE, "nutrients": {"calories": -1}}

        response = client.post(
            "/api/diet/meals",
            json={"name": "Bad", "mealType": "lunch", "ingredients": [{"food": food}]},
            headers=auth_headers,
        )
        assert response.status_code == 422


class TestProfileRoutes:
    """Test health profile endpoints."""

    def test_not_found(self, client, auth_headers):
        assert client.get("/api/profile/health", headers=auth_headers).status_code == 404

    def test_upsert_and_read(self, client, auth_headers):
        client.put("/api/profile/health", json={"heightCm": 180, "weightKg": 81}, headers=auth_headers)
        client.put("/api/profile/health", json={"goalType": "maintain"}, headers=auth_headers)

        data = client.get("/api/profile/health", headers=auth_headers).json()

        assert data["userId"] == USER_ID
        assert data["heightCm"] == 180
        assert data["goalType"] == "maintain"
        assert data["bmi"] == 25.0

    def test_invalid_height(self, client, auth_headers):
        response = client.put("/api/profile/health", json={"heightCm": -10}, headers=auth_headers)
        assert response.status_code == 422


class TestFoodSearch:
    """Test the USDA search proxy."""

    def test_empty_query(self, client):
        response = client.post("/api/nutrition/search-food", json={"query": ""})

        assert response.status_code == 400
        assert response.json() == {"error": "Query parameter is required"}

    def test_whitespace_query(self, client):
        assert client.post("/api/nutrition/search-food", json={"query": "   "}).status_code == 400

    def test_missing_query(self, client):
        assert client.post("/api/nutrition/search-food", json={}).status_code == 400

    def test_valid_query(self, client):
        use_usda_handler(lambda request: httpx.Response(200, json=USDA_PAYLOAD))

        response = client.post("/api/nutrition/search-food", json={"query": "apple", "pageSize": 5})

        assert response.status_code == 200
        data = response.json()
        assert data["totalHits"] == 1
        food = data["foods"][0]
        assert food["fdcId"] == 171688
        assert food["nutrients"] == {"calories": 52, "protein": 0.26, "carbs": 13.81, "potassium": 107}

    def test_upstream_failure(self, client):
        use_usda_handler(lambda request: httpx.Response(503, text="unavailable"))

        response = client.post("/api/nutrition/search-food", json={"query": "apple"})

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to search foods"}

    def test_invalid_page_size(self, client):
        response = client.post("/api/nutrition/search-food", json={"query": "apple", "pageSize": 0})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid pageSize"}

    def test_malformed_json(self, client):
        response = client.post(
            "/api/nutrition/search-food",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Request body must be valid JSON"}

    def test_non_object_body(self, client):
        response = client.post("/api/nutrition/search-food", json=["apple"])

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid body"}

    def test_empty_body(self, client):
        response = client.post("/api/nutrition/search-food")

        assert response.status_code == 400
        assert response.json() == {"error": "Query parameter is required"}


class TestStorageErrors:
    """Test storage failure mapping."""

    def test_storage_failure_is_503(self, client, auth_headers):
        with patch(
            "server.trinity_api.routes.sleep.recent_sleep_records",
            side_effect=sqlite3.OperationalError("database is locked"),
        ):
            response = client.get("/api/sleep", headers=auth_headers)

        assert response.status_code == 503
        assert "detail" in response.json()


class TestWomensHealthRoutes:
    """Test cycle logging and next-period prediction."""

    def log_cycle(self, client, headers, start, end=None, **extra):
        body = {"cycleStartDate": start, **extra}
        if end:
            body["cycleEndDate"] = end
        return client.post("/api/womens-health/cycles", json=body, headers=headers)

    def test_log_cycle_derives_length(self, client, auth_headers):
        response = self.log_cycle(
            client, auth_headers, "2026-09-01", "2026-09-06",
            flowIntensity="normal", painLevel=4, symptoms=["Cramps", "Fatigue"],
        )

        assert response.status_code == 201
        cycle = response.json()
        assert cycle["cycle_length_days"] == 5
        assert cycle["symptoms"] == ["Cramps", "Fatigue"]
        assert cycle["mood_rating"] == 5

    def test_open_cycle_has_no_length(self, client, auth_headers):
        cycle = self.log_cycle(client, auth_headers, "2026-10-10").json()
        assert cycle["cycle_length_days"] is None

    def test_end_before_start(self, client, auth_headers):
        response = self.log_cycle(client, auth_headers, "2026-09-06", "2026-09-01")
        assert response.status_code == 422

    def test_invalid_flow_intensity(self, client, auth_headers):
        response = self.log_cycle(client, auth_headers, "2026-09-01", flowIntensity="extreme")
        assert response.status_code == 422

    def test_list_newest_start_first(self, client, auth_headers):
        for start in ("2026-07-01", "2026-09-01", "2026-08-01"):
            self.log_cycle(client, auth_headers, start)

        cycles = client.get("/api/womens-health/cycles", headers=auth_headers).json()
        assert [c["cycle_start_date"] for c in cycles] == ["2026-09-01", "2026-08-01", "2026-07-01"]

    def test_no_prediction_with_one_cycle(self, client, auth_headers):
        self.log_cycle(client, auth_headers, "2026-09-01", "2026-09-06")

        data = client.get("/api/womens-health/prediction", headers=auth_headers).json()

        assert data["predictedDate"] is None
        assert data["daysUntil"] is None
        assert data["cycleCount"] == 1

    def test_prediction(self, client, auth_headers):
        self.log_cycle(client, auth_headers, "2026-08-04", "2026-08-09")
        self.log_cycle(client, auth_headers, "2026-09-01", "2026-09-06")

        data = client.get("/api/womens-health/prediction", headers=auth_headers).json()

        assert data["predictedDate"] == "2026-09-06"
        assert data["daysUntil"] == (date(2026, 9, 6) - utc_now().date()).days
        assert data["avgCycleLength"] == 5
        assert data["cycleCount"] == 2

    def test_requires_user(self, client):
        assert client.get("/api/womens-health/cycles").status_code == 401
