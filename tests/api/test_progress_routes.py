"""
Tests for the progression API routes.

Tests cover:
- Stats and level progress
- Workout completion and history
- Weekly progress, daily challenge and achievements
- Reset with and without achievements
"""

WORKOUT = {
    "videoId": "hiit_1",
    "title": "Morning HIIT",
    "duration": "25:30",
    "calories": 150,
    "category": "HIIT",
}


class TestStatsEndpoints:
    """Tests for /stats."""

    def test_fresh_stats(self, client):
        response = client.get("/api/v1/progress/stats")

        assert response.status_code == 200
        data = response.json()
        assert data["stats"]["totalWorkouts"] == 0
        assert data["stats"]["level"] == 1
        assert data["levelProgress"]["xpForNext"] == 1000

    def test_reset_keeps_achievements(self, client):
        client.post("/api/v1/progress/workouts", json=WORKOUT)

        response = client.post("/api/v1/progress/stats/reset")

        assert response.status_code == 200
        assert response.json()["totalWorkouts"] == 0
        achievements = client.get("/api/v1/progress/achievements").json()
        assert achievements["unlocked"] == 1

    def test_reset_with_achievements(self, client):
        client.post("/api/v1/progress/workouts", json=WORKOUT)

        response = client.post(
            "/api/v1/progress/stats/reset", json={"includeAchievements": True}
        )

        assert response.status_code == 200
        achievements = client.get("/api/v1/progress/achievements").json()
        assert achievements["unlocked"] == 0


class TestWorkoutEndpoints:
    """Tests for /workouts and /history."""

    def test_complete_workout(self, client):
        response = client.post("/api/v1/progress/workouts", json=WORKOUT)

        assert response.status_code == 201
        data = response.json()
        assert data["stats"]["totalWorkouts"] == 1
        assert data["stats"]["experience"] == 160
        assert data["entry"]["videoId"] == "hiit_1"
        assert data["challenge"]["type"] == "streak"
        assert [a["id"] for a in data["newAchievements"]] == ["first_workout"]

    def test_negative_calories_rejected(self, client):
        response = client.post(
            "/api/v1/progress/workouts", json={**WORKOUT, "calories": -5}
        )

        assert response.status_code == 422

    def test_history_newest_first(self, client, clock):
        client.post("/api/v1/progress/workouts", json={**WORKOUT, "title": "First"})
        clock.advance(hours=1)
        client.post("/api/v1/progress/workouts", json={**WORKOUT, "title": "Second"})

        response = client.get("/api/v1/progress/history")

        assert [h["title"] for h in response.json()] == ["Second", "First"]

    def test_history_limit(self, client):
        client.post("/api/v1/progress/workouts", json=WORKOUT)
        client.post("/api/v1/progress/workouts", json=WORKOUT)

        assert len(client.get("/api/v1/progress/history?limit=1").json()) == 1
        assert client.get("/api/v1/progress/history?limit=0").status_code == 422

    def test_weekly_progress(self, client):
        client.post("/api/v1/progress/workouts", json=WORKOUT)

        days = client.get("/api/v1/progress/weekly").json()

        assert [d["day"] for d in days] == ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
        monday = days[1]
        assert monday["workouts"] == 1
        assert monday["minutes"] == 25


class TestChallengeAndAchievements:
    """Tests for /challenge and /achievements."""

    def test_daily_challenge(self, client):
        response = client.get("/api/v1/progress/challenge")

        assert response.status_code == 200
        data = response.json()
        assert data["date"] == "2026-10-19"
        assert data["completed"] is False

    def test_achievement_listing(self, client):
        data = client.get("/api/v1/progress/achievements").json()

        assert data["total"] == 7
        assert data["unlocked"] == 0

    def test_recent_achievements(self, client):
        assert client.get("/api/v1/progress/achievements/recent").json() == []

        client.post("/api/v1/progress/workouts", json=WORKOUT)

        recent = client.get("/api/v1/progress/achievements/recent").json()
        assert [a["id"] for a in recent] == ["first_workout"]
