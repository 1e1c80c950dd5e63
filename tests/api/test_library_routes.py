"""Tests for the favorites, personal records and settings routes."""

from fitcoach.api.deps import get_engine
from fitcoach.main import app


FAVORITE = {
    "id": "yoga_1",
    "videoId": "GLy2rYHwUqY",
    "title": "Morning Yoga Flow - 20 Minutes",
    "channelTitle": "Yoga with Adriene",
    "duration": "21:30",
}


class TestFavoriteRoutes:
    """Tests for /favorites."""

    def test_add_list_remove(self, client):
        added = client.post("/api/v1/library/favorites", json=FAVORITE)
        assert added.status_code == 201
        assert added.json() == {"added": True}

        favorites = client.get("/api/v1/library/favorites").json()
        assert [f["id"] for f in favorites] == ["yoga_1"]
        assert favorites[0]["addedAt"] is not None

        assert client.delete("/api/v1/library/favorites/yoga_1").status_code == 204
        assert client.get("/api/v1/library/favorites").json() == []

    def test_duplicate_not_added(self, client):
        client.post("/api/v1/library/favorites", json=FAVORITE)

        response = client.post("/api/v1/library/favorites", json=FAVORITE)

        assert response.json() == {"added": False}

    def test_remove_missing_returns_404(self, client):
        response = client.delete("/api/v1/library/favorites/nope")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    def test_remove_write_failure_returns_500(self, client, make_engine, write_failing_store):
        engine = make_engine(backing_store=write_failing_store)
        app.dependency_overrides[get_engine] = lambda: engine
        write_failing_store.fail_writes = False
        client.post("/api/v1/library/favorites", json=FAVORITE)
        write_failing_store.fail_writes = True

        response = client.delete("/api/v1/library/favorites/yoga_1")

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "STORAGE_WRITE_FAILED"


class TestRecordRoutes:
    """Tests for /records."""

    def test_only_improvements_replace(self, client):
        record = {"exerciseId": "plank", "exerciseName": "Plank", "bestTime": 60}

        first = client.put("/api/v1/library/records", json=record).json()
        worse = client.put("/api/v1/library/records", json={**record, "bestTime": 75}).json()

        assert first["updated"] is True
        assert worse["updated"] is False
        assert worse["record"]["bestTime"] == 60

        records = client.get("/api/v1/library/records").json()
        assert list(records) == ["plank"]


class TestSettingsRoutes:
    """Tests for /settings."""

    def test_defaults(self, client):
        data = client.get("/api/v1/library/settings").json()

        assert data["darkMode"] is False
        assert data["theme"] == "light"

    def test_update_merges(self, client):
        client.put("/api/v1/library/settings", json={"darkMode": True})

        data = client.put("/api/v1/library/settings", json={"theme": "dark"}).json()

        assert data["darkMode"] is True
        assert data["theme"] == "dark"
