"""
API Tests

Exercises the HTTP surface end to end with FastAPI's TestClient against an
in-memory AppState.

Test Scenarios:
---------------
1. POST /api/events accepts single envelopes and batches; malformed are dropped
2. GET /api/profiles/{user_id} → 200 with profile, 404 when absent
3. GET /api/recommendations → list; 404 when nothing is left
4. GET /api/recommendations/next and POST /api/recommendations/feedback
5. GET /api/journeys/{content_id}/next → predicted next content ids

Run:
----
    pytest server/tests/test_api.py -v
"""

import pytest
from fastapi.testclient import TestClient

from server import AppState, ServerConfig, app
from server.state import set_state


def _journey(content_id, topics, previous=None, user_id="u1"):
    return {
        "topic": "content_journey",
        "userId": user_id,
        "contentId": content_id,
        "previousContentId": previous,
        "action": "completed",
        "timeInContentSeconds": 90,
        "topicTags": topics,
    }


class TestAPI:
    @pytest.fixture(autouse=True)
    def setup(self, sample_catalog):
        self.state = AppState(ServerConfig(bandit_seed=1))
        for item in sample_catalog:
            self.state.catalog.add_content(item)
        set_state(self.state)
        with TestClient(app) as client:
            self.client = client
            yield
        set_state(None)

    def test_root_and_health(self):
        root = self.client.get("/").json()
        assert root["catalog_size"] == 10
        assert root["data_source"] == "memory"
        health = self.client.get("/api/health").json()
        assert health["status"] == "healthy"
        assert health["profile_store"] == "InMemoryProfileStore"

    def test_single_event(self):
        response = self.client.post("/api/events", json=_journey("v1", ["math"]))
        assert response.status_code == 200
        assert response.json() == {"accepted": 1, "dropped": 0}

    def test_event_batch_counts_dropped(self):
        events = [
            _journey("v1", ["math"]),
            _journey("v2", ["algebra"], previous="v1"),
            {"topic": "content_journey"},
            {"topic": "page_view", "userId": "u1"},
        ]
        response = self.client.post("/api/events", json={"events": events})
        assert response.json() == {"accepted": 2, "dropped": 2}

    def test_profile_after_events(self):
        self.client.post("/api/events", json={"events": [
            _journey("v1", ["math"]),
            _journey("v2", ["algebra"], previous="v1"),
        ]})
        response = self.client.get("/api/profiles/u1")
        assert response.status_code == 200
        profile = response.json()
        assert profile["user_id"] == "u1"
        assert profile["total_content_consumed"] == 2
        assert set(profile["interests"]) == {"math", "algebra"}

    def test_missing_profile(self):
        response = self.client.get("/api/profiles/ghost")
        assert response.status_code == 404

    def test_journey_prediction(self):
        self.client.post("/api/events", json={"events": [
            _journey("v1", ["math"]),
            _journey("v2", ["algebra"], previous="v1"),
        ]})
        response = self.client.get("/api/journeys/v1/next")
        assert response.json() == {"content_id": "v1", "next_content_ids": ["v2"]}
        assert self.client.get("/api/journeys/zzz/next").json()["next_content_ids"] == []

    def test_recommendations(self):
        response = self.client.get("/api/recommendations", params={"user_id": "u1", "limit": 4})
        assert response.status_code == 200
        body = response.json()
        assert body["user_id"] == "u1"
        items = body["recommendations"]
        assert len(items) == 4
        assert all(0.0 <= i["score"] <= 1.0 for i in items)
        assert all(i["content"]["id"] == i["content_id"] for i in items)
        assert "d1" not in {i["content_id"] for i in items}

    @pytest.mark.parametrize("limit", [0, 51])
    def test_recommendations_limit_validated(self, limit):
        response = self.client.get("/api/recommendations", params={"user_id": "u1", "limit": limit})
        assert response.status_code == 422

    def test_recommendations_when_everything_seen(self):
        for item in self.state.catalog.get_published_content():
            self.state.catalog.record_interaction("u1", item.id, "viewed")
        response = self.client.get("/api/recommendations", params={"user_id": "u1"})
        assert response.status_code == 404
        assert response.json()["detail"] == "No content available for user: u1"
        assert self.client.get("/api/recommendations/next", params={"user_id": "u1"}).status_code == 404

    def test_next_and_feedback(self):
        card = self.client.get("/api/recommendations/next", params={"user_id": "u1"}).json()
        assert card["id"] != "d1"
        assert card["reason"]

        response = self.client.post("/api/recommendations/feedback", json={
            "user_id": "u1",
            "content_id": card["id"],
            "feedback": "clicked",
        })
        assert response.status_code == 200
        assert response.json()["status"] == "recorded"
        assert response.json()["recommendation_id"]
        assert not self.state.recommendation_service.is_cached("u1")

    def test_feedback_rejects_unknown_type(self):
        response = self.client.post("/api/recommendations/feedback", json={
            "user_id": "u1",
            "content_id": "v1",
            "feedback": "loved",
        })
        assert response.status_code == 422
