# =============================================================================
# tests/test_api.py - HTTP API Tests
# =============================================================================
# End-to-end tests through the FastAPI app with an in-memory Supabase:
# - Application submit / stats / check / me
# - Error payloads (duplicate, validation, datastore down, closed intake)
# - Landing content and health endpoints
# =============================================================================

from unittest.mock import patch
from uuid import uuid4

import pytest

from app.config import settings


# =============================================================================
# POST /applications
# =============================================================================

class TestSubmitEndpoint:
    """Test POST /api/v1/applications."""

    def test_submit_returns_created(self, client, application_payload):
        response = client.post("/api/v1/applications", json=application_payload)

        assert response.status_code == 201
        body = response.json()
        assert body["id"]
        assert body["status"] == "pending"
        assert "createdAt" in body

    def test_submit_with_token_attaches_user(self, client, fake_supabase, application_payload, make_token):
        user_id = str(uuid4())
        headers = {"Authorization": f"Bearer {make_token(user_id=user_id)}"}

        response = client.post("/api/v1/applications", json=application_payload, headers=headers)

        assert response.status_code == 201
        assert fake_supabase.tables["applications"][0]["user_id"] == user_id

    def test_submit_with_invalid_token_is_anonymous(self, client, fake_supabase, application_payload):
        headers = {"Authorization": "Bearer not-a-jwt"}

        response = client.post("/api/v1/applications", json=application_payload, headers=headers)

        assert response.status_code == 201
        assert fake_supabase.tables["applications"][0]["user_id"] is None

    def test_duplicate_submit_conflict(self, client, fake_supabase, application_payload):
        first = client.post("/api/v1/applications", json=application_payload)
        second = client.post("/api/v1/applications", json=application_payload)

        assert first.status_code == 201
        assert second.status_code == 409
        body = second.json()
        assert body["code"] == "DUPLICATE_SUBMISSION"
        assert body["detail"] == "You've already submitted an application with this email."
        assert len(fake_supabase.tables["applications"]) == 1

    def test_blank_field_rejected(self, client, fake_supabase, application_payload):
        application_payload["projectIdea"] = ""

        response = client.post("/api/v1/applications", json=application_payload)

        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION_ERROR"
        assert fake_supabase.tables["applications"] == []

    def test_datastore_down_returns_503(self, client, fake_supabase, application_payload):
        fake_supabase.fail_with = ConnectionError("connection refused")

        response = client.post("/api/v1/applications", json=application_payload)

        assert response.status_code == 503
        body = response.json()
        assert body["code"] == "DATASTORE_UNAVAILABLE"
        assert body["details"]["cause"] == "FETCH_APPLICATION_FAILED"

    def test_closed_intake_rejects(self, client, fake_supabase, application_payload):
        with patch.object(settings, "APPLICATIONS_OPEN", False):
            response = client.post("/api/v1/applications", json=application_payload)

        assert response.status_code == 403
        assert response.json()["code"] == "APPLICATIONS_CLOSED"
        assert fake_supabase.tables["applications"] == []


# =============================================================================
# GET /applications/stats
# =============================================================================

class TestStatsEndpoint:
    """Test GET /api/v1/applications/stats."""

    def test_stats(self, client, fake_supabase):
        fake_supabase.seed(status="pending")
        fake_supabase.seed(status="pending")
        fake_supabase.seed(status="accepted")

        response = client.get("/api/v1/applications/stats")

        assert response.status_code == 200
        assert response.json() == {"total": 3, "pending": 2, "accepted": 1}

    def test_stats_increase_by_one_per_accepted_submit(self, client, application_payload):
        client.post("/api/v1/applications", json=application_payload)
        client.post("/api/v1/applications", json=application_payload)

        response = client.get("/api/v1/applications/stats")

        assert response.json()["total"] == 1

    def test_datastore_down_returns_503(self, client, fake_supabase):
        fake_supabase.fail_with = ConnectionError("connection refused")

        response = client.get("/api/v1/applications/stats")

        assert response.status_code == 503
        assert response.json()["details"]["cause"] == "FETCH_STATS_FAILED"


# =============================================================================
# GET /applications/check
# =============================================================================

class TestCheckEndpoint:
    """Test GET /api/v1/applications/check."""

    def test_absent(self, client):
        response = client.get("/api/v1/applications/check", params={"email": "nobody@example.com"})

        assert response.status_code == 200
        assert response.json() == {"exists": False, "application": None}

    def test_missing_email_is_absent(self, client, fake_supabase):
        response = client.get("/api/v1/applications/check")

        assert response.json() == {"exists": False, "application": None}
        assert fake_supabase.executed == []

    def test_round_trip(self, client, fake_supabase, application_payload):
        submitted = client.post("/api/v1/applications", json=application_payload).json()

        response = client.get("/api/v1/applications/check", params={"email": "jane@example.com"})

        body = response.json()
        assert body["exists"] is True
        assert body["application"]["status"] == "pending"
        assert body["application"]["createdAt"] == submitted["createdAt"]
        assert fake_supabase.tables["applications"][0]["id"] == submitted["id"]

    def test_padded_email_round_trip(self, client, fake_supabase, application_payload):
        application_payload["email"] = "jane@example.com "
        submitted = client.post("/api/v1/applications", json=application_payload).json()

        response = client.get("/api/v1/applications/check", params={"email": "jane@example.com "})

        body = response.json()
        assert body["exists"] is True
        assert body["application"]["createdAt"] == submitted["createdAt"]
        assert fake_supabase.tables["applications"][0]["email"] == "jane@example.com"

    def test_overlong_email_is_absent_not_rejected(self, client):
        email = "a" * 390 + "@example.com"

        response = client.get("/api/v1/applications/check", params={"email": email})

        assert response.status_code == 200
        assert response.json() == {"exists": False, "application": None}


# =============================================================================
# GET /applications/me
# =============================================================================

class TestMyApplicationEndpoint:
    """Test GET /api/v1/applications/me."""

    def test_requires_auth(self, client):
        response = client.get("/api/v1/applications/me")

        assert response.status_code in (401, 403)

    def test_returns_own_application(self, client, application_payload, make_token):
        headers = {"Authorization": f"Bearer {make_token(email='jane@example.com')}"}
        client.post("/api/v1/applications", json=application_payload, headers=headers)

        response = client.get("/api/v1/applications/me", headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["email"] == "jane@example.com"
        assert body["twitterHandle"] == "@janedoe"
        assert body["status"] == "pending"

    def test_not_found(self, client, make_token):
        headers = {"Authorization": f"Bearer {make_token(email='ghost@example.com')}"}

        response = client.get("/api/v1/applications/me", headers=headers)

        assert response.status_code == 404
        assert response.json()["code"] == "APPLICATION_NOT_FOUND"


# =============================================================================
# Landing / Health / Root
# =============================================================================

class TestLandingEndpoint:
    """Test GET /api/v1/landing."""

    def test_content_and_stats(self, client, fake_supabase):
        fake_supabase.seed(status="accepted")

        response = client.get("/api/v1/landing")

        assert response.status_code == 200
        body = response.json()
        assert body["brand"] == "$1 STARTUP"
        assert body["applicationsOpen"] is True
        assert body["stats"] == {"total": 1, "pending": 0, "accepted": 1}
        assert [c["title"] for c in body["concepts"]] == ["Live Building", "Vibe Coding", "Real Revenue"]
        assert {o["value"] for o in body["experienceOptions"]} == {
            "beginner", "vibe-coder", "intermediate", "advanced",
        }

    def test_field_names_are_camel_case(self, client):
        body = client.get("/api/v1/landing").json()

        assert "applications_open" not in body
        assert "experience_options" not in body

    def test_closed_intake_shown(self, client):
        with patch.object(settings, "APPLICATIONS_OPEN", False):
            body = client.get("/api/v1/landing").json()

        assert body["applicationsOpen"] is False
        assert body["badge"] == "Applications closed"

    def test_stats_missing_when_datastore_down(self, client, fake_supabase):
        fake_supabase.fail_with = ConnectionError("down")

        response = client.get("/api/v1/landing")

        assert response.status_code == 200
        assert response.json()["stats"] is None


class TestHealthEndpoints:
    """Test health endpoints."""

    def test_health(self, client):
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_live(self, client):
        assert client.get("/api/v1/health/live").json()["status"] == "alive"

    def test_root(self, client):
        assert client.get("/").json()["name"] == "$1 Startup API"


@pytest.mark.parametrize("path", ["/docs", "/openapi.json"])
def test_docs_available(client, path):
    assert client.get(path).status_code == 200
