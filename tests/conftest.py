# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides an in-memory stand-in for the Supabase query builder
# - Issues signed test JWTs
# =============================================================================

import os
import time
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any
from unittest.mock import patch
from uuid import uuid4

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-for-hs256-signing")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest
from jose import jwt
from postgrest.exceptions import APIError

from lib.supabase_client import SupabaseClient


# =============================================================================
# In-memory Supabase
# =============================================================================

class FakeQuery:
    """Mimics the chained PostgREST request builder for one table."""

    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table_name = table
        self.operation = "select"
        self.filters: list[tuple[str, Any]] = []
        self.row_limit: int | None = None
        self.payload: dict[str, Any] | None = None

    def select(self, *columns):
        self.operation = "select"
        return self

    def insert(self, data: dict[str, Any]):
        self.operation = "insert"
        self.payload = dict(data)
        return self

    def eq(self, column: str, value: Any):
        self.filters.append((column, value))
        return self

    def limit(self, n: int):
        self.row_limit = n
        return self

    def execute(self):
        self.db.executed.append((self.table_name, self.operation, list(self.filters)))
        if self.db.fail_with is not None:
            raise self.db.fail_with

        rows = self.db.tables.setdefault(self.table_name, [])

        if self.operation == "insert":
            if any(row["email"] == self.payload["email"] for row in rows):
                raise APIError({
                    "code": "23505",
                    "message": 'duplicate key value violates unique constraint "applications_email_key"',
                    "details": f"Key (email)=({self.payload['email']}) already exists.",
                    "hint": None,
                })
            row = {
                "id": str(uuid4()),
                "created_at": datetime.now(timezone.utc).isoformat(),
                "user_id": None,
                "status": "pending",
                **self.payload,
            }
            rows.append(row)
            return SimpleNamespace(data=[dict(row)], count=None)

        matched = [
            dict(row) for row in rows
            if all(row.get(column) == value for column, value in self.filters)
        ]
        if self.row_limit is not None:
            matched = matched[:self.row_limit]
        return SimpleNamespace(data=matched, count=None)


class FakeRpc:
    """Mimics a PostgREST function call; only application_stats() is known."""

    def __init__(self, db: "FakeSupabase", name: str):
        self.db = db
        self.name = name

    def execute(self):
        self.db.executed.append((self.name, "rpc", []))
        if self.db.fail_with is not None:
            raise self.db.fail_with
        if self.name != "application_stats":
            raise APIError({"code": "PGRST202", "message": f"Could not find the function public.{self.name}"})

        statuses = [row["status"] for row in self.db.tables.get("applications", [])]
        return SimpleNamespace(
            data={
                "total": len(statuses),
                "pending": statuses.count("pending"),
                "accepted": statuses.count("accepted"),
            },
            count=None,
        )


class FakeSupabase:
    """Minimal in-memory Supabase client: tables are lists of row dicts."""

    def __init__(self):
        self.tables: dict[str, list[dict[str, Any]]] = {"applications": []}
        self.executed: list[tuple] = []
        self.fail_with: Exception | None = None

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rpc(self, name: str, params: dict[str, Any] | None = None) -> FakeRpc:
        return FakeRpc(self, name)

    def seed(self, **fields) -> dict[str, Any]:
        """Insert a row directly, bypassing the API."""
        row = {
            "id": str(uuid4()),
            "name": "Seeded Applicant",
            "email": f"{uuid4().hex[:8]}@example.com",
            "twitter_handle": "@seeded",
            "experience": "beginner",
            "project_idea": "A seeded idea",
            "why_you": "Seeded reasons",
            "user_id": None,
            "created_at": datetime.now(timezone.utc).isoformat(),
            "status": "pending",
        }
        row.update(fields)
        self.tables["applications"].append(row)
        return row


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def fake_supabase():
    """Patch SupabaseClient to use an in-memory database."""
    fake = FakeSupabase()
    with patch.object(SupabaseClient, "get_client", return_value=fake):
        yield fake


@pytest.fixture
def application_payload():
    """A valid submission as the web client sends it."""
    return {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "twitterHandle": "@janedoe",
        "experience": "vibe-coder",
        "projectIdea": "A CRM for dog walkers that invoices by the bark",
        "whyYou": "I narrate my bugs out loud and I'm very fast at breaking prod",
    }


@pytest.fixture
def make_token():
    """Build signed Supabase-style access tokens."""

    def _make(user_id: str | None = None, email: str = "jane@example.com", expires_in: int = 3600):
        now = int(time.time())
        claims = {
            "sub": user_id or str(uuid4()),
            "email": email,
            "aud": "authenticated",
            "role": "authenticated",
            "iat": now,
            "exp": now + expires_in,
        }
        return jwt.encode(claims, os.environ["SUPABASE_JWT_SECRET"], algorithm="HS256")

    return _make


@pytest.fixture
def client(fake_supabase):
    """FastAPI test client backed by the in-memory database."""
    from fastapi.testclient import TestClient

    from app.main import app

    return TestClient(app)
