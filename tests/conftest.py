# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Swaps the per-request Supabase client for an in-memory fake
# - Lets each test choose who the caller is
# =============================================================================

import os
from uuid import uuid4

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient

from app.auth.dependencies import get_current_user_optional
from app.auth.models import AuthUser
from app.dependencies import get_supabase_client
from app.main import app
from tests.fakes import FakeSupabase


class Caller:
    """Mutable holder for the identity the API should see."""

    def __init__(self):
        self.user: AuthUser | None = None

    def login(self, user: AuthUser | None) -> None:
        self.user = user

    def logout(self) -> None:
        self.user = None


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def db() -> FakeSupabase:
    """Empty in-memory Supabase."""
    return FakeSupabase()


@pytest.fixture
def owner() -> AuthUser:
    """A developer who owns apps in the tests."""
    return AuthUser(id=uuid4(), email="owner@example.com")


@pytest.fixture
def other_user() -> AuthUser:
    """A signed-in user who owns nothing."""
    return AuthUser(id=uuid4(), email="other@example.com")


@pytest.fixture
def caller() -> Caller:
    """Anonymous until a test calls caller.login(user)."""
    return Caller()


@pytest.fixture
def client(db, caller):
    """
    TestClient wired to the fake database and the chosen caller.

    Usage:
        def test_something(client, caller, owner):
            caller.login(owner)
            response = client.post("/api/v1/apps", json={...})
    """
    app.dependency_overrides[get_supabase_client] = lambda: db
    app.dependency_overrides[get_current_user_optional] = lambda: caller.user

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def sample_app_payload() -> dict:
    """Minimal valid body for POST /apps."""
    return {
        "name": "Widget Pro",
        "description": "Does widget things",
        "app_url": "https://widget.example.com",
    }
