# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Swaps the Supabase client for an in-memory fake
# - Provides a TestClient and helpers to create users and tokens
# =============================================================================

import os
import sys

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-signing-tokens")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from fastapi.testclient import TestClient

from app.auth.tokens import issue_token
from app.dependencies import get_supabase_client
from app.main import app
from core.services import ProductService, UserService
from tests.fakes import FakeSupabase


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def fake_db():
    """Empty in-memory users/products store."""
    return FakeSupabase()


@pytest.fixture
def user_service(fake_db):
    return UserService(fake_db)


@pytest.fixture
def product_service(fake_db):
    return ProductService(fake_db)


@pytest.fixture
def client(fake_db):
    """
    TestClient wired to the fake store.

    Not used as a context manager, so the lifespan (which would create a
    real Supabase client) doesn't run.
    """
    app.dependency_overrides[get_supabase_client] = lambda: fake_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin(user_service):
    """An admin user row."""
    return user_service.create_admin("Admin", "admin@temo.local", "Admin@123")


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def approved_farmer(user_service):
    """A farmer that has already been approved."""
    farmer = user_service.register("Bob", "bob@farm.test", "bobpass", "farmer")
    return user_service.approve_farmer(farmer["id"])


@pytest.fixture
def pending_farmer(user_service):
    return user_service.register("Alice", "alice@farm.test", "alicepass", "farmer")


@pytest.fixture
def consumer(user_service):
    return user_service.register("Carol", "carol@home.test", "carolpass", "consumer")


def auth_headers(user) -> dict[str, str]:
    """Authorization header carrying a fresh token for `user`."""
    return {"Authorization": f"Bearer {issue_token(user)}"}
