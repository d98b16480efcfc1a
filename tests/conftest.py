"""Pytest configuration and shared fixtures."""

import os

# Must be set before the package is imported: config is cached on first use
os.environ.setdefault("HEARING_PASSWORD_HASH_ITERATIONS", "1000")
os.environ.setdefault("HEARING_LOG_LEVEL", "WARNING")
os.environ.setdefault("HEARING_LOG_TO_FILE", "0")

from typing import Dict, Generator

import pytest
from fastapi.testclient import TestClient

from hearing_api.auth.jwt_auth import JWTTokenManager
from hearing_api.main import create_app
from hearing_api.repositories.dependencies import build_memory_container
from hearing_api.repositories.interfaces import RepositoryContainer

ADMIN_CREDENTIALS = {"username": "admin@hearingtest.com", "password": "SecurePass123!"}
ACME_ONLY_CREDENTIALS = {"username": "field.tester@acme-corp.com", "password": "FieldTest456!"}

TEST_SECRET_KEY = "t3st-Signing-Key-f0r-Hearing-API-9f8e7d6c5b4a"


@pytest.fixture
def repositories() -> RepositoryContainer:
    """A freshly seeded in-memory store per test."""
    return build_memory_container()


@pytest.fixture
def token_manager() -> JWTTokenManager:
    return JWTTokenManager(secret_key=TEST_SECRET_KEY, algorithm="HS256", ttl_seconds=3600)


@pytest.fixture
def app(repositories, token_manager):
    return create_app(repositories=repositories, token_manager=token_manager)


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client bound to an isolated application instance."""
    with TestClient(app) as test_client:
        yield test_client


def _login(client: TestClient, credentials: Dict[str, str]) -> Dict[str, str]:
    response = client.post("/login", json=credentials)
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def auth_headers(client) -> Dict[str, str]:
    """Headers for the seeded user with access to both tenants."""
    return _login(client, ADMIN_CREDENTIALS)


@pytest.fixture
def acme_only_headers(client) -> Dict[str, str]:
    """Headers for the seeded user that only belongs to acme-corp."""
    return _login(client, ACME_ONLY_CREDENTIALS)


@pytest.fixture
def valid_submission() -> Dict:
    return {
        "test_metadata": {
            "test_date": "2024-03-01T09:30:00Z",
            "tester_id": "tester-001",
            "device_id": "iPad-12345",
            "test_type": "audiometry",
        },
        "results": [
            {"step": 1, "frequency_hz": 500, "decibel_db": 25, "ear": "left", "response": "heard"},
            {"step": 2, "frequency_hz": 1000, "decibel_db": 25, "ear": "left", "response": "not_heard"},
        ],
    }
