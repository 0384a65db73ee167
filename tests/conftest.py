"""Shared fixtures: a throwaway database wired into the FastAPI app."""

import os
import tempfile

import pytest
from fastapi.testclient import TestClient

from fitness_trainer.api.deps import get_database
from fitness_trainer.api.middleware.rate_limit import limiter
from fitness_trainer.db.database import Database
from fitness_trainer.main import app


LEG_DAY = {
    "title": "Leg Day",
    "description": "Heavy lower body",
    "date": "2024-03-01",
    "duration": 60,
    "exercises": [
        {"name": "Squat", "sets": 5, "reps": 5, "weight": 100},
        {"name": "Lunge", "sets": 3, "reps": 12, "weight": 20, "notes": "per leg"},
    ],
    "difficulty": "intermediate",
    "targetMuscleGroups": ["quads", "glutes"],
}


@pytest.fixture
def temp_db_path():
    """Create a temporary database file path."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = f.name
    yield db_path
    try:
        os.unlink(db_path)
    except OSError:
        pass


@pytest.fixture
def database(temp_db_path):
    return Database(temp_db_path)


@pytest.fixture
def client(database):
    """Test client backed by the temporary database, with rate limits off."""
    app.dependency_overrides[get_database] = lambda: database
    was_enabled = limiter.enabled
    limiter.enabled = False
    try:
        yield TestClient(app)
    finally:
        limiter.enabled = was_enabled
        app.dependency_overrides.pop(get_database, None)


@pytest.fixture
def register(client):
    """Factory that registers an account and returns token, user and headers."""

    def _register(email="alice@example.com", name="Alice", password="secret123", **profile):
        response = client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": password, **profile},
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return {
            "token": body["token"],
            "user": body["user"],
            "headers": {"Authorization": f"Bearer {body['token']}"},
        }

    return _register


@pytest.fixture
def leg_day():
    return {**LEG_DAY, "exercises": [dict(e) for e in LEG_DAY["exercises"]]}
