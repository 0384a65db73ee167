"""Tests for the exception hierarchy and how the API reports it.

This module tests:
1. Status codes and error codes per exception type
2. The envelope produced by to_dict
3. 500 responses for database failures and unexpected errors
"""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from fitness_trainer.api.deps import get_current_user, get_workout_service
from fitness_trainer.api.middleware.auth import CurrentUser
from fitness_trainer.exceptions import (
    AuthError,
    ConflictError,
    DatabaseError,
    EmailAlreadyRegisteredError,
    ErrorCode,
    ForbiddenError,
    ServerError,
    UserNotFoundError,
    ValidationError,
    WorkoutNotFoundError,
)
from fitness_trainer.main import app


class TestExceptionTypes:
    """Tests for status and code mapping."""

    @pytest.mark.parametrize("exc, status, code", [
        (ValidationError("bad", field="title"), 400, ErrorCode.VALIDATION_ERROR),
        (AuthError(), 401, ErrorCode.UNAUTHORIZED),
        (ForbiddenError(), 403, ErrorCode.FORBIDDEN),
        (WorkoutNotFoundError("w1"), 404, ErrorCode.WORKOUT_NOT_FOUND),
        (UserNotFoundError("u1"), 404, ErrorCode.USER_NOT_FOUND),
        (ConflictError("clash"), 409, ErrorCode.CONFLICT),
        (EmailAlreadyRegisteredError(), 409, ErrorCode.EMAIL_ALREADY_REGISTERED),
        (DatabaseError("disk I/O error", operation="insert"), 500, ErrorCode.DATABASE_ERROR),
        (ServerError(), 500, ErrorCode.INTERNAL_ERROR),
    ])
    def test_mapping(self, exc, status, code):
        assert exc.status_code == status
        assert exc.code == code

    def test_to_dict(self):
        body = WorkoutNotFoundError("w1").to_dict()
        assert body == {
            "error": {
                "code": "WORKOUT_NOT_FOUND",
                "message": "Workout not found",
                "details": {"resource_type": "Workout", "resource_id": "w1"},
            }
        }

    def test_to_dict_without_details(self):
        assert ForbiddenError().to_dict() == {
            "error": {"code": "FORBIDDEN", "message": "Not authorized"}
        }

    def test_validation_field_in_details(self):
        assert ValidationError("bad", field="title").details == {"field": "title"}


class TestServerErrors:
    """Tests for 500 responses through the app."""

    @pytest.fixture
    def failing_client(self):
        service = MagicMock()
        app.dependency_overrides[get_current_user] = lambda: CurrentUser("u1", "u1@example.com")
        app.dependency_overrides[get_workout_service] = lambda: service
        try:
            yield TestClient(app, raise_server_exceptions=False), service
        finally:
            app.dependency_overrides.pop(get_current_user, None)
            app.dependency_overrides.pop(get_workout_service, None)

    def test_database_error(self, failing_client):
        client, service = failing_client
        service.list_workouts.side_effect = DatabaseError("database is locked")

        response = client.get("/api/workouts")

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "DATABASE_ERROR"

    def test_unexpected_error(self, failing_client):
        client, service = failing_client
        service.list_workouts.side_effect = RuntimeError("boom")

        response = client.get("/api/workouts")

        assert response.status_code == 500
        assert response.json()["error"] == {
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred",
        }

    def test_unexpected_error_matches_server_error(self, failing_client):
        client, service = failing_client
        service.list_workouts.side_effect = KeyError("missing")

        response = client.get("/api/workouts")

        assert response.status_code == ServerError().status_code
        assert response.json() == ServerError().to_dict()
        assert "missing" not in response.text
