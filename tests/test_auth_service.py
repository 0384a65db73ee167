"""Tests for AuthService - JWT tokens and password hashing.

This module tests:
1. Access token creation and claims
2. Token verification, expiry and tampering
3. Token type validation
4. Password hashing and verification with bcrypt
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock, patch

import jwt
import pytest

from fitness_trainer.exceptions import AuthError, ValidationError
from fitness_trainer.services.auth_service import (
    AuthService,
    InvalidTokenError,
    TokenError,
    TokenExpiredError,
    get_auth_service,
)


SECRET = "test-secret-key-for-unit-testing-only-32chars"


@pytest.fixture
def mock_settings():
    """Create mock settings for testing."""
    settings = MagicMock()
    settings.jwt_secret_key = SECRET
    settings.jwt_algorithm = "HS256"
    settings.access_token_expire_minutes = 30
    return settings


@pytest.fixture
def auth_service(mock_settings):
    """Create AuthService with mock settings."""
    with patch("fitness_trainer.services.auth_service.get_settings", return_value=mock_settings):
        return AuthService()


class TestAuthServiceInit:
    """Tests for AuthService initialization."""

    def test_init_with_explicit_settings(self, mock_settings):
        service = AuthService(mock_settings)

        assert service._secret_key == SECRET
        assert service._algorithm == "HS256"
        assert service.expires_in == 30 * 60

    def test_singleton(self):
        assert get_auth_service() is get_auth_service()


class TestAccessTokenCreation:
    """Tests for access token creation."""

    def test_access_token_contains_claims(self, auth_service):
        """Access token should carry subject, email, type and timestamps."""
        token = auth_service.create_access_token(user_id="user-123", email="a@example.com")

        payload = jwt.decode(token, SECRET, algorithms=["HS256"])
        assert payload["sub"] == "user-123"
        assert payload["email"] == "a@example.com"
        assert payload["type"] == "access"
        assert payload["exp"] - payload["iat"] == 30 * 60

    def test_additional_claims(self, auth_service):
        token = auth_service.create_access_token(
            user_id="user-123",
            email="a@example.com",
            additional_claims={"scope": "cli"},
        )
        assert auth_service.verify_access_token(token)["scope"] == "cli"


class TestTokenVerification:
    """Tests for token verification."""

    def test_round_trip(self, auth_service):
        token = auth_service.create_access_token(user_id="user-123", email="a@example.com")
        payload = auth_service.verify_access_token(token)
        assert payload["sub"] == "user-123"

    def test_expired_token(self, auth_service):
        """Expired tokens raise TokenExpiredError."""
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {
                "sub": "user-123",
                "type": "access",
                "iat": now - timedelta(hours=2),
                "exp": now - timedelta(hours=1),
            },
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(TokenExpiredError) as exc_info:
            auth_service.verify_access_token(token)
        assert exc_info.value.message == "Token has expired"

    def test_wrong_secret(self, auth_service):
        token = jwt.encode(
            {"sub": "user-123", "type": "access", "iat": 0, "exp": 9999999999},
            "another-secret-key-that-is-also-32-chars-long",
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            auth_service.verify_access_token(token)

    def test_garbage_token(self, auth_service):
        with pytest.raises(InvalidTokenError):
            auth_service.verify_access_token("not-a-jwt")

    def test_missing_subject(self, auth_service):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"type": "access", "iat": now, "exp": now + timedelta(minutes=5)},
            SECRET,
            algorithm="HS256",
        )
        with pytest.raises(InvalidTokenError):
            auth_service.verify_access_token(token)

    def test_wrong_token_type(self, auth_service):
        token = auth_service.create_access_token(
            user_id="user-123",
            email="a@example.com",
            additional_claims={"type": "refresh"},
        )
        with pytest.raises(InvalidTokenError, match="Expected token type"):
            auth_service.verify_access_token(token)

    def test_errors_are_auth_errors(self):
        """Token failures map to 401 through the common error hierarchy."""
        assert issubclass(TokenExpiredError, TokenError)
        assert issubclass(InvalidTokenError, AuthError)
        assert InvalidTokenError("bad").status_code == 401


class TestPasswordHashing:
    """Tests for bcrypt password hashing."""

    def test_hash_is_not_plaintext(self):
        hashed = AuthService.hash_password("secret123")
        assert hashed != "secret123"
        assert hashed.startswith("$2")

    def test_hash_is_salted(self):
        assert AuthService.hash_password("secret123") != AuthService.hash_password("secret123")

    def test_verify_correct_password(self):
        assert AuthService.verify_password("secret123", AuthService.hash_password("secret123"))

    def test_verify_wrong_password(self):
        assert not AuthService.verify_password("wrong", AuthService.hash_password("secret123"))

    def test_verify_malformed_hash(self):
        """A corrupt stored hash fails verification instead of raising."""
        assert not AuthService.verify_password("secret123", "not-a-bcrypt-hash")

    def test_hash_rejects_over_72_bytes(self):
        with pytest.raises(ValidationError) as exc_info:
            AuthService.hash_password("p" * 100)
        assert exc_info.value.status_code == 400
        assert exc_info.value.details == {"field": "password"}

    def test_hash_counts_bytes_not_characters(self):
        # 40 two-byte characters
        with pytest.raises(ValidationError):
            AuthService.hash_password("é" * 40)

    def test_hash_accepts_exactly_72_bytes(self):
        hashed = AuthService.hash_password("p" * 72)
        assert AuthService.verify_password("p" * 72, hashed)

    def test_verify_over_72_bytes_is_mismatch(self):
        hashed = AuthService.hash_password("p" * 72)
        assert not AuthService.verify_password("p" * 100, hashed)
