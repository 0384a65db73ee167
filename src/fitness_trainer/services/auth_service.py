"""Bearer tokens and password hashing.

Access tokens are HS256 JWTs carrying the user id (``sub``), the email and
a ``type`` claim. There are no refresh tokens; a client signs in again once
its token lapses.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
import jwt

from ..config import Settings, get_settings
from ..exceptions import AuthError, ValidationError
from ..models.users import MAX_PASSWORD_BYTES

TOKEN_TYPE_ACCESS = "access"


class TokenError(AuthError):
    """A bearer token could not be accepted."""


class TokenExpiredError(TokenError):
    def __init__(self, message: str = "Token has expired") -> None:
        super().__init__(message)


class InvalidTokenError(TokenError):
    """Bad signature, malformed token, missing claim or wrong token type."""


class AuthService:
    """Issues and checks access tokens; hashes and checks passwords."""

    def __init__(self, settings: Settings | None = None) -> None:
        settings = settings or get_settings()
        self._secret_key = settings.jwt_secret_key
        self._algorithm = settings.jwt_algorithm
        self._lifetime = timedelta(minutes=settings.access_token_expire_minutes)

    @property
    def expires_in(self) -> int:
        """Seconds an access token stays valid."""
        return int(self._lifetime.total_seconds())

    def create_access_token(
        self,
        user_id: str,
        email: str,
        additional_claims: dict[str, Any] | None = None,
    ) -> str:
        """Sign a token for ``user_id``.

        ``additional_claims`` are merged last and may override the defaults.
        """
        issued_at = datetime.now(timezone.utc)
        claims: dict[str, Any] = {
            "sub": user_id,
            "email": email,
            "type": TOKEN_TYPE_ACCESS,
            "iat": issued_at,
            "exp": issued_at + self._lifetime,
        }
        claims.update(additional_claims or {})
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    def verify_token(self, token: str, expected_type: str | None = None) -> dict[str, Any]:
        """Decode ``token`` and return its claims.

        Raises:
            TokenExpiredError: ``exp`` is in the past.
            InvalidTokenError: anything else wrong with the token, including
                a ``type`` claim other than ``expected_type``.
        """
        try:
            claims = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpiredError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}")

        token_type = claims.get("type")
        if expected_type is not None and token_type != expected_type:
            raise InvalidTokenError(f"Expected token type '{expected_type}', got '{token_type}'")
        return claims

    def verify_access_token(self, token: str) -> dict[str, Any]:
        return self.verify_token(token, expected_type=TOKEN_TYPE_ACCESS)

    @staticmethod
    def hash_password(password: str) -> str:
        """Hash with a fresh salt.

        Raises:
            ValidationError: ``password`` is longer than bcrypt accepts.
        """
        encoded = password.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            raise ValidationError(
                f"Password must be at most {MAX_PASSWORD_BYTES} bytes", field="password"
            )
        return bcrypt.hashpw(encoded, bcrypt.gensalt()).decode("utf-8")

    @staticmethod
    def verify_password(password: str, password_hash: str) -> bool:
        """Check ``password`` against a stored bcrypt hash.

        A corrupt hash or a password too long to have been registered
        counts as a mismatch rather than an error.
        """
        encoded = password.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))
        except ValueError:
            return False


_auth_service: AuthService | None = None


def get_auth_service() -> AuthService:
    """Process-wide AuthService built from the current settings."""
    global _auth_service
    if _auth_service is None:
        _auth_service = AuthService()
    return _auth_service
