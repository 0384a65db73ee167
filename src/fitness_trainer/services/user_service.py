"""
User account service.

Handles registration, login and profile management on top of the user
repository and the token/password primitives in AuthService.
"""

import logging
import sqlite3
import uuid
from typing import Optional

from .auth_service import AuthService
from ..db.repositories.user_repository import User, UserRepository
from ..exceptions import AuthError, EmailAlreadyRegisteredError, UserNotFoundError
from ..models.users import (
    AuthResponse,
    ProfileUpdate,
    RegisterRequest,
    UserResponse,
)

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


def to_user_response(user: User) -> UserResponse:
    """Build the public representation of a user."""
    return UserResponse(**user.to_public_dict())


class UserService:
    """Service for user registration, authentication and profiles."""

    def __init__(self, user_repository: UserRepository, auth_service: AuthService):
        self._users = user_repository
        self._auth = auth_service

    def _issue(self, user: User) -> AuthResponse:
        token = self._auth.create_access_token(user_id=user.id, email=user.email)
        return AuthResponse(token=token, user=to_user_response(user))

    def register(self, request: RegisterRequest) -> AuthResponse:
        """
        Create an account and return a token for it.

        Raises:
            EmailAlreadyRegisteredError: If the email is taken (any case)
        """
        email = request.email.lower()
        if self._users.email_exists(email):
            raise EmailAlreadyRegisteredError()

        try:
            user = self._users.create_user(
                user_id=str(uuid.uuid4()),
                name=request.name,
                email=email,
                password_hash=self._auth.hash_password(request.password),
                height=request.height,
                weight=request.weight,
                fitness_goal=request.fitness_goal,
            )
        except sqlite3.IntegrityError:
            # Lost a race with a concurrent registration for the same email
            raise EmailAlreadyRegisteredError()

        logger.info(f"Registered user {user.id}")
        return self._issue(user)

    def login(self, email: str, password: str) -> AuthResponse:
        """
        Verify credentials and return a fresh token.

        Raises:
            AuthError: On unknown email or wrong password
        """
        user = self._users.get_by_email(email)
        if user is None or not self._auth.verify_password(password, user.password_hash):
            logger.info("Rejected login attempt")
            raise AuthError(INVALID_CREDENTIALS)

        return self._issue(user)

    def get_profile(self, user_id: str) -> UserResponse:
        user = self._users.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return to_user_response(user)

    def update_profile(self, user_id: str, update: ProfileUpdate) -> UserResponse:
        """Apply the fields present in ``update`` to the user's profile."""
        fields = update.model_dump(exclude_unset=True)
        user: Optional[User] = self._users.update_profile(user_id, fields)
        if user is None:
            raise UserNotFoundError(user_id)

        logger.info(f"Updated profile for user {user_id}: {sorted(fields)}")
        return to_user_response(user)
