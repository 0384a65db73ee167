"""Service layer for the Fitness Trainer app."""

from .auth_service import (
    AuthService,
    InvalidTokenError,
    TokenError,
    TokenExpiredError,
    get_auth_service,
)
from .user_service import UserService
from .workout_service import WorkoutService

__all__ = [
    "AuthService",
    "InvalidTokenError",
    "TokenError",
    "TokenExpiredError",
    "get_auth_service",
    "UserService",
    "WorkoutService",
]
