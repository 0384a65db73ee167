"""Repository pattern implementations for database persistence."""

from .base import Repository
from .user_repository import User, UserRepository
from .workout_repository import WorkoutRepository

__all__ = [
    "Repository",
    "User",
    "UserRepository",
    "WorkoutRepository",
]
