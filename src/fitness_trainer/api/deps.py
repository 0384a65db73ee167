"""Dependency injection for API routes."""

from functools import lru_cache

from fastapi import Depends

from .middleware.auth import CurrentUser, get_current_user
from ..config import get_settings
from ..db.database import Database
from ..db.repositories.user_repository import UserRepository
from ..db.repositories.workout_repository import WorkoutRepository
from ..services.auth_service import AuthService, get_auth_service
from ..services.user_service import UserService
from ..services.workout_service import WorkoutService

__all__ = [
    "CurrentUser",
    "get_current_user",
    "get_database",
    "get_user_repository",
    "get_workout_repository",
    "get_user_service",
    "get_workout_service",
]


@lru_cache
def get_database() -> Database:
    """Get the shared database instance."""
    return Database(get_settings().database_path)


def get_user_repository(database: Database = Depends(get_database)) -> UserRepository:
    return UserRepository(database)


def get_workout_repository(database: Database = Depends(get_database)) -> WorkoutRepository:
    return WorkoutRepository(database)


def get_user_service(
    users: UserRepository = Depends(get_user_repository),
    auth_service: AuthService = Depends(get_auth_service),
) -> UserService:
    return UserService(users, auth_service)


def get_workout_service(
    workouts: WorkoutRepository = Depends(get_workout_repository),
) -> WorkoutService:
    return WorkoutService(workouts)
