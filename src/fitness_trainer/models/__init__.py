"""Pydantic models for the Fitness Trainer API."""

from .users import (
    AuthResponse,
    LoginRequest,
    ProfileAttributes,
    ProfileUpdate,
    RegisterRequest,
    UserResponse,
)
from .workouts import (
    Difficulty,
    Exercise,
    MessageResponse,
    Workout,
    WorkoutInput,
    WorkoutUpdate,
)

__all__ = [
    "AuthResponse",
    "LoginRequest",
    "ProfileAttributes",
    "ProfileUpdate",
    "RegisterRequest",
    "UserResponse",
    "Difficulty",
    "Exercise",
    "MessageResponse",
    "Workout",
    "WorkoutInput",
    "WorkoutUpdate",
]
