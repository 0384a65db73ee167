"""Workout and exercise models shared by the API, service and client layers."""

from datetime import date as date_type, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Difficulty(str, Enum):
    """Workout difficulty level."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


def _normalize_muscle_groups(groups: List[str]) -> List[str]:
    """Strip, drop blanks and de-duplicate while keeping first-seen order."""
    seen = []
    for group in groups:
        cleaned = group.strip()
        if cleaned and cleaned not in seen:
            seen.append(cleaned)
    return seen


class Exercise(BaseModel):
    """A movement embedded in a workout."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    name: str = Field(..., min_length=1, max_length=100)
    sets: int = Field(..., ge=1, le=100)
    reps: int = Field(..., ge=1, le=1000)
    weight: Optional[float] = Field(None, ge=0, description="Load in kg")
    duration: Optional[int] = Field(None, ge=0, description="Duration in seconds")
    notes: Optional[str] = Field(None, max_length=1000)


class WorkoutInput(BaseModel):
    """Request body for creating a workout."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    date: Optional[date_type] = Field(None, description="Defaults to today when omitted")
    duration: Optional[int] = Field(None, ge=0, le=1440, description="Duration in minutes")
    exercises: List[Exercise] = Field(..., min_length=1)
    difficulty: Difficulty = Difficulty.BEGINNER
    target_muscle_groups: List[str] = Field(default_factory=list)

    @field_validator("target_muscle_groups")
    @classmethod
    def validate_target_muscle_groups(cls, v: List[str]) -> List[str]:
        return _normalize_muscle_groups(v)


class WorkoutUpdate(BaseModel):
    """Request body for updating a workout.

    Only fields present in the payload are written; each one replaces the
    stored value wholesale. Use ``model_dump(exclude_unset=True)`` to get the
    fields that were actually sent.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    date: Optional[date_type] = None
    duration: Optional[int] = Field(None, ge=0, le=1440)
    exercises: Optional[List[Exercise]] = Field(None, min_length=1)
    difficulty: Optional[Difficulty] = None
    target_muscle_groups: Optional[List[str]] = None

    @field_validator("target_muscle_groups")
    @classmethod
    def validate_target_muscle_groups(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        return _normalize_muscle_groups(v)

    @field_validator("title", "exercises", "date", "difficulty", "target_muscle_groups")
    @classmethod
    def reject_explicit_null(cls, v, info):
        """Required-on-create fields may be omitted but not nulled out."""
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class Workout(BaseModel):
    """A stored workout owned by exactly one user."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    date: date_type
    duration: Optional[int] = None
    exercises: List[Exercise] = Field(default_factory=list)
    difficulty: Difficulty = Difficulty.BEGINNER
    target_muscle_groups: List[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class MessageResponse(BaseModel):
    """Plain acknowledgement body."""

    message: str
