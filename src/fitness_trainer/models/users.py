"""User-facing request and response models."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel


# bcrypt only hashes the first 72 bytes and newer releases reject longer input
MAX_PASSWORD_BYTES = 72


class ProfileAttributes(BaseModel):
    """Optional profile attributes a user can set at registration or later."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    height: Optional[float] = Field(None, gt=0, le=300, description="Height in cm")
    weight: Optional[float] = Field(None, gt=0, le=700, description="Body weight in kg")
    fitness_goal: Optional[str] = Field(None, max_length=200)


class RegisterRequest(ProfileAttributes):
    """Request model for user registration."""

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, description="6 characters to 72 bytes")

    @field_validator("password")
    @classmethod
    def validate_password_bytes(cls, v: str) -> str:
        if len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class LoginRequest(BaseModel):
    """Request model for user login."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class ProfileUpdate(ProfileAttributes):
    """Request model for profile updates. Omitted fields are left unchanged."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)

    @field_validator("name")
    @classmethod
    def reject_null_name(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("name cannot be null")
        return v


class UserResponse(BaseModel):
    """Public view of a user. Never carries the password hash."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str
    name: str
    email: str
    height: Optional[float] = None
    weight: Optional[float] = None
    fitness_goal: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class AuthResponse(BaseModel):
    """Response body for register and login."""

    token: str
    user: UserResponse
