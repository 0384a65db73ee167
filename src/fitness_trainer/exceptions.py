"""
Domain exceptions for the Fitness Trainer app.

Services raise these; the API's exception handlers turn each one into the
JSON error envelope using its ``code``, ``status_code``, ``message`` and
optional ``details``.
"""

from typing import Any, Dict, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Machine-readable codes carried in the error envelope."""

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    FORBIDDEN = "FORBIDDEN"
    UNAUTHORIZED = "UNAUTHORIZED"
    RATE_LIMITED = "RATE_LIMITED"

    # User errors
    USER_NOT_FOUND = "USER_NOT_FOUND"
    EMAIL_ALREADY_REGISTERED = "EMAIL_ALREADY_REGISTERED"

    # Workout errors
    WORKOUT_NOT_FOUND = "WORKOUT_NOT_FOUND"

    # Data/Database errors
    DATABASE_ERROR = "DATABASE_ERROR"


class FitnessTrainerError(Exception):
    """
    Base exception for all Fitness Trainer errors.

    Attributes:
        message: Text shown to the user
        code: ErrorCode for clients to branch on
        status_code: HTTP status the API responds with
        details: Extra context, omitted from the envelope when empty
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Envelope form, as sent by the API."""
        result: Dict[str, Any] = {
            "error": {
                "code": self.code.value,
                "message": self.message,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


# ============================================================================
# Validation Errors (400)
# ============================================================================

class ValidationError(FitnessTrainerError):
    """Input rejected by a service-level check.

    Request bodies are checked by pydantic first (422); this covers checks
    made again below the API, such as AuthService.hash_password refusing
    passwords bcrypt cannot hash.
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(
            message=message,
            code=ErrorCode.VALIDATION_ERROR,
            status_code=400,
            details=error_details,
        )


# ============================================================================
# Authentication / Authorization Errors (401 / 403)
# ============================================================================

class AuthError(FitnessTrainerError):
    """Raised on bad credentials or a missing, invalid or expired token."""

    def __init__(
        self,
        message: str = "Not authenticated",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.UNAUTHORIZED,
            status_code=401,
            details=details,
        )


class ForbiddenError(FitnessTrainerError):
    """Raised when a resource exists but the caller does not own it."""

    def __init__(
        self,
        message: str = "Not authorized",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.FORBIDDEN,
            status_code=403,
            details=details,
        )


# ============================================================================
# Not Found Errors (404)
# ============================================================================

class NotFoundError(FitnessTrainerError):
    """A resource with the given id does not exist."""

    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        message = f"{resource_type} not found"
        error_details = details or {}
        error_details["resource_type"] = resource_type
        error_details["resource_id"] = resource_id
        super().__init__(
            message=message,
            code=ErrorCode.NOT_FOUND,
            status_code=404,
            details=error_details,
        )


class WorkoutNotFoundError(NotFoundError):
    """No workout has this id."""

    def __init__(self, workout_id: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(
            resource_type="Workout",
            resource_id=workout_id,
            details=details,
        )
        self.code = ErrorCode.WORKOUT_NOT_FOUND


class UserNotFoundError(NotFoundError):
    """Raised when a user is not found."""

    def __init__(self, user_id: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(
            resource_type="User",
            resource_id=user_id,
            details=details,
        )
        self.code = ErrorCode.USER_NOT_FOUND


# ============================================================================
# Conflict Errors (409)
# ============================================================================

class ConflictError(FitnessTrainerError):
    """The request clashes with existing data."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.CONFLICT,
            status_code=409,
            details=details,
        )


class EmailAlreadyRegisteredError(ConflictError):
    """Raised when registering with an email that already has an account."""

    def __init__(self, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(
            message="An account with this email already exists",
            details=details,
        )
        self.code = ErrorCode.EMAIL_ALREADY_REGISTERED


# ============================================================================
# Server Errors (500)
# ============================================================================

class ServerError(FitnessTrainerError):
    """An unexpected failure.

    The API answers any exception that is not a FitnessTrainerError with a
    bare ServerError, so its message never carries internal details.
    DatabaseError narrows it for sqlite failures.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.INTERNAL_ERROR,
            status_code=500,
            details=details,
        )


class DatabaseError(ServerError):
    """Raised when a sqlite operation fails."""

    def __init__(
        self,
        message: str = "Database operation failed",
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if operation:
            error_details["operation"] = operation
        super().__init__(message=message, details=error_details)
        self.code = ErrorCode.DATABASE_ERROR
