"""
Client-side authentication state.

AuthSession owns the current token and user. It keeps the API client's
bearer token in step with them and reports outcomes through a Notifier.
Where the token is persisted between runs is up to the caller.
"""

from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from .api import ApiError, FitnessApiClient
from .notifications import Notifier
from ..models.users import ProfileUpdate, RegisterRequest, UserResponse


def validation_message(exc: PydanticValidationError) -> str:
    first = exc.errors()[0]
    field = ".".join(str(x) for x in first["loc"])
    return f"{field}: {first['msg']}" if field else first["msg"]


class AuthSession:
    """Authentication state shared by the client views."""

    def __init__(self, api: FitnessApiClient, notifier: Optional[Notifier] = None):
        self.api = api
        self.notifier = notifier or Notifier()
        self.user: Optional[UserResponse] = None
        self.is_loading = False
        self.error: Optional[str] = None

    @property
    def token(self) -> Optional[str]:
        return self.api.token

    @property
    def is_authenticated(self) -> bool:
        return self.api.token is not None

    def restore(self, token: str, user: Optional[UserResponse] = None) -> None:
        """Adopt a token obtained earlier, e.g. from the environment."""
        self.api.token = token
        self.user = user

    def _fail(self, message: str) -> None:
        self.error = message
        self.notifier.error(message)

    def login(self, email: str, password: str) -> bool:
        self.is_loading = True
        self.error = None
        try:
            result = self.api.login(email, password)
        except ApiError as e:
            self._fail(e.message or "Failed to login")
            return False
        finally:
            self.is_loading = False

        self.restore(result.token, result.user)
        self.notifier.success("Logged in successfully")
        return True

    def register(self, name: str, email: str, password: str, **profile: Any) -> bool:
        """Create an account and sign in with it.

        ``profile`` accepts the optional height, weight and fitness_goal.
        """
        try:
            request = RegisterRequest(name=name, email=email, password=password, **profile)
        except PydanticValidationError as e:
            self._fail(validation_message(e))
            return False

        self.is_loading = True
        self.error = None
        try:
            result = self.api.register(request)
        except ApiError as e:
            self._fail(e.message or "Registration failed")
            return False
        finally:
            self.is_loading = False

        self.restore(result.token, result.user)
        self.notifier.success("Registration successful!")
        return True

    def update_profile(self, **fields: Any) -> Optional[UserResponse]:
        if not self.is_authenticated:
            self.notifier.error("You must be logged in to update your profile")
            return None

        try:
            update = ProfileUpdate(**fields)
        except PydanticValidationError as e:
            self._fail(validation_message(e))
            return None

        self.is_loading = True
        self.error = None
        try:
            self.user = self.api.update_profile(update)
        except ApiError as e:
            self._fail(e.message or "Failed to update profile")
            return None
        finally:
            self.is_loading = False

        self.notifier.success("Profile updated successfully")
        return self.user

    def logout(self) -> None:
        self.api.token = None
        self.user = None
        self.error = None
        self.notifier.info("Logged out successfully")
