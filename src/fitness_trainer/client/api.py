"""
HTTP client for the Fitness Trainer API.

Thin httpx wrapper with one method per endpoint. Responses are parsed into
the same pydantic models the server uses; any non-2xx response or transport
failure is raised as ApiError carrying the server's error message.
"""

import logging
from typing import Any, Dict, List, Optional, Union

import httpx

from ..models.users import AuthResponse, ProfileUpdate, RegisterRequest, UserResponse
from ..models.workouts import Workout, WorkoutInput, WorkoutUpdate

logger = logging.getLogger(__name__)

NETWORK_ERROR = "NETWORK_ERROR"


class ApiError(Exception):
    """Raised when an API call fails.

    Attributes:
        status_code: HTTP status, or 0 when the server could not be reached
        code: Error code from the response envelope, if any
        message: Human-readable message suitable for showing to the user
    """

    def __init__(self, status_code: int, message: str, code: Optional[str] = None):
        self.status_code = status_code
        self.code = code
        self.message = message
        super().__init__(message)

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        """Build an ApiError from an error envelope, tolerating non-JSON bodies."""
        code = None
        message = f"Request failed with status {response.status_code}"
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            error = body.get("error")
            if isinstance(error, dict):
                code = error.get("code")
                message = error.get("message") or message
            elif body.get("message"):
                message = body["message"]
            elif body.get("detail"):
                message = str(body["detail"])

        return cls(response.status_code, message, code)

    @property
    def is_auth_error(self) -> bool:
        return self.status_code == 401

    def __repr__(self) -> str:
        return f"ApiError(status_code={self.status_code}, code={self.code!r}, message={self.message!r})"


class FitnessApiClient:
    """Client for the Fitness Trainer REST API.

    Args:
        base_url: Server root, e.g. ``http://localhost:8000``. Ignored when
            ``http_client`` is given.
        token: Optional bearer token sent with every request.
        http_client: Pre-configured httpx client (e.g. a FastAPI TestClient).
        timeout: Request timeout in seconds for the client created here.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        http_client: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ):
        if http_client is None:
            if base_url is None:
                from ..config import get_settings
                base_url = get_settings().api_base_url
            http_client = httpx.Client(base_url=base_url, timeout=timeout)
        self._http = http_client
        self.token = token

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "FitnessApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _request(self, method: str, path: str, json: Any = None) -> Any:
        try:
            response = self._http.request(method, path, json=json, headers=self._headers())
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise ApiError(0, "Could not reach the server", NETWORK_ERROR) from e

        if response.is_error:
            error = ApiError.from_response(response)
            logger.debug(f"{method} {path} -> {response.status_code}: {error.message}")
            raise error

        return response.json()

    # ------------------------------------------------------------------
    # Auth & profile
    # ------------------------------------------------------------------

    def register(self, request: RegisterRequest) -> AuthResponse:
        body = request.model_dump(mode="json", by_alias=True, exclude_none=True)
        return AuthResponse.model_validate(self._request("POST", "/api/auth/register", body))

    def login(self, email: str, password: str) -> AuthResponse:
        body = {"email": email, "password": password}
        return AuthResponse.model_validate(self._request("POST", "/api/auth/login", body))

    def get_me(self) -> UserResponse:
        return UserResponse.model_validate(self._request("GET", "/api/auth/me"))

    def get_profile(self) -> UserResponse:
        return UserResponse.model_validate(self._request("GET", "/api/users/profile"))

    def update_profile(self, update: ProfileUpdate) -> UserResponse:
        body = update.model_dump(mode="json", by_alias=True, exclude_unset=True)
        return UserResponse.model_validate(self._request("PUT", "/api/users/profile", body))

    # ------------------------------------------------------------------
    # Workouts
    # ------------------------------------------------------------------

    def list_workouts(self) -> List[Workout]:
        return [Workout.model_validate(item) for item in self._request("GET", "/api/workouts")]

    def get_workout(self, workout_id: str) -> Workout:
        return Workout.model_validate(self._request("GET", f"/api/workouts/{workout_id}"))

    def create_workout(self, workout: Union[WorkoutInput, Dict[str, Any]]) -> Workout:
        if isinstance(workout, WorkoutInput):
            workout = workout.model_dump(mode="json", by_alias=True, exclude_none=True)
        return Workout.model_validate(self._request("POST", "/api/workouts", workout))

    def update_workout(
        self,
        workout_id: str,
        update: Union[WorkoutUpdate, Dict[str, Any]],
    ) -> Workout:
        if isinstance(update, WorkoutUpdate):
            update = update.model_dump(mode="json", by_alias=True, exclude_unset=True)
        return Workout.model_validate(self._request("PUT", f"/api/workouts/{workout_id}", update))

    def delete_workout(self, workout_id: str) -> None:
        self._request("DELETE", f"/api/workouts/{workout_id}")
