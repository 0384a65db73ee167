"""
Client-side workout cache.

WorkoutStore holds the signed-in user's workouts and keeps them consistent
with the server through exactly three point mutations: append on create,
replace-by-id on update, remove-by-id on delete. The cache only changes
after the server confirms. A failed call leaves it untouched, records the
error and raises a notification.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from .api import ApiError
from .notifications import Notifier
from .session import AuthSession, validation_message
from ..models.workouts import Workout, WorkoutInput, WorkoutUpdate

logger = logging.getLogger(__name__)


class WorkoutStore:
    """Owned, explicitly passed cache of the current user's workouts."""

    def __init__(self, session: AuthSession, notifier: Optional[Notifier] = None):
        self.session = session
        self.notifier = notifier or session.notifier
        self._workouts: List[Workout] = []
        self.is_loading = False
        self.error: Optional[str] = None

    @property
    def workouts(self) -> List[Workout]:
        """A copy of the cached workouts; mutate through the store's methods."""
        return list(self._workouts)

    def find(self, workout_id: str) -> Optional[Workout]:
        """Look up a cached workout without a server round-trip."""
        for workout in self._workouts:
            if workout.id == workout_id:
                return workout
        return None

    def _require_session(self, action: str) -> bool:
        if self.session.is_authenticated:
            return True
        self._fail(f"You must be logged in to {action}")
        return False

    @contextmanager
    def _loading(self):
        self.is_loading = True
        self.error = None
        try:
            yield
        finally:
            self.is_loading = False

    def _fail(self, message: str) -> None:
        self.error = message
        self.notifier.error(message)

    def fetch_workouts(self) -> List[Workout]:
        """Replace the cache with the server's list (newest first)."""
        if not self._require_session("view workouts"):
            return []

        with self._loading():
            try:
                workouts = self.session.api.list_workouts()
            except ApiError as e:
                self._fail(e.message or "Failed to fetch workouts")
                return []
            self._workouts = workouts
            logger.debug(f"Cached {len(workouts)} workouts")

        return self.workouts

    def get_workout(self, workout_id: str) -> Optional[Workout]:
        """Fetch one workout from the server. The cache is not touched."""
        if not self._require_session("view workout details"):
            return None

        with self._loading():
            try:
                return self.session.api.get_workout(workout_id)
            except ApiError as e:
                self._fail(e.message or "Failed to fetch workout")
                return None

    def create_workout(self, data: Union[WorkoutInput, Dict[str, Any]]) -> Optional[Workout]:
        """Create on the server, then append the confirmed workout."""
        if not self._require_session("create a workout"):
            return None

        try:
            if not isinstance(data, WorkoutInput):
                data = WorkoutInput.model_validate(data)
        except PydanticValidationError as e:
            self._fail(validation_message(e))
            return None

        with self._loading():
            try:
                workout = self.session.api.create_workout(data)
            except ApiError as e:
                self._fail(e.message or "Failed to create workout")
                return None
            self._workouts.append(workout)

        self.notifier.success("Workout created successfully")
        return workout

    def update_workout(
        self,
        workout_id: str,
        data: Union[WorkoutUpdate, Dict[str, Any]],
    ) -> Optional[Workout]:
        """Update on the server, then replace the cached entry with that id."""
        if not self._require_session("update a workout"):
            return None

        try:
            if not isinstance(data, WorkoutUpdate):
                data = WorkoutUpdate.model_validate(data)
        except PydanticValidationError as e:
            self._fail(validation_message(e))
            return None

        with self._loading():
            try:
                updated = self.session.api.update_workout(workout_id, data)
            except ApiError as e:
                self._fail(e.message or "Failed to update workout")
                return None
            self._workouts = [
                updated if w.id == workout_id else w for w in self._workouts
            ]

        self.notifier.success("Workout updated successfully")
        return updated

    def delete_workout(self, workout_id: str) -> bool:
        """Delete on the server, then drop the cached entry with that id."""
        if not self._require_session("delete a workout"):
            return False

        with self._loading():
            try:
                self.session.api.delete_workout(workout_id)
            except ApiError as e:
                self._fail(e.message or "Failed to delete workout")
                return False
            self._workouts = [w for w in self._workouts if w.id != workout_id]

        self.notifier.success("Workout deleted successfully")
        return True

    def clear(self) -> None:
        """Forget cached workouts, e.g. after logout."""
        self._workouts = []
        self.error = None
