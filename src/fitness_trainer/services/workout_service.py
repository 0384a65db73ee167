"""
Workout service: ownership-checked CRUD over workout documents.

Every operation runs on behalf of a caller. Reads distinguish a missing
workout (NotFoundError) from one owned by someone else (ForbiddenError).
Writes re-assert ownership in the write itself, so a workout that
disappears between the check and the write is reported as not found
instead of being modified.
"""

import logging
import uuid
from datetime import date, datetime, timezone
from typing import List

from ..db.repositories.workout_repository import WorkoutRepository
from ..exceptions import ForbiddenError, WorkoutNotFoundError
from ..models.workouts import Workout, WorkoutInput, WorkoutUpdate

logger = logging.getLogger(__name__)


class WorkoutService:
    """Service for managing a user's workouts."""

    def __init__(self, workout_repository: WorkoutRepository):
        self._workouts = workout_repository

    def _get_owned(self, user_id: str, workout_id: str) -> Workout:
        """Fetch a workout and verify the caller owns it."""
        workout = self._workouts.get(workout_id)
        if workout is None:
            raise WorkoutNotFoundError(workout_id)
        if workout.user_id != user_id:
            logger.warning(f"User {user_id} denied access to workout {workout_id}")
            raise ForbiddenError()
        return workout

    def list_workouts(self, user_id: str) -> List[Workout]:
        """All workouts owned by the caller, newest first."""
        return self._workouts.list_by_user(user_id)

    def get_workout(self, user_id: str, workout_id: str) -> Workout:
        """
        Get a single workout.

        Raises:
            WorkoutNotFoundError: If no workout has this id
            ForbiddenError: If the workout belongs to another user
        """
        return self._get_owned(user_id, workout_id)

    def create_workout(self, user_id: str, data: WorkoutInput) -> Workout:
        """Create a workout owned by the caller."""
        now = datetime.now(timezone.utc)
        workout = Workout(
            id=uuid.uuid4().hex,
            user_id=user_id,
            title=data.title,
            description=data.description,
            date=data.date or date.today(),
            duration=data.duration,
            exercises=data.exercises,
            difficulty=data.difficulty,
            target_muscle_groups=data.target_muscle_groups,
            created_at=now,
            updated_at=now,
        )
        self._workouts.create(workout)

        logger.info(
            f"Created workout {workout.id} for user {user_id} "
            f"with {len(workout.exercises)} exercises"
        )
        return workout

    def update_workout(self, user_id: str, workout_id: str, data: WorkoutUpdate) -> Workout:
        """
        Replace the fields present in ``data``.

        Raises:
            WorkoutNotFoundError: If the workout does not exist (or vanished
                before the write)
            ForbiddenError: If the workout belongs to another user
        """
        self._get_owned(user_id, workout_id)

        fields = data.model_dump(exclude_unset=True)
        updated = self._workouts.update(workout_id, user_id, fields)
        if updated is None:
            raise WorkoutNotFoundError(workout_id)

        logger.info(f"Updated workout {workout_id}: {sorted(fields)}")
        return updated

    def delete_workout(self, user_id: str, workout_id: str) -> None:
        """
        Permanently delete a workout.

        Raises:
            WorkoutNotFoundError: If the workout does not exist
            ForbiddenError: If the workout belongs to another user
        """
        self._get_owned(user_id, workout_id)

        if not self._workouts.delete(workout_id, user_id):
            raise WorkoutNotFoundError(workout_id)

        logger.info(f"Deleted workout {workout_id}")
