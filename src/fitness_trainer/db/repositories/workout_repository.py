"""SQLite-backed repository for workout documents.

Each workout is one row; its exercises and target muscle groups are stored
as embedded JSON documents so a workout is always read and written whole.
Every query that reads or mutates on behalf of a user is scoped by
``user_id``.
"""

import json
import sqlite3
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from .base import Repository
from ...models.workouts import Difficulty, Exercise, Workout

# Workout fields that map onto a column, paired with the column name
_FIELD_COLUMNS = {
    "title": "title",
    "description": "description",
    "date": "date",
    "duration": "duration",
    "exercises": "exercises_json",
    "difficulty": "difficulty",
    "target_muscle_groups": "target_muscle_groups_json",
}


def _encode_exercises(exercises: List[Any]) -> str:
    """Serialize exercises given as models or plain dicts."""
    docs = []
    for exercise in exercises:
        if isinstance(exercise, Exercise):
            exercise = exercise.model_dump()
        docs.append(exercise)
    return json.dumps(docs)


def _encode_field(field: str, value: Any) -> Any:
    if field == "exercises":
        return _encode_exercises(value)
    if field == "target_muscle_groups":
        return json.dumps(list(value))
    if field == "date" and isinstance(value, date):
        return value.isoformat()
    if field == "difficulty" and isinstance(value, Difficulty):
        return value.value
    return value


class WorkoutRepository(Repository[Workout]):
    """SQLite-backed repository for Workout entities."""

    def _row_to_workout(self, row: sqlite3.Row) -> Workout:
        """Convert a database row to a Workout."""
        return Workout(
            id=row["id"],
            user_id=row["user_id"],
            title=row["title"],
            description=row["description"],
            date=date.fromisoformat(row["date"]),
            duration=row["duration"],
            exercises=[Exercise(**doc) for doc in json.loads(row["exercises_json"])],
            difficulty=Difficulty(row["difficulty"]),
            target_muscle_groups=json.loads(row["target_muscle_groups_json"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )

    def create(self, workout: Workout) -> Workout:
        """
        Insert a new workout document.

        Args:
            workout: The fully populated workout, owner and timestamps included

        Returns:
            The stored workout
        """
        with self._get_connection() as conn:
            conn.execute("""
                INSERT INTO workouts
                (id, user_id, title, description, date, duration,
                 exercises_json, difficulty, target_muscle_groups_json,
                 created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """, (
                workout.id,
                workout.user_id,
                workout.title,
                workout.description,
                workout.date.isoformat(),
                workout.duration,
                _encode_exercises(workout.exercises),
                workout.difficulty.value,
                json.dumps(workout.target_muscle_groups),
                workout.created_at.isoformat(),
                workout.updated_at.isoformat(),
            ))

        return workout

    def get(self, entity_id: str) -> Optional[Workout]:
        """
        Retrieve a workout by its ID regardless of owner.

        Ownership is decided by the caller so that "missing" and "not yours"
        can be told apart.
        """
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM workouts WHERE id = ?",
                (entity_id,)
            ).fetchone()
            return self._row_to_workout(row) if row else None

    def exists(self, entity_id: str) -> bool:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT 1 FROM workouts WHERE id = ?",
                (entity_id,)
            ).fetchone()
            return row is not None

    def list_by_user(self, user_id: str) -> List[Workout]:
        """
        Retrieve every workout owned by a user.

        Returns:
            Workouts ordered by creation time, newest first
        """
        with self._get_connection() as conn:
            rows = conn.execute("""
                SELECT * FROM workouts
                WHERE user_id = ?
                ORDER BY created_at DESC, rowid DESC
            """, (user_id,)).fetchall()
            return [self._row_to_workout(row) for row in rows]

    def count_by_user(self, user_id: str) -> int:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT COUNT(*) AS cnt FROM workouts WHERE user_id = ?",
                (user_id,)
            ).fetchone()
            return row["cnt"]

    def update(
        self,
        workout_id: str,
        user_id: str,
        fields: Dict[str, Any],
    ) -> Optional[Workout]:
        """
        Replace the given fields of a workout owned by ``user_id``.

        The write is conditional on both id and owner, so a workout that
        vanished or changed hands since the caller's ownership check is left
        untouched.

        Args:
            workout_id: The workout ID
            user_id: The expected owner
            fields: Mapping of workout field name to its new value

        Returns:
            The updated workout, or None if no row matched
        """
        updates = []
        params: list = []
        for field, column in _FIELD_COLUMNS.items():
            if field in fields:
                updates.append(f"{column} = ?")
                params.append(_encode_field(field, fields[field]))

        updates.append("updated_at = ?")
        params.append(datetime.now(timezone.utc).isoformat())
        params.extend([workout_id, user_id])

        query = f"UPDATE workouts SET {', '.join(updates)} WHERE id = ? AND user_id = ?"

        with self._get_connection() as conn:
            cursor = conn.execute(query, params)
            if cursor.rowcount == 0:
                return None

        return self.get(workout_id)

    def delete(self, workout_id: str, user_id: str) -> bool:
        """
        Delete a workout owned by ``user_id``.

        Returns:
            True if a row was removed, False otherwise
        """
        with self._get_connection() as conn:
            cursor = conn.execute(
                "DELETE FROM workouts WHERE id = ? AND user_id = ?",
                (workout_id, user_id)
            )
            return cursor.rowcount > 0
