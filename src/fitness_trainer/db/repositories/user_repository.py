"""SQLite-backed repository for user accounts.

Provides creation, lookup and profile updates. Users are never deleted.
"""

import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .base import Repository

# Columns a profile update may write
PROFILE_FIELDS = ("name", "height", "weight", "fitness_goal")


@dataclass
class User:
    """User entity representing a registered account."""

    id: str
    name: str
    email: str
    password_hash: str
    height: Optional[float] = None
    weight: Optional[float] = None
    fitness_goal: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_public_dict(self) -> Dict[str, Any]:
        """Everything except the password hash."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "height": self.height,
            "weight": self.weight,
            "fitness_goal": self.fitness_goal,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


class UserRepository(Repository[User]):
    """SQLite-backed repository for User entities."""

    def _row_to_user(self, row: sqlite3.Row) -> User:
        """Convert a database row to a User entity."""
        return User(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            password_hash=row["password_hash"],
            height=row["height"],
            weight=row["weight"],
            fitness_goal=row["fitness_goal"],
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )

    def create_user(
        self,
        user_id: str,
        name: str,
        email: str,
        password_hash: str,
        height: Optional[float] = None,
        weight: Optional[float] = None,
        fitness_goal: Optional[str] = None,
    ) -> User:
        """
        Create a new user.

        Args:
            user_id: Unique identifier for the user
            name: Display name
            email: Email address (stored lower-cased, must be unique)
            password_hash: Bcrypt hash of the password
            height: Optional height in cm
            weight: Optional body weight in kg
            fitness_goal: Optional free-text goal

        Returns:
            The created User entity

        Raises:
            sqlite3.IntegrityError: If the email or id already exists
        """
        now = datetime.now(timezone.utc)
        email = email.lower()

        with self._get_connection() as conn:
            conn.execute("""
                INSERT INTO users
                (id, name, email, password_hash, height, weight,
                 fitness_goal, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """, (
                user_id,
                name,
                email,
                password_hash,
                height,
                weight,
                fitness_goal,
                now.isoformat(),
                now.isoformat(),
            ))

        return User(
            id=user_id,
            name=name,
            email=email,
            password_hash=password_hash,
            height=height,
            weight=weight,
            fitness_goal=fitness_goal,
            created_at=now,
            updated_at=now,
        )

    def get(self, entity_id: str) -> Optional[User]:
        """Retrieve a user by id."""
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM users WHERE id = ?",
                (entity_id,)
            ).fetchone()
            return self._row_to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        """Retrieve a user by email, ignoring case."""
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM users WHERE email = ?",
                (email.lower(),)
            ).fetchone()
            return self._row_to_user(row) if row else None

    def exists(self, entity_id: str) -> bool:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT 1 FROM users WHERE id = ?",
                (entity_id,)
            ).fetchone()
            return row is not None

    def email_exists(self, email: str) -> bool:
        """Check if an email address is already registered."""
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT 1 FROM users WHERE email = ?",
                (email.lower(),)
            ).fetchone()
            return row is not None

    def update_profile(self, user_id: str, fields: Dict[str, Any]) -> Optional[User]:
        """
        Update profile fields of an existing user.

        Only keys present in ``fields`` are written; unknown keys are ignored.

        Args:
            user_id: The user's unique identifier
            fields: Mapping of profile column to new value

        Returns:
            The updated User entity if found, None otherwise
        """
        updates = []
        params: list = []
        for column in PROFILE_FIELDS:
            if column in fields:
                updates.append(f"{column} = ?")
                params.append(fields[column])

        if not updates:
            return self.get(user_id)

        updates.append("updated_at = ?")
        params.append(datetime.now(timezone.utc).isoformat())
        params.append(user_id)

        query = f"UPDATE users SET {', '.join(updates)} WHERE id = ?"

        with self._get_connection() as conn:
            cursor = conn.execute(query, params)
            if cursor.rowcount == 0:
                return None

        return self.get(user_id)

    def count(self) -> int:
        """Count registered users."""
        with self._get_connection() as conn:
            row = conn.execute("SELECT COUNT(*) AS cnt FROM users").fetchone()
            return row["cnt"]
