"""Base repository interface.

Repositories wrap a shared Database and expose entity-level operations,
keeping SQL out of the service layer.
"""

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

from ..database import Database

# Type variable for the entity type stored in the repository
T = TypeVar("T")


class Repository(ABC, Generic[T]):
    """
    Abstract base class for SQLite repository implementations.

    Type Parameters:
        T: The type of entity stored in this repository
    """

    def __init__(self, database: Database):
        self.database = database

    def _get_connection(self):
        """Get a connection context manager from the shared database."""
        return self.database.connection()

    @abstractmethod
    def get(self, entity_id: str) -> Optional[T]:
        """
        Retrieve an entity by its ID.

        Args:
            entity_id: The unique identifier of the entity

        Returns:
            The entity if found, None otherwise
        """

    @abstractmethod
    def exists(self, entity_id: str) -> bool:
        """
        Check if an entity exists.

        Args:
            entity_id: The unique identifier of the entity

        Returns:
            True if the entity exists, False otherwise
        """
