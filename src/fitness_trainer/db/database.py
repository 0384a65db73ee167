"""SQLite-backed document store for users and workouts."""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Optional, Union

from .schema import SCHEMA
from ..exceptions import DatabaseError

logger = logging.getLogger(__name__)


def get_default_db_path() -> Path:
    """Get the default database path."""
    # Check environment variable first
    env_path = os.environ.get("DATABASE_PATH")
    if env_path:
        return Path(env_path)

    from ..config import get_settings
    return get_settings().database_path


class Database:
    """SQLite database manager.

    Owns the schema and hands out short-lived connections. Each connection
    commits on success and rolls back on error; nothing is shared between
    calls, so a single instance can serve concurrent requests.
    """

    def __init__(self, db_path: Optional[Union[str, Path]] = None):
        """
        Initialize the database.

        Args:
            db_path: Path to SQLite database file. If not provided,
                     uses DATABASE_PATH env var or the configured default.
        """
        if db_path:
            self.db_path = Path(db_path)
        else:
            self.db_path = get_default_db_path()

        self._init_db()

    def _init_db(self):
        """Initialize database tables."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        with self.connection() as conn:
            conn.executescript(SCHEMA)
        logger.debug(f"Database ready at {self.db_path}")

    @contextmanager
    def connection(self):
        """Get database connection with context manager.

        Integrity violations propagate unchanged so callers can map them to
        domain conflicts; any other sqlite failure becomes a DatabaseError.
        """
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        try:
            yield conn
            conn.commit()
        except sqlite3.IntegrityError:
            conn.rollback()
            raise
        except sqlite3.Error as e:
            conn.rollback()
            logger.error(f"Database error: {e}")
            raise DatabaseError(str(e)) from e
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()
