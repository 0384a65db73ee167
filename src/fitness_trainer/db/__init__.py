"""Persistence layer: SQLite document store and repositories."""

from .database import Database, get_default_db_path

__all__ = ["Database", "get_default_db_path"]
