"""Database layer for fintrackr application."""

from fintrackr.database.base import Database
from fintrackr.database.factories import create_database, create_sqlite_database

__all__ = ["Database", "create_database", "create_sqlite_database"]
