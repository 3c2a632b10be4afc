"""Database layer for forexledger application."""

from forexledger.database.base import Database
from forexledger.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
