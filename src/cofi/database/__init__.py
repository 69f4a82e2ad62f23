"""Ledger storage for cofi."""

from cofi.database.base import Database
from cofi.database.factories import create_sqlite_database, default_database_path

__all__ = ["Database", "create_sqlite_database", "default_database_path"]
