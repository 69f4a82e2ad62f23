"""Ledger store construction."""

import os
from pathlib import Path
from typing import Optional

from cofi.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV = "COFI_DB_PATH"


def default_database_path() -> Path:
    """Location of the household ledger when no path is given.

    Uses COFI_DB_PATH if set, otherwise ~/.cofi/cofi.db.
    """
    env_path = os.environ.get(DB_PATH_ENV)
    if env_path:
        return Path(env_path)
    return Path.home() / ".cofi" / "cofi.db"


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Open the household ledger stored in a SQLite file.

    The parent directory is created if needed, so a fresh household can
    start from an empty path.
    """
    path = Path(database_path) if database_path else default_database_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    return SQLAlchemyDatabase(f"sqlite:///{path}")
