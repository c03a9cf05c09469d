"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from expensetrack.database.sqlalchemy_db import SQLAlchemyDatabase

DB_PATH_ENV = "EXPENSETRACK_DB_PATH"


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file, or ":memory:" for an
            in-memory database. If None, checks EXPENSETRACK_DB_PATH
            environment variable, then defaults to ~/.expensetrack/expensetrack.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get(DB_PATH_ENV)

    if database_path is None:
        home = Path.home()
        db_dir = home / ".expensetrack"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "expensetrack.db")

    if database_path == ":memory:":
        return SQLAlchemyDatabase("sqlite://")

    database_url = f"sqlite:///{database_path}"
    return SQLAlchemyDatabase(database_url)
