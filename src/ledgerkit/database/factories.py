"""Database factory functions for creating database instances."""

import logging
import os
from pathlib import Path
from typing import Optional

from ledgerkit.database.sqlalchemy_db import SQLAlchemyDatabase

logger = logging.getLogger(__name__)

DB_PATH_ENV = "LEDGERKIT_DB_PATH"
DEFAULT_DB_DIR = Path.home() / ".ledgerkit"
MEMORY_PATH = ":memory:"


def resolve_database_path(database_path: Optional[str] = None) -> str:
    """Pick the database location.

    Order: explicit argument, the LEDGERKIT_DB_PATH environment variable,
    then ~/.ledgerkit/ledgerkit.db (the directory is created on demand).
    """
    if database_path:
        return database_path
    from_env = os.environ.get(DB_PATH_ENV)
    if from_env:
        return from_env
    DEFAULT_DB_DIR.mkdir(parents=True, exist_ok=True)
    return str(DEFAULT_DB_DIR / "ledgerkit.db")


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to the SQLite file, or ":memory:" for a throwaway
            database. See resolve_database_path for the defaults.

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    path = resolve_database_path(database_path)
    if path == MEMORY_PATH:
        return create_memory_database()
    logger.debug("Using SQLite database at %s", path)
    return SQLAlchemyDatabase(f"sqlite:///{path}")


def create_memory_database() -> SQLAlchemyDatabase:
    """Create an in-memory SQLite database that lives as long as the instance."""
    return SQLAlchemyDatabase("sqlite://")
