"""Store factory functions for creating document store instances."""

import os
from pathlib import Path
from typing import Optional

from ecolage.store.sqlalchemy_store import SQLAlchemyDocumentStore

DB_PATH_ENV = "ECOLAGE_DB_PATH"


def create_sqlite_store(database_path: Optional[str] = None) -> SQLAlchemyDocumentStore:
    """Create a SQLite-backed document store.

    Args:
        database_path: Path to SQLite database file. If None, checks ECOLAGE_DB_PATH
            environment variable, then defaults to ~/.ecolage/ecolage.db

    Returns:
        SQLAlchemyDocumentStore instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get(DB_PATH_ENV)

    if database_path is None:
        db_dir = Path.home() / ".ecolage"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "ecolage.db")

    return SQLAlchemyDocumentStore(f"sqlite:///{database_path}")
