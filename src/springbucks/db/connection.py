"""Opening the SQLite database used by the repositories."""

from __future__ import annotations

import sqlite3
from pathlib import Path

from ..domain.errors import StorageConnectionError
from ..logging_config import get_logger

MEMORY = ":memory:"


def connect(db_path: str | Path) -> sqlite3.Connection:
    """Open ``db_path`` with foreign keys enforced.

    Parent directories are created for file databases.

    Raises:
        StorageConnectionError: If the database cannot be opened.
    """
    logger = get_logger()
    target = str(db_path)
    try:
        if target != MEMORY:
            Path(target).parent.mkdir(parents=True, exist_ok=True)
        conn = sqlite3.connect(target)
        conn.execute("PRAGMA foreign_keys = ON;")
    except (sqlite3.OperationalError, OSError) as exc:
        logger.error("Failed to open database", extra={"db_path": target, "error": str(exc)})
        raise StorageConnectionError(f"Cannot open database {target}: {exc}") from exc
    logger.info("Database opened", extra={"db_path": target})
    return conn
