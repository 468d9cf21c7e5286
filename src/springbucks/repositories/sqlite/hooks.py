"""Write hooks shared by the SQLite repositories."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterator, Optional

from ...domain.errors import ConstraintViolationError
from ...logging_config import get_logger

Clock = Callable[[], datetime]

_TICK = timedelta(microseconds=1)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def next_update_time(clock: Clock, previous: Optional[datetime]) -> datetime:
    """Return the clock reading, forced strictly past ``previous``."""
    now = clock()
    if previous is not None and now <= previous:
        now = previous + _TICK
    return now


def to_db_time(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def from_db_time(value: object) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        dt = datetime.fromisoformat(str(value))
    # Rows written by other tools may lack an offset; they are stored as UTC
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


@contextmanager
def constraint_errors(table: str) -> Iterator[None]:
    """Translate SQLite integrity failures into :class:`ConstraintViolationError`."""
    try:
        yield
    except sqlite3.IntegrityError as exc:
        get_logger().error("Constraint violation", extra={"table": table, "error": str(exc)})
        raise ConstraintViolationError(f"{table}: {exc}") from exc
