"""Database error classification."""

from __future__ import annotations

from django.db import OperationalError  # type: ignore

# PostgreSQL lock_not_available, raised when lock_timeout expires
PG_LOCK_NOT_AVAILABLE = "55P03"

SQLITE_BUSY_MESSAGES = ("database is locked", "database table is locked")


def is_lock_timeout(exc: OperationalError) -> bool:
    """True when the error is a bounded row/table lock wait running out."""
    cause = exc.__cause__
    sqlstate = getattr(cause, "sqlstate", None) or getattr(cause, "pgcode", None)
    if sqlstate == PG_LOCK_NOT_AVAILABLE:
        return True
    message = str(cause or exc).lower()
    return any(text in message for text in SQLITE_BUSY_MESSAGES)
