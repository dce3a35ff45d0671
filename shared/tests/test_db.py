"""Tests for lock-timeout classification of database errors."""

import sqlite3

from django.db import OperationalError

from shared.infrastructure.db import is_lock_timeout


class PgError(Exception):
    def __init__(self, message, sqlstate):
        super().__init__(message)
        self.sqlstate = sqlstate


def wrapped(cause):
    exc = OperationalError(str(cause))
    exc.__cause__ = cause
    return exc


def test_postgres_lock_not_available():
    assert is_lock_timeout(wrapped(PgError("canceling statement due to lock timeout", "55P03")))


def test_postgres_other_errors():
    assert not is_lock_timeout(wrapped(PgError("terminating connection", "57P01")))


def test_sqlite_busy():
    assert is_lock_timeout(wrapped(sqlite3.OperationalError("database is locked")))


def test_sqlite_missing_table():
    assert not is_lock_timeout(wrapped(sqlite3.OperationalError("no such table: bookings_booking")))
