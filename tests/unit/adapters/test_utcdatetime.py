"""Unit tests for `metriq.adapters.db.sa_types.UTCDateTime`.

Exercises the type decorator directly, without a database: values bound for
SQLite are naive UTC wall times, values bound for Postgres stay aware, and
everything read back is aware UTC.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import dialect as PostgresDialect
from sqlalchemy.dialects.sqlite import dialect as SQLiteDialect

from metriq.adapters.db.sa_types import UTCDateTime

NOON_UTC = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)
FIVE_AM_MINUS_7 = datetime(2025, 1, 1, 5, 0, tzinfo=timezone(timedelta(hours=-7)))


def test_python_type():
    assert UTCDateTime().python_type is datetime


@pytest.mark.parametrize(
    "dialect", [SQLiteDialect(), PostgresDialect()], ids=["sqlite", "postgres"]
)
def test_none_passes_through(dialect):
    utc = UTCDateTime()
    assert utc.process_bind_param(None, dialect) is None
    assert utc.process_result_value(None, dialect) is None


@pytest.mark.parametrize(
    "value", [NOON_UTC, FIVE_AM_MINUS_7, datetime(2025, 1, 1, 12, 0)]
)
def test_sqlite_binds_naive_utc(value):
    out = UTCDateTime().process_bind_param(value, SQLiteDialect())
    assert out == datetime(2025, 1, 1, 12, 0)
    assert out.tzinfo is None


@pytest.mark.parametrize(
    "value", [NOON_UTC, FIVE_AM_MINUS_7, datetime(2025, 1, 1, 12, 0)]
)
def test_postgres_binds_aware_utc(value):
    out = UTCDateTime().process_bind_param(value, PostgresDialect())
    assert out == NOON_UTC
    assert out.utcoffset() == timedelta(0)


@pytest.mark.parametrize(
    "stored", [datetime(2025, 1, 1, 12, 0), NOON_UTC, FIVE_AM_MINUS_7]
)
def test_results_are_aware_utc(stored):
    out = UTCDateTime().process_result_value(stored, SQLiteDialect())
    assert out == NOON_UTC
    assert out.tzinfo is timezone.utc


def test_result_non_datetime_is_returned_unchanged():
    assert UTCDateTime().process_result_value("garbage", SQLiteDialect()) == "garbage"


def test_literal_compile_sqlite_uses_utc_wall_time():
    stmt = sa.select(sa.literal(FIVE_AM_MINUS_7, type_=UTCDateTime()).label("dt"))
    sql = str(
        stmt.compile(dialect=SQLiteDialect(), compile_kwargs={"literal_binds": True})
    )
    assert "2025-01-01 12:00:00" in sql
