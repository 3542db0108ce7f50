"""Dialect handling for the SQLAlchemy adapters.

Centralizes the supported backend names as an Enum so dialect checks are
type-safe, and builds the one dialect-specific statement the stores need:
an INSERT that silently skips rows violating a unique constraint.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

if TYPE_CHECKING:
    from sqlalchemy import Table
    from sqlalchemy.engine import Connection, Engine
    from sqlalchemy.sql.dml import Insert


class UnsupportedDialect(Exception):
    """Raised when an unsupported database dialect is encountered."""


class DialectName(str, Enum):
    """Supported SQLAlchemy dialect names.

    Attributes:
        POSTGRES: PostgreSQL dialect (``"postgresql"``).
        SQLITE:   SQLite dialect (``"sqlite"``).
    """

    POSTGRES = "postgresql"
    SQLITE = "sqlite"

    @classmethod
    def from_string(cls, dialect_str: str) -> DialectName:
        """Normalize an arbitrary dialect string.

        Accepts common aliases and driver-qualified names (e.g. 'postgres',
        'postgresql+psycopg', 'sqlite+pysqlite').

        Raises:
            UnsupportedDialect: if the dialect is not recognized.
        """
        base = (dialect_str or "").strip().lower().split("+", 1)[0]
        if base in {"postgres", "postgresql", "pg"}:
            return cls.POSTGRES
        if base == "sqlite":  # pylint: disable=magic-value-comparison
            return cls.SQLITE
        raise UnsupportedDialect(f"Unsupported dialect: {dialect_str!r}")

    @classmethod
    def from_sqlalchemy(cls, obj: Engine | Connection) -> DialectName:
        """Extract the dialect from a SQLAlchemy Engine or Connection.

        Raises:
            UnsupportedDialect: if the object has no dialect or it is unsupported.
        """
        try:
            name = obj.dialect.name
        except AttributeError as e:
            raise UnsupportedDialect(
                f"Object {type(obj).__name__} does not expose .dialect.name"
            ) from e
        return cls.from_string(name)


def insert_or_skip(
    dialect: DialectName, table: Table, values: dict[str, Any]
) -> Insert:
    """Build an INSERT that does nothing when any unique constraint conflicts.

    Callers inspect ``rowcount`` to learn whether the row was written and then
    read the authoritative rows to decide which conflict occurred.
    """
    if dialect is DialectName.POSTGRES:
        return pg_insert(table).values(**values).on_conflict_do_nothing()
    if dialect is DialectName.SQLITE:
        return sqlite_insert(table).values(**values).on_conflict_do_nothing()
    raise UnsupportedDialect(f"Unsupported dialect: {dialect!r}")  # pragma: no cover
