"""Database engine factory.

Use `make_engine` whenever an Engine is needed so every connection is
configured the same way. On SQLite this matters for correctness, not just
speed: foreign keys (and therefore the cascades that remove a deleted
account's subscriptions) are only enforced with ``PRAGMA foreign_keys=ON``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, make_url
from sqlalchemy.pool import StaticPool

if TYPE_CHECKING:
    from sqlite3 import Connection as SQLiteConnection

    from sqlalchemy.engine import Engine

SQLITE_NAMES = {"sqlite", "sqlite+pysqlite"}


def is_sqlite(url: str | URL) -> bool:
    """Return True if the given SQLAlchemy URL or string corresponds to SQLite."""
    return make_url(str(url)).get_backend_name() in SQLITE_NAMES


def is_sqlite_memory(url: str | URL) -> bool:
    """Return True for an in-process SQLite database (no file on disk)."""
    u = make_url(str(url))
    return is_sqlite(u) and u.database in (None, "", ":memory:")


def make_engine(url: str | URL, *, echo: bool = False) -> Engine:
    """Create a SQLAlchemy Engine for the given URL.

    SQLite connections get these PRAGMAs:
        - ``foreign_keys=ON`` (enforce referential integrity and cascades)
        - ``journal_mode=WAL`` (write-ahead logging for concurrency)
        - ``synchronous=NORMAL`` (balanced durability)
        - ``temp_store=MEMORY`` (reduce temp file I/O)

    An in-memory SQLite URL is bound to a single shared connection so that
    every unit of work sees the same database.

    Args:
        url: Database connection URL (str or :class:`URL`).
        echo: If True, log SQL statements.

    Returns:
        Engine: Configured SQLAlchemy Engine.
    """
    kwargs: dict[str, Any] = {}
    if is_sqlite_memory(url):
        kwargs = {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}

    engine = create_engine(url, echo=echo, **kwargs)

    if is_sqlite(url):

        @event.listens_for(engine, "connect")
        def _sqlite_pragmas(dbapi_conn: SQLiteConnection, conn_record):  # type: ignore # pylint: disable=W0613
            cur = dbapi_conn.cursor()
            cur.execute("PRAGMA foreign_keys=ON;")
            cur.execute("PRAGMA journal_mode=WAL;")
            cur.execute("PRAGMA synchronous=NORMAL;")
            cur.execute("PRAGMA temp_store=MEMORY;")
            cur.close()

    return engine
