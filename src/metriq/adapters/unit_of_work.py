"""Unit of Work implementations for METRIQ.

`SqlAlchemyUnitOfWork` opens a connection (and with it a transaction) per
``with`` block in each thread. `InMemoryUnitOfWork` serializes callers on
the shared data lock and restores a snapshot on rollback, giving tests the
same all-or-nothing behavior without a database.
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from metriq.adapters.accounts import InMemoryAccountStore, SqlAlchemyAccountStore
from metriq.adapters.memory_store import InMemoryStoreData
from metriq.adapters.tasks import InMemoryTaskStore, SqlAlchemyTaskStore
from metriq.interfaces.unit_of_work import AbstractUnitOfWork

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """SQLAlchemy-backed Unit of Work.

    One instance is shared by every handler of a message bus, and the bus
    may be called from several threads at once. The connection and the
    stores bound to it therefore live in thread-local state: each ``with``
    block works on its own connection and transaction.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self._local = threading.local()

    @property
    def connection(self) -> Connection:
        """The connection of the calling thread's current (or last) block."""
        return self._local.connection

    @property
    def accounts(self) -> SqlAlchemyAccountStore:  # type: ignore[override]
        return self._local.accounts

    @property
    def tasks(self) -> SqlAlchemyTaskStore:  # type: ignore[override]
        return self._local.tasks

    def __enter__(self):
        connection = self.engine.connect()
        self._local.connection = connection
        self._local.accounts = SqlAlchemyAccountStore(connection)
        self._local.tasks = SqlAlchemyTaskStore(connection)
        return super().__enter__()

    def __exit__(self, *args):
        try:
            super().__exit__(*args)
        finally:
            self.connection.close()

    def commit(self):
        self.connection.commit()

    def rollback(self):
        self.connection.rollback()


class InMemoryUnitOfWork(AbstractUnitOfWork):
    """Unit of Work over `InMemoryStoreData`.

    Holds the data lock for the whole ``with`` block, so units of work on the
    same data never interleave.
    """

    def __init__(self, data: InMemoryStoreData | None = None):
        self.data = data if data is not None else InMemoryStoreData()
        self.accounts = InMemoryAccountStore(self.data)
        self.tasks = InMemoryTaskStore(self.data)
        self._snapshot: InMemoryStoreData | None = None

    def __enter__(self):
        self.data.lock.acquire()
        self._snapshot = self.data.snapshot()
        return super().__enter__()

    def __exit__(self, *args):
        try:
            super().__exit__(*args)
        finally:
            self._snapshot = None
            self.data.lock.release()

    def commit(self):
        self._snapshot = self.data.snapshot()

    def rollback(self):
        if self._snapshot is not None:
            self.data.restore(self._snapshot)
