"""Default marks and shared store fixtures for tests under `tests/contract/`."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from metriq.adapters.accounts import InMemoryAccountStore, SqlAlchemyAccountStore
from metriq.adapters.memory_store import InMemoryStoreData
from metriq.adapters.tasks import InMemoryTaskStore, SqlAlchemyTaskStore

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from metriq.interfaces.account_store import AccountStore
    from metriq.interfaces.task_store import TaskStore

# pylint: disable=unused-argument

CONTRACT_ROOT = Path(__file__).parent.resolve()
MARKER_NAME = "contract"


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Add default `contract` marks to items in `tests/contract/`."""
    for item in items:
        path = item.path.resolve()  # pytest>=8: pathlib.Path
        if CONTRACT_ROOT in path.parents:
            if not any(marker.name == MARKER_NAME for marker in item.iter_markers()):
                item.add_marker(pytest.mark.contract)


@dataclass
class Stores:
    """An account store plus a task store sharing the same backend."""

    accounts: AccountStore
    tasks: TaskStore


def _sql_stores(engine: Engine) -> Iterator[Stores]:
    with engine.connect() as conn:
        yield Stores(SqlAlchemyAccountStore(conn), SqlAlchemyTaskStore(conn))
        conn.rollback()


@pytest.fixture(params=["memory", "sqlite_memory", "sqlite_file"])
def stores(request: pytest.FixtureRequest) -> Iterator[Stores]:
    """Yield account and task stores over one backend.

    Supported params:
      - `"memory"` → in-memory stores over a shared `InMemoryStoreData`
      - `"sqlite_memory"` → SQLAlchemy stores on a `create_all()` schema
      - `"sqlite_file"` → SQLAlchemy stores on an Alembic-migrated file

    SQL stores share one connection inside a transaction that is rolled back
    at teardown.
    """
    match request.param:
        case "memory":
            data = InMemoryStoreData()
            yield Stores(InMemoryAccountStore(data), InMemoryTaskStore(data))
        case "sqlite_memory":
            yield from _sql_stores(request.getfixturevalue("sqlite_engine_memory"))
        case "sqlite_file":
            yield from _sql_stores(request.getfixturevalue("sqlite_engine_file"))
        case _:
            raise ValueError(f"unknown store type: {request.param}")


@pytest.fixture
def account_store(stores: Stores) -> AccountStore:
    return stores.accounts


@pytest.fixture
def task_store(stores: Stores) -> TaskStore:
    return stores.tasks
