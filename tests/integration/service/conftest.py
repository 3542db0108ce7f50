"""Fixtures wiring the full application over each storage backend."""

from __future__ import annotations

import pytest

from metriq.adapters.clock import FixedClock
from metriq.adapters.password_hashers import BcryptPasswordHasher
from metriq.adapters.unit_of_work import InMemoryUnitOfWork, SqlAlchemyUnitOfWork
from metriq.bootstrap import AppContainer, bootstrap
from tests.fixtures.datagen import STRONG_PASSWORD, T0

# pylint: disable=redefined-outer-name


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(T0)


@pytest.fixture(params=["memory", "sqlite"])
def app(request, clock) -> AppContainer:
    """The application over an in-memory store or a migrated SQLite file."""
    match request.param:
        case "memory":
            uow = InMemoryUnitOfWork()
        case "sqlite":
            uow = SqlAlchemyUnitOfWork(request.getfixturevalue("sqlite_engine_file"))
        case _:
            raise ValueError(f"unknown backend: {request.param}")
    return bootstrap(
        uow=uow,
        password_hasher=BcryptPasswordHasher(rounds=4),
        clock=clock,
    )


@pytest.fixture
def register(app):
    """Register an account through the service and return its record."""

    def _register(username="ada", email=None, password=STRONG_PASSWORD):
        result = app.accounts.register(
            username, email or f"{username}@example.com", password, password
        )
        assert result.success, result.body
        return result.body

    return _register
