"""Base class for handler tests."""

from __future__ import annotations

from types import SimpleNamespace
from typing import TYPE_CHECKING

import pytest

from metriq.service_layer import commands
from tests.fixtures.datagen import STRONG_PASSWORD

from .fakes import make_dependencies

if TYPE_CHECKING:
    from metriq.interfaces.account_store import Account
    from metriq.service_layer.messagebus import MessageBus


class HandlerTestBase:
    """Base class for handler tests providing common setup and utilities."""

    bus: MessageBus

    # the fakes injected into the handlers (clock, hasher, ...)
    deps: SimpleNamespace

    @pytest.fixture(autouse=True)
    def _attach_bus(self, request, make_test_bus):
        """Fresh bus per test, seeded by `_seed_bus`."""
        dependencies = make_dependencies()
        self.deps = SimpleNamespace(**dependencies)
        self.bus = make_test_bus(dependencies)

        self._seed_bus(request)
        self.reset_committed()

    def _seed_bus(self, request) -> None:
        """Override to preload the bus. Use request.getfixturevalue(...) as needed."""

    # --- helpers ---

    def register(
        self,
        username: str = "ada",
        email: str | None = None,
        password: str = STRONG_PASSWORD,
    ) -> Account:
        """Register an account through the bus and return the stored record."""
        return self.bus.handle(
            commands.RegisterAccount(
                username, email or f"{username}@example.com", password, password
            )
        )

    def stored(self, account_id: str) -> Account | None:
        return self.bus.uow.accounts.get(account_id)

    def assert_committed(self) -> None:
        """Assert that the unit of work was committed."""
        assert hasattr(self.bus.uow, "committed")
        assert self.bus.uow.committed is True

    def assert_not_committed(self) -> None:
        """Assert that the unit of work was not committed."""
        assert hasattr(self.bus.uow, "committed")
        assert self.bus.uow.committed is False

    def reset_committed(self) -> None:
        """Reset the committed flag on the unit of work."""
        if hasattr(self.bus.uow, "committed"):
            self.bus.uow.committed = False
