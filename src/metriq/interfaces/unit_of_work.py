"""Unit of Work interface for METRIQ.

Defines the AbstractUnitOfWork contract: a context-managed unit of work
exposing the account and task stores, with abstract commit/rollback methods.
"""

from __future__ import annotations

import abc

from .account_store import AccountStore
from .task_store import TaskStore


class AbstractUnitOfWork(abc.ABC):
    """Contract for a transactional unit of work."""

    accounts: AccountStore
    tasks: TaskStore

    def __enter__(self) -> AbstractUnitOfWork:
        """Enter the unit of work context and return the unit.

        Implementations may acquire transactional resources here.
        """
        return self

    def __exit__(self, *args):
        """Exit the unit of work context.

        Default behavior is to roll back on exit; anything committed is kept.
        """
        self.rollback()

    @abc.abstractmethod
    def commit(self):
        """Persist changes and finalize the transaction."""

    @abc.abstractmethod
    def rollback(self):
        """Revert changes and clean up transactional resources."""
