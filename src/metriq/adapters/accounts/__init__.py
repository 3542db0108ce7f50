"""Account store adapters."""

from .memory import InMemoryAccountStore
from .sqlalchemy_store import SqlAlchemyAccountStore

__all__ = ["InMemoryAccountStore", "SqlAlchemyAccountStore"]
