"""Task store adapters."""

from .memory import InMemoryTaskStore
from .sqlalchemy_store import SqlAlchemyTaskStore

__all__ = ["InMemoryTaskStore", "SqlAlchemyTaskStore"]
