"""Interfaces for tasks and the users who follow them.

Tasks belong to a separate subsystem. The account service only reads the
follow relation through `TaskRelationGateway`; `TaskStore` adds the write
side (submitting tasks and managing subscriptions) used by the task service.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from datetime import datetime, timedelta

from .errors import InvalidTaskRecord


@dataclass(frozen=True, slots=True)
class Task:
    """Immutable summary of a task.

    `submitter_id` is ``None`` once the submitting account has been deleted.
    """

    id: str
    name: str
    full_name: str
    description: str
    created_at: datetime
    submitter_id: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise InvalidTaskRecord(self.id, "id must not be empty")
        if not self.name:
            raise InvalidTaskRecord(self.id, "name must not be empty")
        if self.created_at.tzinfo is None or self.created_at.utcoffset() != timedelta(
            0
        ):
            raise InvalidTaskRecord(self.id, "created_at must be timezone-aware UTC")


class TaskRelationGateway(abc.ABC):
    """Read-only view of which tasks a user follows."""

    @abc.abstractmethod
    def tasks_followed_by(self, user_id: str) -> list[Task]:
        """Return the tasks ``user_id`` subscribes to, in subscription order.

        Unknown users simply follow nothing; callers check account existence.
        """


class TaskStore(TaskRelationGateway):
    """Task persistence and subscription management."""

    @abc.abstractmethod
    def add(self, task: Task) -> None:
        """Insert a new task.

        Raises:
            TaskAlreadyExists: If the id is already in use.
        """

    @abc.abstractmethod
    def get(self, task_id: str) -> Task | None:
        """Return the task with the given id, or ``None`` if absent."""

    @abc.abstractmethod
    def subscribe(self, task_id: str, user_id: str) -> bool:
        """Record that ``user_id`` follows ``task_id``.

        Idempotent: subscribing twice keeps a single relation.

        Returns:
            bool: True if a new relation was created, False if it already existed.

        Raises:
            TaskNotFound: If the task does not exist.
        """

    @abc.abstractmethod
    def unsubscribe(self, task_id: str, user_id: str) -> bool:
        """Remove the follow relation.

        Returns:
            bool: True if a relation was removed, False if none existed.
        """
