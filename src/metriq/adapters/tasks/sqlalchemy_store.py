"""TaskStore implementation using SQLAlchemy Core."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import delete, select

from metriq.adapters.db.dialects import DialectName, insert_or_skip
from metriq.interfaces.task_store import (
    Task,
    TaskAlreadyExists,
    TaskNotFound,
    TaskStore,
)

from .schema import task_subscriptions, tasks

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Row


class SqlAlchemyTaskStore(TaskStore):
    """TaskStore implementation that supports both Postgres and SQLite."""

    def __init__(self, connection: Connection):
        self.connection = connection
        self.dialect = DialectName.from_sqlalchemy(connection)

    def add(self, task: Task) -> None:
        stmt = insert_or_skip(
            self.dialect,
            tasks,
            {
                "id": task.id,
                "name": task.name,
                "full_name": task.full_name,
                "description": task.description,
                "submitter_id": task.submitter_id,
                "created_at": task.created_at,
            },
        )
        if self.connection.execute(stmt).rowcount != 1:
            raise TaskAlreadyExists(task.id)

    def get(self, task_id: str) -> Task | None:
        stmt = select(tasks).where(tasks.c.id == task_id)
        if not (row := self.connection.execute(stmt).first()):
            return None
        return _to_task(row)

    # --- subscriptions ---

    def subscribe(self, task_id: str, user_id: str) -> bool:
        if self.get(task_id) is None:
            raise TaskNotFound(task_id)
        stmt = insert_or_skip(
            self.dialect,
            task_subscriptions,
            {"task_id": task_id, "user_id": user_id},
        )
        return self.connection.execute(stmt).rowcount == 1

    def unsubscribe(self, task_id: str, user_id: str) -> bool:
        result = self.connection.execute(
            delete(task_subscriptions).where(
                task_subscriptions.c.task_id == task_id,
                task_subscriptions.c.user_id == user_id,
            )
        )
        return result.rowcount == 1

    def tasks_followed_by(self, user_id: str) -> list[Task]:
        stmt = (
            select(tasks)
            .join(task_subscriptions, task_subscriptions.c.task_id == tasks.c.id)
            .where(task_subscriptions.c.user_id == user_id)
            .order_by(task_subscriptions.c.seq)
        )
        return [_to_task(row) for row in self.connection.execute(stmt)]


def _to_task(row: Row) -> Task:
    return Task(
        id=row.id,
        name=row.name,
        full_name=row.full_name,
        description=row.description,
        created_at=row.created_at,
        submitter_id=row.submitter_id,
    )
