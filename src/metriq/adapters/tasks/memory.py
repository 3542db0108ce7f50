"""In-memory TaskStore implementation for tests and demos."""

from metriq.adapters.memory_store import InMemoryStoreData
from metriq.interfaces.task_store import (
    Task,
    TaskAlreadyExists,
    TaskNotFound,
    TaskStore,
)


class InMemoryTaskStore(TaskStore):
    """TaskStore backed by a shared `InMemoryStoreData`."""

    def __init__(self, data: InMemoryStoreData | None = None):
        self._data = data if data is not None else InMemoryStoreData()

    def add(self, task: Task) -> None:
        with self._data.lock:
            if task.id in self._data.tasks:
                raise TaskAlreadyExists(task.id)
            self._data.tasks[task.id] = task

    def get(self, task_id: str) -> Task | None:
        return self._data.tasks.get(task_id)

    def subscribe(self, task_id: str, user_id: str) -> bool:
        with self._data.lock:
            if task_id not in self._data.tasks:
                raise TaskNotFound(task_id)
            if (task_id, user_id) in self._data.subscriptions:
                return False
            self._data.subscriptions.append((task_id, user_id))
            return True

    def unsubscribe(self, task_id: str, user_id: str) -> bool:
        with self._data.lock:
            try:
                self._data.subscriptions.remove((task_id, user_id))
            except ValueError:
                return False
            return True

    def tasks_followed_by(self, user_id: str) -> list[Task]:
        return [
            self._data.tasks[task_id]
            for task_id, follower in self._data.subscriptions
            if follower == user_id
        ]
