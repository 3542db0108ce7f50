"""Exceptions for task store operations."""


class TaskStoreError(Exception):
    """Base class for task store errors."""


class InvalidTaskRecord(TaskStoreError, ValueError):
    """A task record violates a structural invariant."""

    def __init__(self, task_id: str, reason: str):
        super().__init__(f"Invalid task record '{task_id}': {reason}")
        self.task_id = task_id
        self.reason = reason


class TaskNotFound(TaskStoreError):
    """No task exists with the given id."""

    def __init__(self, task_id: str):
        super().__init__(f"Task '{task_id}' does not exist.")
        self.task_id = task_id


class TaskAlreadyExists(TaskStoreError):
    """Conflict: a task with this id is already stored."""

    def __init__(self, task_id: str):
        super().__init__(f"Task '{task_id}' already exists.")
        self.task_id = task_id
