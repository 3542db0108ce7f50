"""METRIQ Task Store Interface Package"""

from .errors import InvalidTaskRecord, TaskAlreadyExists, TaskNotFound, TaskStoreError
from .task_store import Task, TaskRelationGateway, TaskStore

__all__ = [
    "InvalidTaskRecord",
    "Task",
    "TaskAlreadyExists",
    "TaskNotFound",
    "TaskRelationGateway",
    "TaskStore",
    "TaskStoreError",
]
