"""Service layer handlers."""

from collections.abc import Callable
from typing import Any

from .account_handlers import COMMAND_HANDLERS as ACCOUNT_COMMAND_HANDLERS
from .task_handlers import COMMAND_HANDLERS as TASK_COMMAND_HANDLERS

__all__ = ["COMMAND_HANDLERS"]

COMMAND_HANDLERS: dict[type, Callable[..., Any]] = {
    **ACCOUNT_COMMAND_HANDLERS,
    **TASK_COMMAND_HANDLERS,
}
