"""Handlers for submitting tasks and managing who follows them."""

import logging
from collections.abc import Callable
from typing import Any

from metriq.domain.errors import TaskNotFoundError, ValidationError
from metriq.interfaces.clock import Clock
from metriq.interfaces.id_generator import IdGenerator
from metriq.interfaces.task_store import Task, TaskNotFound
from metriq.interfaces.unit_of_work import AbstractUnitOfWork
from metriq.service_layer import commands

from .account_handlers import load_account

logger = logging.getLogger(__name__)


def submit_task(
    cmd: commands.SubmitTask,
    uow: AbstractUnitOfWork,
    id_generator: IdGenerator,
    clock: Clock,
) -> Task:
    """Create a task owned by ``cmd.user_id``."""
    if not cmd.name.strip():
        raise ValidationError("Task name must not be empty.")

    with uow:
        load_account(uow, cmd.user_id)
        task = Task(
            id=id_generator.new_id(),
            name=cmd.name,
            full_name=cmd.full_name,
            description=cmd.description,
            created_at=clock.now(),
            submitter_id=cmd.user_id,
        )
        uow.tasks.add(task)
        uow.commit()

    logger.info("Task %s submitted by account %s", task.id, cmd.user_id)
    return task


def subscribe_to_task(cmd: commands.SubscribeToTask, uow: AbstractUnitOfWork) -> None:
    """Idempotent: subscribing twice is not an error."""
    with uow:
        load_account(uow, cmd.user_id)
        try:
            created = uow.tasks.subscribe(cmd.task_id, cmd.user_id)
        except TaskNotFound as e:
            raise TaskNotFoundError(cmd.task_id) from e
        uow.commit()

    if not created:
        logger.debug("Account %s already follows task %s", cmd.user_id, cmd.task_id)


def unsubscribe_from_task(
    cmd: commands.UnsubscribeFromTask, uow: AbstractUnitOfWork
) -> None:
    with uow:
        load_account(uow, cmd.user_id)
        if uow.tasks.get(cmd.task_id) is None:
            raise TaskNotFoundError(cmd.task_id)
        if not uow.tasks.unsubscribe(cmd.task_id, cmd.user_id):
            logger.debug("Account %s did not follow task %s", cmd.user_id, cmd.task_id)
        uow.commit()


def get_task(cmd: commands.GetTask, uow: AbstractUnitOfWork) -> Task:
    with uow:
        if (task := uow.tasks.get(cmd.task_id)) is None:
            raise TaskNotFoundError(cmd.task_id)
        return task


COMMAND_HANDLERS: dict[type, Callable[..., Any]] = {
    commands.SubmitTask: submit_task,
    commands.SubscribeToTask: subscribe_to_task,
    commands.UnsubscribeFromTask: unsubscribe_from_task,
    commands.GetTask: get_task,
}
