"""Bootstrap the message bus with handlers, unit of work and adapters."""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING, Any

from metriq import config
from metriq.adapters.clock import SystemClock
from metriq.adapters.db.engine import make_engine
from metriq.adapters.id_generators import SecretTokenGenerator, ULIDGenerator
from metriq.adapters.password_hashers import BcryptPasswordHasher
from metriq.adapters.unit_of_work import SqlAlchemyUnitOfWork
from metriq.service_layer.handlers import COMMAND_HANDLERS
from metriq.service_layer.messagebus import MessageBus
from metriq.service_layer.services import TaskService, UserAccountService

if TYPE_CHECKING:
    from metriq.interfaces.clock import Clock
    from metriq.interfaces.id_generator import IdGenerator, TokenGenerator
    from metriq.interfaces.password_hasher import PasswordHasher
    from metriq.interfaces.unit_of_work import AbstractUnitOfWork
    from metriq.service_layer.commands import Command


@dataclass(frozen=True)
class AppContainer:
    """The wired application."""

    message_bus: MessageBus
    accounts: UserAccountService
    tasks: TaskService


def build_write_uow(url: str) -> AbstractUnitOfWork:
    """Build a new SQL-backed unit of work."""
    return SqlAlchemyUnitOfWork(make_engine(url))


def build_message_bus(
    uow: AbstractUnitOfWork,
    command_handlers: dict[type[Command], Callable[..., Any]],
    dependencies: Mapping[str, object] | None = None,
) -> MessageBus:
    """Build a message bus with injected dependencies.

    ``uow`` is always offered to handlers; ``dependencies`` adds the rest.
    """
    deps = {"uow": uow, **(dependencies or {})}
    injected_command_handlers = {
        command_type: inject_dependencies(handler, deps)
        for command_type, handler in command_handlers.items()
    }
    return MessageBus(uow, command_handlers=injected_command_handlers)


def bootstrap(  # pylint: disable=too-many-arguments
    db_url: str | None = None,
    *,
    uow: AbstractUnitOfWork | None = None,
    password_hasher: PasswordHasher | None = None,
    id_generator: IdGenerator | None = None,
    token_generator: TokenGenerator | None = None,
    clock: Clock | None = None,
    recovery_token_ttl: timedelta | None = None,
) -> AppContainer:
    """Wire the application.

    Anything not passed in comes from configuration: a SQL unit of work on
    ``db_url`` (or ``METRIQ_DB_URL``), a bcrypt hasher with the configured
    cost, ULID ids, `secrets`-based tokens, the system clock and the
    configured recovery-token lifetime.

    Args:
        db_url: Database URL; ignored when ``uow`` is given.
        uow: Unit of work to use instead of a SQL one (e.g. in-memory).
        password_hasher: Overrides the bcrypt hasher.
        id_generator: Overrides the ULID generator.
        token_generator: Overrides the client/recovery token generator.
        clock: Overrides the system clock.
        recovery_token_ttl: Overrides the configured token lifetime.

    Raises:
        DatabaseUrlNotSetError: If a SQL unit of work is needed and no URL is
            available.
    """
    if uow is None:
        uow = build_write_uow(db_url or config.get_db_url())

    dependencies = {
        "password_hasher": password_hasher
        or BcryptPasswordHasher(rounds=config.get_bcrypt_rounds()),
        "id_generator": id_generator or ULIDGenerator(),
        "token_generator": token_generator or SecretTokenGenerator(),
        "clock": clock or SystemClock(),
        "recovery_token_ttl": recovery_token_ttl or config.get_recovery_token_ttl(),
    }
    message_bus = build_message_bus(uow, COMMAND_HANDLERS, dependencies)

    return AppContainer(
        message_bus=message_bus,
        accounts=UserAccountService(message_bus),
        tasks=TaskService(message_bus),
    )


def inject_dependencies(
    handler: Callable, dependencies: Mapping[str, object]
) -> Callable:
    """Bind the dependencies a handler asks for by parameter name."""
    params = inspect.signature(handler).parameters
    deps = {
        name: dependency for name, dependency in dependencies.items() if name in params
    }
    return functools.partial(handler, **deps)
