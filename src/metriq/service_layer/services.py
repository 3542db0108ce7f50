"""Service facades: the public contract of METRIQ.

Each method sends one command over the message bus and wraps the outcome in
a `Result`. Expected failures (any `DomainError`) become
``Result(success=False, body=ErrorInfo(...))``; unexpected exceptions, such
as an unreachable database, propagate unchanged.

Example:
    >>> app = bootstrap(uow=InMemoryUnitOfWork())
    >>> result = app.accounts.register("ada", "ada@example.com", pw, pw)
    >>> app.accounts.get_sanitized(result.body.id).body["password_hash"]
    '[REDACTED]'
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from metriq.domain.errors import DomainError
from metriq.domain.sanitizer import sanitize
from metriq.interfaces.account_store import Account
from metriq.interfaces.task_store import Task
from metriq.service_layer import commands
from metriq.service_layer.messagebus import MessageBus
from metriq.service_layer.results import AccountIdentity, Result


class _BusFacade:  # pylint: disable=too-few-public-methods
    def __init__(self, message_bus: MessageBus) -> None:
        self.message_bus = message_bus

    def _dispatch(
        self,
        cmd: commands.Command,
        present: Callable[[Any], Any] | None = None,
    ) -> Result:
        try:
            body = self.message_bus.handle(cmd)
        except DomainError as e:
            return Result.fail(e)
        return Result.ok(present(body) if present else body)


class UserAccountService(_BusFacade):
    """Registration, login, lookup, deletion and password recovery."""

    def register(
        self, username: str, email: str, password: str, password_confirm: str
    ) -> Result[Account]:
        """Create an account; the body is the stored (unsanitized) record."""
        return self._dispatch(
            commands.RegisterAccount(username, email, password, password_confirm)
        )

    def login(self, username: str, password: str) -> Result[AccountIdentity]:
        """Authenticate by username or e-mail address.

        Unknown user and wrong password produce the same failure result.
        """
        return self._dispatch(commands.Authenticate(username, password))

    def get(self, account_id: str) -> Result[Account]:
        """Return the raw stored account. For internal use only."""
        return self._dispatch(commands.GetAccount(account_id))

    def get_sanitized(self, account_id: str) -> Result[dict[str, Any]]:
        """Return the account as a dict with secrets masked."""
        return self._dispatch(commands.GetAccount(account_id), present=sanitize)

    @staticmethod
    def sanitize(account: Account) -> dict[str, Any]:
        """See `metriq.domain.sanitizer.sanitize`."""
        return sanitize(account)

    def delete(self, account_id: str) -> Result[None]:
        """Delete an account. Fails for unknown or already-deleted ids."""
        return self._dispatch(commands.DeleteAccount(account_id))

    def save(self, account: Account) -> Result[None]:
        """Persist a record returned by a `metriq.domain.account` command.

        Fails with a ``conflict`` error if the stored account changed since
        the record was derived from it.
        """
        return self._dispatch(commands.SaveAccount(account))

    def save_client_token_for_user_id(self, account_id: str) -> Result[None]:
        return self._dispatch(
            commands.IssueClientToken(account_id), present=lambda _: None
        )

    def generate_recovery(self, account_id: str) -> Result[Account]:
        """Issue a recovery token and return the updated (unsanitized) record."""
        return self._dispatch(commands.GenerateRecovery(account_id))

    def try_password_recovery_change(
        self, username: str, password: str, password_confirm: str, uuid: str
    ) -> Result[None]:
        """Reset a password with the recovery token ``uuid``.

        Fails, changing nothing, if the token is not the account's pending,
        unexpired one or the passwords are unacceptable.
        """
        return self._dispatch(
            commands.RedeemRecoveryToken(username, password, password_confirm, uuid)
        )

    def change_password(
        self,
        account_id: str,
        old_password: str,
        password: str,
        password_confirm: str,
    ) -> Result[None]:
        return self._dispatch(
            commands.ChangePassword(
                account_id, old_password, password, password_confirm
            )
        )

    def get_followed_tasks(self, account_id: str) -> Result[list[Task]]:
        """Tasks the account subscribes to, in subscription order."""
        return self._dispatch(commands.GetFollowedTasks(account_id))


class TaskService(_BusFacade):
    """Task submission and subscriptions."""

    def submit(
        self, user_id: str, name: str, full_name: str, description: str
    ) -> Result[Task]:
        return self._dispatch(
            commands.SubmitTask(user_id, name, full_name, description)
        )

    def subscribe(self, task_id: str, user_id: str) -> Result[None]:
        """Follow a task. Subscribing twice still succeeds."""
        return self._dispatch(commands.SubscribeToTask(task_id, user_id))

    def unsubscribe(self, task_id: str, user_id: str) -> Result[None]:
        return self._dispatch(commands.UnsubscribeFromTask(task_id, user_id))

    def get(self, task_id: str) -> Result[Task]:
        return self._dispatch(commands.GetTask(task_id))
