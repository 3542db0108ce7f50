"""Module defining Commands.

Every service operation, including reads, travels over the message bus as a
command so that all of them share one transaction and logging path.
"""

from dataclasses import dataclass, field

from metriq.interfaces.account_store import Account


@dataclass(frozen=True)
class Command:
    """Base class for all commands."""


# --- accounts ---


@dataclass(frozen=True)
class RegisterAccount(Command):
    """Create a new account."""

    username: str
    email: str
    password: str = field(repr=False)
    password_confirm: str = field(repr=False)


@dataclass(frozen=True)
class Authenticate(Command):
    """Check credentials; ``username`` may also be the account's e-mail address."""

    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class GetAccount(Command):
    """Load an account by id."""

    account_id: str


@dataclass(frozen=True)
class DeleteAccount(Command):
    """Remove an account and its follow relations."""

    account_id: str


@dataclass(frozen=True)
class SaveAccount(Command):
    """Persist a record produced by one of the `metriq.domain.account` commands.

    The record is written only if the stored account is still at the version
    it was derived from (``account.version - 1``).
    """

    account: Account = field(repr=False)


@dataclass(frozen=True)
class IssueClientToken(Command):
    """Generate and store a fresh client token."""

    account_id: str


@dataclass(frozen=True)
class GenerateRecovery(Command):
    """Attach a fresh password-recovery token to an account."""

    account_id: str


@dataclass(frozen=True)
class RedeemRecoveryToken(Command):
    """Set a new password using a pending recovery token."""

    username: str
    password: str = field(repr=False)
    password_confirm: str = field(repr=False)
    token: str = field(repr=False)


@dataclass(frozen=True)
class ChangePassword(Command):
    """Set a new password, proving knowledge of the current one."""

    account_id: str
    old_password: str = field(repr=False)
    password: str = field(repr=False)
    password_confirm: str = field(repr=False)


@dataclass(frozen=True)
class GetFollowedTasks(Command):
    """List the tasks an account subscribes to."""

    account_id: str


# --- tasks ---


@dataclass(frozen=True)
class SubmitTask(Command):
    """Create a task on behalf of a user."""

    user_id: str
    name: str
    full_name: str
    description: str


@dataclass(frozen=True)
class SubscribeToTask(Command):
    """Make a user follow a task."""

    task_id: str
    user_id: str


@dataclass(frozen=True)
class UnsubscribeFromTask(Command):
    """Make a user stop following a task."""

    task_id: str
    user_id: str


@dataclass(frozen=True)
class GetTask(Command):
    """Load a task by id."""

    task_id: str
