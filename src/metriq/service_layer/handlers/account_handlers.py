"""Handlers for the account lifecycle, credentials and password recovery.

Store-level errors are translated into the domain taxonomy here, so nothing
above this module needs to know about `metriq.interfaces.account_store`
exceptions. Password hashing happens outside the unit of work where it can,
so a slow bcrypt round does not hold a transaction open.
"""

import logging
from collections.abc import Callable
from datetime import timedelta
from typing import Any

from metriq.domain import account as rules
from metriq.domain.errors import (
    AccountNotFoundError,
    AuthenticationError,
    ConcurrentUpdateError,
    EmailTakenError,
    InvalidTokenError,
    UsernameTakenError,
)
from metriq.interfaces.account_store import (
    Account,
    AccountNotFound,
    EmailAlreadyTaken,
    StaleAccountError,
    UsernameAlreadyTaken,
)
from metriq.interfaces.clock import Clock
from metriq.interfaces.id_generator import IdGenerator, TokenGenerator
from metriq.interfaces.password_hasher import PasswordHasher
from metriq.interfaces.task_store import Task
from metriq.interfaces.unit_of_work import AbstractUnitOfWork
from metriq.service_layer import commands
from metriq.service_layer.results import AccountIdentity

logger = logging.getLogger(__name__)


# --- helpers ---


def load_account(uow: AbstractUnitOfWork, account_id: str) -> Account:
    """Fetch an account inside an open unit of work.

    Raises:
        AccountNotFoundError: If there is no such account.
    """
    if (account := uow.accounts.get(account_id)) is None:
        raise AccountNotFoundError(account_id)
    return account


def _persist(uow: AbstractUnitOfWork, account: Account, expected_version: int) -> None:
    try:
        uow.accounts.save(account, expected_version)
    except AccountNotFound as e:
        raise AccountNotFoundError(account.id) from e
    except StaleAccountError as e:
        raise ConcurrentUpdateError(account.id) from e


# --- registration & login ---


def register_account(
    cmd: commands.RegisterAccount,
    uow: AbstractUnitOfWork,
    password_hasher: PasswordHasher,
    id_generator: IdGenerator,
    clock: Clock,
) -> Account:
    """Validate, hash and store a new account."""
    rules.validate_registration(
        cmd.username, cmd.email, cmd.password, cmd.password_confirm
    )
    account = rules.open_account(
        account_id=id_generator.new_id(),
        username=cmd.username,
        email=cmd.email,
        password_hash=password_hasher.hash(cmd.password),
        created_at=clock.now(),
    )

    with uow:
        try:
            uow.accounts.add(account)
        except UsernameAlreadyTaken as e:
            raise UsernameTakenError(cmd.username) from e
        except EmailAlreadyTaken as e:
            raise EmailTakenError(account.email) from e
        uow.commit()

    logger.info("Registered account %s (%s)", account.id, account.username)
    return account


def authenticate(
    cmd: commands.Authenticate,
    uow: AbstractUnitOfWork,
    password_hasher: PasswordHasher,
) -> AccountIdentity:
    """Check a username (or e-mail address) and password.

    Both failure paths raise the same `AuthenticationError`; only the DEBUG
    log says which one it was.
    """
    with uow:
        account = uow.accounts.get_by_username(cmd.username)
        if account is None:
            account = uow.accounts.get_by_email(cmd.username)

    if account is None:
        logger.debug("Login failed: no account matches %r", cmd.username)
        raise AuthenticationError
    if not password_hasher.verify(cmd.password, account.password_hash):
        logger.debug("Login failed: wrong password for account %s", account.id)
        raise AuthenticationError

    logger.debug("Login succeeded for account %s", account.id)
    return AccountIdentity(
        id=account.id, username=account.username, email=account.email
    )


# --- plain reads/writes ---


def get_account(cmd: commands.GetAccount, uow: AbstractUnitOfWork) -> Account:
    with uow:
        return load_account(uow, cmd.account_id)


def delete_account(cmd: commands.DeleteAccount, uow: AbstractUnitOfWork) -> None:
    """Remove an account; only the first deletion of an id succeeds."""
    with uow:
        if not uow.accounts.delete(cmd.account_id):
            raise AccountNotFoundError(cmd.account_id)
        uow.commit()
    logger.info("Deleted account %s", cmd.account_id)


def save_account(cmd: commands.SaveAccount, uow: AbstractUnitOfWork) -> None:
    with uow:
        _persist(uow, cmd.account, cmd.account.version - 1)
        uow.commit()


def issue_client_token(
    cmd: commands.IssueClientToken,
    uow: AbstractUnitOfWork,
    token_generator: TokenGenerator,
) -> Account:
    with uow:
        account = load_account(uow, cmd.account_id)
        updated = rules.issue_client_token(account, token_generator.new_token())
        _persist(uow, updated, account.version)
        uow.commit()
    logger.debug("Issued client token for account %s", cmd.account_id)
    return updated


# --- passwords & recovery ---


def generate_recovery(
    cmd: commands.GenerateRecovery,
    uow: AbstractUnitOfWork,
    token_generator: TokenGenerator,
    clock: Clock,
    recovery_token_ttl: timedelta,
) -> Account:
    """Attach a fresh recovery token; any previous one stops working."""
    with uow:
        account = load_account(uow, cmd.account_id)
        updated = rules.generate_recovery(
            account, token_generator.new_token(), clock.now() + recovery_token_ttl
        )
        _persist(uow, updated, account.version)
        uow.commit()
    logger.info("Generated recovery token for account %s", cmd.account_id)
    return updated


def redeem_recovery_token(
    cmd: commands.RedeemRecoveryToken,
    uow: AbstractUnitOfWork,
    password_hasher: PasswordHasher,
    clock: Clock,
) -> None:
    """Swap the password if the token is the account's pending one.

    The token check and the write happen in one unit of work, and the write
    is fenced on the version that was checked, so a token can be redeemed
    at most once.
    """
    rules.validate_new_password(cmd.password, cmd.password_confirm)
    new_hash = password_hasher.hash(cmd.password)

    with uow:
        if (account := uow.accounts.get_by_username(cmd.username)) is None:
            logger.debug("Recovery failed: no account matches %r", cmd.username)
            raise InvalidTokenError
        updated = rules.redeem_recovery(account, cmd.token, new_hash, clock.now())
        _persist(uow, updated, account.version)
        uow.commit()
    logger.info("Password reset via recovery token for account %s", account.id)


def change_password(
    cmd: commands.ChangePassword,
    uow: AbstractUnitOfWork,
    password_hasher: PasswordHasher,
) -> None:
    rules.validate_new_password(cmd.password, cmd.password_confirm)
    with uow:
        account = load_account(uow, cmd.account_id)
        if not password_hasher.verify(cmd.old_password, account.password_hash):
            logger.debug("Password change refused for account %s", account.id)
            raise AuthenticationError
        updated = rules.change_password(account, password_hasher.hash(cmd.password))
        _persist(uow, updated, account.version)
        uow.commit()
    logger.info("Password changed for account %s", cmd.account_id)


# --- followed tasks ---


def get_followed_tasks(
    cmd: commands.GetFollowedTasks, uow: AbstractUnitOfWork
) -> list[Task]:
    with uow:
        load_account(uow, cmd.account_id)
        return uow.tasks.tasks_followed_by(cmd.account_id)


COMMAND_HANDLERS: dict[type, Callable[..., Any]] = {
    commands.RegisterAccount: register_account,
    commands.Authenticate: authenticate,
    commands.GetAccount: get_account,
    commands.DeleteAccount: delete_account,
    commands.SaveAccount: save_account,
    commands.IssueClientToken: issue_client_token,
    commands.GenerateRecovery: generate_recovery,
    commands.RedeemRecoveryToken: redeem_recovery_token,
    commands.ChangePassword: change_password,
    commands.GetFollowedTasks: get_followed_tasks,
}
