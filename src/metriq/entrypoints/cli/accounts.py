"""METRIQ accounts CLI.

Thin wrappers over `UserAccountService`. Every command prints the result
envelope as JSON on stdout and exits with status 1 when ``success`` is
false. Account bodies are always sanitized before printing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click
import click_extra as clickx

from metriq.bootstrap import bootstrap
from metriq.service_layer.results import Result

from .db import get_checked_url
from .helpers import result_to_json, warn

if TYPE_CHECKING:
    from metriq.service_layer.services import UserAccountService


def _service() -> UserAccountService:
    return bootstrap(get_checked_url()).accounts


def _emit(result: Result) -> None:
    click.echo(result_to_json(result))
    if not result.success:
        raise click.exceptions.Exit(1)


@click.group(cls=clickx.ExtraGroup)
def accounts() -> None:
    """User account commands."""


@accounts.command()
@click.argument("username")
@click.argument("email")
@click.option("--password", prompt=True, hide_input=True, help="New password.")
@click.option(
    "--password-confirm",
    prompt="Repeat password",
    hide_input=True,
    help="The password again.",
)
def register(username: str, email: str, password: str, password_confirm: str) -> None:
    """Register a new account."""
    service = _service()
    result = service.register(username, email, password, password_confirm)
    if result.success:
        result = Result.ok(service.sanitize(result.body))
    _emit(result)


@accounts.command()
@click.argument("account_id")
def show(account_id: str) -> None:
    """Show an account with its password hash and client token redacted.

    A pending recovery token is printed in full and can reset the password
    until it expires.
    """
    _emit(_service().get_sanitized(account_id))


@accounts.command()
@click.argument("account_id")
@click.option("--force", is_flag=True, help="Delete without confirmation.")
def delete(account_id: str, force: bool) -> None:
    """Delete an account and its task subscriptions."""
    if not force:
        warn(f"This will permanently delete account {account_id}.")
        click.confirm("Are you sure you want to proceed?", abort=True, err=True)
    _emit(_service().delete(account_id))


@accounts.command("followed-tasks")
@click.argument("account_id")
def followed_tasks(account_id: str) -> None:
    """List the tasks an account follows."""
    _emit(_service().get_followed_tasks(account_id))
