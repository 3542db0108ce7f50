"""Functional tests for the ``metriq accounts`` subcommands.

An operator registers, inspects and deletes accounts from the terminal. Every
command prints a JSON result envelope on stdout; secrets never appear in it.
"""

import json

import pytest
from click.testing import CliRunner

from metriq.domain.sanitizer import REDACTED
from metriq.entrypoints.cli.db import MISSING_DB_URL_MSG
from metriq.entrypoints.cli.main import metriq as metriq_cli
from tests.fixtures.datagen import STRONG_PASSWORD

# pylint: disable=redefined-outer-name
# pylint: disable=magic-value-comparison


@pytest.fixture
def migrated(runner):
    result = runner.invoke(metriq_cli, ["db", "upgrade", "--force"])
    assert result.exit_code == 0, result.output
    return runner


def _register(runner, username="ada", email="ada@example.com", **kwargs):
    return runner.invoke(
        metriq_cli,
        [
            "accounts",
            "register",
            username,
            email,
            "--password",
            STRONG_PASSWORD,
            "--password-confirm",
            STRONG_PASSWORD,
        ],
        **kwargs,
    )


def _envelope(result) -> dict:
    return json.loads(result.stdout)


def test_register_show_and_delete(migrated):
    # The operator registers a new account.
    result = _register(migrated)
    assert result.exit_code == 0, result.output
    envelope = _envelope(result)
    assert envelope["success"] is True
    account = envelope["body"]
    assert account["username"] == "ada"
    assert account["email"] == "ada@example.com"
    assert account["password_hash"] == REDACTED
    assert STRONG_PASSWORD not in result.output

    # They look it up by id; secrets stay hidden.
    result = migrated.invoke(metriq_cli, ["accounts", "show", account["id"]])
    assert result.exit_code == 0, result.output
    shown = _envelope(result)["body"]
    assert shown["id"] == account["id"]
    assert shown["password_hash"] == REDACTED
    assert shown["client_token"] == REDACTED
    assert shown["created_at"] == account["created_at"]

    # A fresh account follows nothing.
    result = migrated.invoke(
        metriq_cli, ["accounts", "followed-tasks", account["id"]]
    )
    assert result.exit_code == 0, result.output
    assert _envelope(result) == {"success": True, "body": []}

    # They delete it without a prompt.
    result = migrated.invoke(
        metriq_cli, ["accounts", "delete", account["id"], "--force"]
    )
    assert result.exit_code == 0, result.output
    assert _envelope(result) == {"success": True, "body": None}

    # Looking it up again fails with a not_found envelope.
    result = migrated.invoke(metriq_cli, ["accounts", "show", account["id"]])
    assert result.exit_code == 1
    envelope = _envelope(result)
    assert envelope["success"] is False
    assert envelope["body"]["code"] == "not_found"


def test_register_prompts_for_password(migrated):
    result = migrated.invoke(
        metriq_cli,
        ["accounts", "register", "ada", "ada@example.com"],
        input=f"{STRONG_PASSWORD}\n{STRONG_PASSWORD}\n",
    )
    assert result.exit_code == 0, result.output
    assert _envelope(result)["success"] is True


def test_duplicate_registration_fails(migrated):
    assert _register(migrated).exit_code == 0

    result = _register(migrated, username="ADA", email="other@example.com")

    assert result.exit_code == 1
    assert _envelope(result)["body"]["code"] == "conflict"


def test_weak_password_is_rejected(migrated):
    result = migrated.invoke(
        metriq_cli,
        [
            "accounts",
            "register",
            "ada",
            "ada@example.com",
            "--password",
            "short",
            "--password-confirm",
            "short",
        ],
    )
    assert result.exit_code == 1
    assert _envelope(result)["body"]["code"] == "validation_error"


def test_delete_asks_for_confirmation(migrated):
    account_id = _envelope(_register(migrated))["body"]["id"]

    result = migrated.invoke(
        metriq_cli, ["accounts", "delete", account_id], input="n\n"
    )
    assert result.exit_code == 1
    assert "permanently delete" in result.output

    result = migrated.invoke(metriq_cli, ["accounts", "show", account_id])
    assert result.exit_code == 0


def test_delete_unknown_account(migrated):
    result = migrated.invoke(metriq_cli, ["accounts", "delete", "1000", "--force"])
    assert result.exit_code == 1
    assert _envelope(result)["body"]["code"] == "not_found"


def test_accounts_need_a_database_url(tmp_path):
    runner = CliRunner(
        env={"METRIQ_DB_URL": "", "METRIQ_LOG_PATH": str(tmp_path / "latest.log")}
    )
    result = runner.invoke(metriq_cli, ["accounts", "show", "1000"])
    assert result.exit_code == 1
    assert MISSING_DB_URL_MSG in result.output


def test_show_help_warns_about_recovery_token(runner):
    result = runner.invoke(metriq_cli, ["accounts", "show", "--help"])
    assert result.exit_code == 0, result.output
    assert "recovery token is printed in full" in result.output
