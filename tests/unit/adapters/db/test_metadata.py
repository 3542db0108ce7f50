"""Tests that the naming convention yields the constraint names we migrate.

The migration script spells these names out, so a change in the convention
would make autogenerate want to drop and recreate every constraint.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import inspect
from sqlalchemy.dialects import sqlite
from sqlalchemy.schema import CreateTable

from metriq.adapters.accounts.schema import accounts
from metriq.adapters.db.metadata import metadata
from metriq.adapters.tasks.schema import task_subscriptions, tasks

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


def test_tables_share_the_metadata():
    assert {"accounts", "tasks", "task_subscriptions"} <= set(metadata.tables)
    for table in (accounts, tasks, task_subscriptions):
        assert table.metadata is metadata


@pytest.mark.parametrize(
    "table, expected",
    [
        (
            accounts,
            {
                "pk_accounts",
                "uq_accounts_email",
                "uq_accounts_username_normal",
                "ck_accounts_positive_version",
                "ck_accounts_password_hash_not_empty",
            },
        ),
        (tasks, {"pk_tasks", "fk_tasks_submitter_id_accounts"}),
        (
            task_subscriptions,
            {
                "pk_task_subscriptions",
                "fk_task_subscriptions_task_id_tasks",
                "fk_task_subscriptions_user_id_accounts",
                "uq_task_subscriptions_task_id_user_id",
            },
        ),
    ],
)
def test_constraint_names_follow_convention(table, expected):
    ddl = str(CreateTable(table).compile(dialect=sqlite.dialect()))
    for name in expected:
        assert f"CONSTRAINT {name} " in ddl


@pytest.mark.parametrize(
    "table, expected",
    [
        (tasks, {"ix_tasks_submitter_id"}),
        (task_subscriptions, {"ix_task_subscriptions_user_id_seq"}),
    ],
)
def test_index_names_follow_convention(
    sqlite_engine_memory: Engine, table, expected
):
    names = {ix["name"] for ix in inspect(sqlite_engine_memory).get_indexes(table.name)}
    assert expected <= names


def test_check_constraints_reflect_with_convention_names(
    sqlite_engine_memory: Engine,
):
    checks = inspect(sqlite_engine_memory).get_check_constraints("accounts")
    names = {c.get("name") for c in checks}
    assert {
        "ck_accounts_positive_version",
        "ck_accounts_password_hash_not_empty",
    } <= names
