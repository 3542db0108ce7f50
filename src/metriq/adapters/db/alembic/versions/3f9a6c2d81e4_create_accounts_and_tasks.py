"""Create accounts, tasks and task_subscriptions tables

Revision ID: 3f9a6c2d81e4
Revises:
Create Date: 2026-10-19

"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

from metriq.adapters.db.sa_types import BIGINT_PK, UTCDateTime

# pylint: disable=no-member

# revision identifiers, used by Alembic.
revision: str = "3f9a6c2d81e4"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "accounts",
        sa.Column(
            "id", sa.String(length=36), nullable=False, comment="Account id (ULID)."
        ),
        sa.Column(
            "username",
            sa.String(length=64),
            nullable=False,
            comment="Username as given at registration.",
        ),
        sa.Column(
            "username_normal",
            sa.String(length=64),
            nullable=False,
            comment="Lower-cased username; the uniqueness key.",
        ),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("client_token", sa.String(length=255), nullable=True),
        sa.Column("recovery_token", sa.String(length=255), nullable=True),
        sa.Column("recovery_token_expires_at", UTCDateTime(), nullable=True),
        sa.Column(
            "version",
            sa.Integer(),
            nullable=False,
            comment="Optimistic-concurrency counter (starts at 1).",
        ),
        sa.Column("created_at", UTCDateTime(), nullable=False),
        sa.CheckConstraint(
            "length(password_hash) > 0",
            name=op.f("ck_accounts_password_hash_not_empty"),
        ),
        sa.CheckConstraint(
            "version >= 1", name=op.f("ck_accounts_positive_version")
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_accounts")),
        sa.UniqueConstraint("email", name=op.f("uq_accounts_email")),
        sa.UniqueConstraint(
            "username_normal", name=op.f("uq_accounts_username_normal")
        ),
        comment="Registered user accounts.",
    )

    op.create_table(
        "tasks",
        sa.Column(
            "id", sa.String(length=36), nullable=False, comment="Task id (ULID)."
        ),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("full_name", sa.String(length=500), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("submitter_id", sa.String(length=36), nullable=True),
        sa.Column("created_at", UTCDateTime(), nullable=False),
        sa.ForeignKeyConstraint(
            ["submitter_id"],
            ["accounts.id"],
            name=op.f("fk_tasks_submitter_id_accounts"),
            ondelete="SET NULL",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_tasks")),
        comment="Submitted tasks.",
    )
    op.create_index(
        op.f("ix_tasks_submitter_id"), "tasks", ["submitter_id"], unique=False
    )

    op.create_table(
        "task_subscriptions",
        sa.Column(
            "seq",
            BIGINT_PK,
            sa.Identity(always=False, start=1),
            nullable=False,
            comment="Subscription order.",
        ),
        sa.Column("task_id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column(
            "subscribed_at",
            UTCDateTime(),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(
            ["task_id"],
            ["tasks.id"],
            name=op.f("fk_task_subscriptions_task_id_tasks"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["accounts.id"],
            name=op.f("fk_task_subscriptions_user_id_accounts"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("seq", name=op.f("pk_task_subscriptions")),
        sa.UniqueConstraint(
            "task_id", "user_id", name=op.f("uq_task_subscriptions_task_id_user_id")
        ),
        comment="Which users follow which tasks.",
    )
    op.create_index(
        op.f("ix_task_subscriptions_user_id_seq"),
        "task_subscriptions",
        ["user_id", "seq"],
        unique=False,
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(
        op.f("ix_task_subscriptions_user_id_seq"), table_name="task_subscriptions"
    )
    op.drop_table("task_subscriptions")
    op.drop_index(op.f("ix_tasks_submitter_id"), table_name="tasks")
    op.drop_table("tasks")
    op.drop_table("accounts")
