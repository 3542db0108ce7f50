"""Task and subscription table schemas.

Tasks reference the submitting account with ``ON DELETE SET NULL`` so a task
outlives its submitter. Subscriptions cascade away with either side. The
``seq`` column orders a user's subscriptions.
"""

from __future__ import annotations

from sqlalchemy import (
    Column,
    ForeignKey,
    Identity,
    Index,
    String,
    Table,
    Text,
    UniqueConstraint,
    text,
)

# accounts must be registered on the metadata for the foreign keys to resolve
from metriq.adapters.accounts.schema import accounts
from metriq.adapters.db.metadata import metadata
from metriq.adapters.db.sa_types import BIGINT_PK, UTCDateTime

__all__ = ["tasks", "task_subscriptions"]

tasks = Table(
    "tasks",
    metadata,
    Column("id", String(36), primary_key=True, comment="Task id (ULID)."),
    Column("name", String(200), nullable=False),
    Column("full_name", String(500), nullable=False),
    Column("description", Text, nullable=False),
    Column(
        "submitter_id",
        String(36),
        ForeignKey(accounts.c.id, ondelete="SET NULL"),
        nullable=True,
    ),
    Column("created_at", UTCDateTime(), nullable=False),
    Index(None, "submitter_id"),
    comment="Submitted tasks.",
)

task_subscriptions = Table(
    "task_subscriptions",
    metadata,
    Column(
        "seq",
        BIGINT_PK,
        Identity(start=1),
        primary_key=True,
        comment="Subscription order.",
    ),
    Column(
        "task_id",
        String(36),
        ForeignKey(tasks.c.id, ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "user_id",
        String(36),
        ForeignKey(accounts.c.id, ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "subscribed_at",
        UTCDateTime(),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    ),
    UniqueConstraint("task_id", "user_id"),
    Index(None, "user_id", "seq"),
    comment="Which users follow which tasks.",
)
