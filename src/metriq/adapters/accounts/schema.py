"""Account table schema.

One row per live account. Deleting a row is the account deletion; there is
no soft-delete flag.

Constraints (enforced here):

| Constraint                        | Purpose                               |
|-----------------------------------|---------------------------------------|
| UNIQUE(username_normal)           | case-insensitive username uniqueness  |
| UNIQUE(email)                     | e-mail uniqueness (stored lower-case) |
| CHECK(version >= 1)               | versioning starts at 1                |
| CHECK(length(password_hash) > 0)  | a registered account always has a hash |
"""

from __future__ import annotations

from sqlalchemy import CheckConstraint, Column, Integer, String, Table

from metriq.adapters.db.metadata import metadata
from metriq.adapters.db.sa_types import UTCDateTime

__all__ = ["accounts"]

accounts = Table(
    "accounts",
    metadata,
    Column("id", String(36), primary_key=True, comment="Account id (ULID)."),
    Column(
        "username",
        String(64),
        nullable=False,
        comment="Username as given at registration.",
    ),
    Column(
        "username_normal",
        String(64),
        nullable=False,
        unique=True,
        comment="Lower-cased username; the uniqueness key.",
    ),
    Column("email", String(255), nullable=False, unique=True),
    Column("password_hash", String(255), nullable=False),
    Column("client_token", String(255), nullable=True),
    Column("recovery_token", String(255), nullable=True),
    Column("recovery_token_expires_at", UTCDateTime(), nullable=True),
    Column(
        "version",
        Integer,
        nullable=False,
        comment="Optimistic-concurrency counter (starts at 1).",
    ),
    Column("created_at", UTCDateTime(), nullable=False),
    CheckConstraint("version >= 1", name="positive_version"),
    CheckConstraint("length(password_hash) > 0", name="password_hash_not_empty"),
    comment="Registered user accounts.",
)
