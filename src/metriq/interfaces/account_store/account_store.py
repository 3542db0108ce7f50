"""Interface for persisting user accounts.

Defines the immutable `Account` record and the `AccountStore` abstraction:
CRUD primitives only. Uniqueness of usernames (case-insensitive) and e-mail
addresses is enforced here, at the persistence boundary, and updates are
fenced with an optimistic-concurrency version.
"""

from __future__ import annotations

import abc
from dataclasses import dataclass
from datetime import datetime, timedelta

from .errors import InvalidAccountRecord

# pylint: disable=too-many-instance-attributes

# --- Read/Write Model ---


@dataclass(frozen=True, slots=True)
class Account:
    """Immutable snapshot of a stored user account.

    Conventions:
      - `id` is assigned at creation and never changes.
      - `username` keeps the casing given at registration; uniqueness is
        checked against `username_normal` (lower-cased).
      - `email` is stored lower-cased.
      - `password_hash` is an opaque digest and is never empty.
      - `recovery_token` and `recovery_token_expires_at` are set together.
      - datetimes are timezone-aware UTC.
      - `version` starts at 1 and increases by one on every saved change.
    """

    id: str
    username: str
    email: str
    password_hash: str
    created_at: datetime
    version: int = 1
    client_token: str | None = None
    recovery_token: str | None = None
    recovery_token_expires_at: datetime | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise InvalidAccountRecord(self.id, "id must not be empty")
        if not self.username:
            raise InvalidAccountRecord(self.id, "username must not be empty")
        if not self.password_hash:
            raise InvalidAccountRecord(self.id, "password_hash must not be empty")
        if self.version < 1:
            raise InvalidAccountRecord(self.id, "version must be >= 1")
        if (self.recovery_token is None) != (self.recovery_token_expires_at is None):
            raise InvalidAccountRecord(
                self.id,
                "recovery_token and recovery_token_expires_at must be set together",
            )
        for name in ("created_at", "recovery_token_expires_at"):
            value = getattr(self, name)
            if value is not None and (
                value.tzinfo is None or value.utcoffset() != timedelta(0)
            ):
                raise InvalidAccountRecord(
                    self.id, f"{name} must be timezone-aware UTC"
                )

    @property
    def username_normal(self) -> str:
        """Username key used for uniqueness and lookups."""
        return self.username.lower()


# --- Store ---


class AccountStore(abc.ABC):
    """Account persistence with uniqueness and version fencing."""

    @abc.abstractmethod
    def add(self, account: Account) -> None:
        """Insert a brand-new account.

        Args:
            account: The record to insert (normally at version 1).

        Raises:
            UsernameAlreadyTaken: If another account has the same normalized username.
            EmailAlreadyTaken: If another account has the same e-mail address.
            AccountAlreadyExists: If the id is already in use.
        """

    @abc.abstractmethod
    def get(self, account_id: str) -> Account | None:
        """Return the account with the given id, or ``None`` if absent."""

    @abc.abstractmethod
    def get_by_username(self, username: str) -> Account | None:
        """Return the account with this username (case-insensitive), or ``None``."""

    @abc.abstractmethod
    def get_by_email(self, email: str) -> Account | None:
        """Return the account with this e-mail address, or ``None``.

        Matching is case-insensitive.
        """

    @abc.abstractmethod
    def save(self, account: Account, expected_version: int) -> None:
        """Replace a stored account if it is still at ``expected_version``.

        The new record's ``version`` must be greater than ``expected_version``.
        Identity fields (`id`, `username`, `email`, `created_at`) are not
        rewritten.

        Args:
            account: The updated record.
            expected_version: The version the caller loaded.

        Raises:
            AccountNotFound: If no account has ``account.id``.
            StaleAccountError: If the stored version is not ``expected_version``.
        """

    @abc.abstractmethod
    def delete(self, account_id: str) -> bool:
        """Remove an account.

        Follow relations owned by the account are removed with it.

        Returns:
            bool: True if an account was removed, False if none existed.
        """
