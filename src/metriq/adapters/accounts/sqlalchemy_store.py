"""AccountStore implementation using SQLAlchemy Core."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import delete, select, update

from metriq.adapters.db.dialects import DialectName, insert_or_skip
from metriq.interfaces.account_store import (
    Account,
    AccountAlreadyExists,
    AccountNotFound,
    AccountStore,
    EmailAlreadyTaken,
    InvalidAccountRecord,
    StaleAccountError,
    UsernameAlreadyTaken,
)

from .schema import accounts

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Row
    from sqlalchemy.sql.elements import ColumnElement


class SqlAlchemyAccountStore(AccountStore):
    """AccountStore implementation that supports both Postgres and SQLite.

    Operates on a caller-owned connection; transactions are the unit of
    work's business.
    """

    def __init__(self, connection: Connection):
        self.connection = connection
        self.dialect = DialectName.from_sqlalchemy(connection)

    # --- add: no-throw insert + decide outcome via reads ---

    def add(self, account: Account) -> None:
        stmt = insert_or_skip(
            self.dialect,
            accounts,
            {
                "id": account.id,
                "username": account.username,
                "username_normal": account.username_normal,
                "email": account.email,
                "password_hash": account.password_hash,
                "client_token": account.client_token,
                "recovery_token": account.recovery_token,
                "recovery_token_expires_at": account.recovery_token_expires_at,
                "version": account.version,
                "created_at": account.created_at,
            },
        )
        if self.connection.execute(stmt).rowcount == 1:
            return

        # Conflict; read the authoritative rows to name it
        if existing := self.get_by_username(account.username):
            raise UsernameAlreadyTaken(account.username, existing.id)
        if existing := self.get_by_email(account.email):
            raise EmailAlreadyTaken(account.email, existing.id)
        if self.get(account.id):
            raise AccountAlreadyExists(account.id)

        msg = "add(): insert failed but no conflicting rows found"  # pragma: no cover
        raise RuntimeError(msg)  # pragma: no cover

    # --- save: compare-and-set on version ---

    def save(self, account: Account, expected_version: int) -> None:
        if account.version <= expected_version:
            raise InvalidAccountRecord(account.id, "version must increase on save")

        stmt = (
            update(accounts)
            .where(accounts.c.id == account.id, accounts.c.version == expected_version)
            .values(
                password_hash=account.password_hash,
                client_token=account.client_token,
                recovery_token=account.recovery_token,
                recovery_token_expires_at=account.recovery_token_expires_at,
                version=account.version,
            )
        )
        if self.connection.execute(stmt).rowcount == 1:
            return

        if (current := self.get(account.id)) is None:
            raise AccountNotFound(account.id)
        raise StaleAccountError(account.id, expected_version, current.version)

    def delete(self, account_id: str) -> bool:
        # subscriptions and submitter links are handled by the foreign keys
        result = self.connection.execute(
            delete(accounts).where(accounts.c.id == account_id)
        )
        return result.rowcount == 1

    # --- lookups ---

    def get(self, account_id: str) -> Account | None:
        return self._get_where(accounts.c.id == account_id)

    def get_by_username(self, username: str) -> Account | None:
        return self._get_where(accounts.c.username_normal == username.lower())

    def get_by_email(self, email: str) -> Account | None:
        return self._get_where(accounts.c.email == email.strip().lower())

    def _get_where(self, clause: ColumnElement[bool]) -> Account | None:
        if not (row := self.connection.execute(select(accounts).where(clause)).first()):
            return None
        return _to_account(row)


def _to_account(row: Row) -> Account:
    return Account(
        id=row.id,
        username=row.username,
        email=row.email,
        password_hash=row.password_hash,
        created_at=row.created_at,
        version=int(row.version),
        client_token=row.client_token,
        recovery_token=row.recovery_token,
        recovery_token_expires_at=row.recovery_token_expires_at,
    )
