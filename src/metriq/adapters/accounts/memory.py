"""In-memory AccountStore implementation for tests and demos."""

from dataclasses import replace

from metriq.adapters.memory_store import InMemoryStoreData
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


class InMemoryAccountStore(AccountStore):
    """AccountStore backed by a shared `InMemoryStoreData`.

    Lookups are linear scans; this adapter exists for tests and demos.
    """

    def __init__(self, data: InMemoryStoreData | None = None):
        self._data = data if data is not None else InMemoryStoreData()

    # --- writes ---

    def add(self, account: Account) -> None:
        with self._data.lock:
            if existing := self.get_by_username(account.username):
                raise UsernameAlreadyTaken(account.username, existing.id)
            if existing := self.get_by_email(account.email):
                raise EmailAlreadyTaken(account.email, existing.id)
            if account.id in self._data.accounts:
                raise AccountAlreadyExists(account.id)
            self._data.accounts[account.id] = account

    def save(self, account: Account, expected_version: int) -> None:
        if account.version <= expected_version:
            raise InvalidAccountRecord(account.id, "version must increase on save")
        with self._data.lock:
            if (current := self._data.accounts.get(account.id)) is None:
                raise AccountNotFound(account.id)
            if current.version != expected_version:
                raise StaleAccountError(account.id, expected_version, current.version)
            # identity fields are never rewritten
            self._data.accounts[account.id] = replace(
                account,
                username=current.username,
                email=current.email,
                created_at=current.created_at,
            )

    def delete(self, account_id: str) -> bool:
        with self._data.lock:
            if self._data.accounts.pop(account_id, None) is None:
                return False
            self._data.subscriptions = [
                (task_id, user_id)
                for task_id, user_id in self._data.subscriptions
                if user_id != account_id
            ]
            for task in list(self._data.tasks.values()):
                if task.submitter_id == account_id:
                    self._data.tasks[task.id] = replace(task, submitter_id=None)
            return True

    # --- lookups ---

    def get(self, account_id: str) -> Account | None:
        return self._data.accounts.get(account_id)

    def get_by_username(self, username: str) -> Account | None:
        wanted = username.lower()
        for account in self._data.accounts.values():
            if account.username_normal == wanted:
                return account
        return None

    def get_by_email(self, email: str) -> Account | None:
        wanted = email.strip().lower()
        for account in self._data.accounts.values():
            if account.email == wanted:
                return account
        return None
