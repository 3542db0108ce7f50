"""Exceptions for account store operations."""


class AccountStoreError(Exception):
    """Base class for account store errors."""


class InvalidAccountRecord(AccountStoreError, ValueError):
    """An account record violates a structural invariant.

    Attributes:
        account_id (str): The id of the offending record.
        reason (str): Human-readable description of the violation.
    """

    def __init__(self, account_id: str, reason: str):
        super().__init__(f"Invalid account record '{account_id}': {reason}")
        self.account_id = account_id
        self.reason = reason


class UsernameAlreadyTaken(AccountStoreError):
    """Conflict: another account already uses this (normalized) username.

    Attributes:
        username (str): The username that is already bound.
        account_id (str): The account currently holding the username.
    """

    def __init__(self, username: str, account_id: str):
        super().__init__(
            f"Username '{username}' is already bound to account '{account_id}'."
        )
        self.username = username
        self.account_id = account_id


class EmailAlreadyTaken(AccountStoreError):
    """Conflict: another account already uses this e-mail address.

    Attributes:
        email (str): The e-mail address that is already bound.
        account_id (str): The account currently holding the address.
    """

    def __init__(self, email: str, account_id: str):
        super().__init__(
            f"E-mail address '{email}' is already bound to account '{account_id}'."
        )
        self.email = email
        self.account_id = account_id


class AccountNotFound(AccountStoreError):
    """No account exists with the given id."""

    def __init__(self, account_id: str):
        super().__init__(f"Account '{account_id}' does not exist.")
        self.account_id = account_id


class StaleAccountError(AccountStoreError):
    """Optimistic concurrency failure: the stored version moved on.

    Attributes:
        account_id (str): The account being saved.
        expected_version (int): The version the caller loaded.
        actual_version (int): The version currently stored.
    """

    def __init__(self, account_id: str, expected_version: int, actual_version: int):
        super().__init__(
            f"Account '{account_id}' is at version {actual_version}, "
            f"expected {expected_version}."
        )
        self.account_id = account_id
        self.expected_version = expected_version
        self.actual_version = actual_version


class AccountAlreadyExists(AccountStoreError):
    """Conflict: an account with this id is already stored."""

    def __init__(self, account_id: str):
        super().__init__(f"Account '{account_id}' already exists.")
        self.account_id = account_id
