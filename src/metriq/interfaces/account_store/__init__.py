"""METRIQ Account Store Interface Package"""

from .account_store import Account, AccountStore
from .errors import (
    AccountAlreadyExists,
    AccountNotFound,
    AccountStoreError,
    EmailAlreadyTaken,
    InvalidAccountRecord,
    StaleAccountError,
    UsernameAlreadyTaken,
)

__all__ = [
    "Account",
    "AccountAlreadyExists",
    "AccountNotFound",
    "AccountStore",
    "AccountStoreError",
    "EmailAlreadyTaken",
    "InvalidAccountRecord",
    "StaleAccountError",
    "UsernameAlreadyTaken",
]
