"""Account rules.

Every command here is a pure function: it takes an `Account` record and
returns a new record with the change applied and the version bumped. Nothing
is persisted; callers hand the result to `AccountStore.save` together with
the version they loaded.
"""

from __future__ import annotations

import hmac
import re
from dataclasses import replace
from datetime import datetime

from metriq.domain.errors import (
    InvalidTokenError,
    PasswordMismatchError,
    ValidationError,
)
from metriq.interfaces.account_store import Account

USERNAME_MAX_LENGTH = 64
EMAIL_MAX_LENGTH = 255
MIN_PASSWORD_LENGTH = 12
MAX_PASSWORD_BYTES = 72
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


# --- Validation ---


def normalize_email(email: str) -> str:
    """Canonical form used for storage and uniqueness."""
    return email.strip().lower()


def validate_new_password(password: str, password_confirm: str) -> None:
    """Check a new password and its confirmation.

    Raises:
        PasswordMismatchError: If the two values differ.
        ValidationError: If the password is shorter than `MIN_PASSWORD_LENGTH`
            characters or longer than `MAX_PASSWORD_BYTES` bytes of UTF-8.
    """
    if password != password_confirm:
        raise PasswordMismatchError
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long."
        )
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(
            f"Password must be at most {MAX_PASSWORD_BYTES} bytes long."
        )


def validate_registration(
    username: str, email: str, password: str, password_confirm: str
) -> None:
    """Check registration input before anything is hashed or stored.

    Raises:
        ValidationError: On a malformed username, e-mail address or password.
    """
    if not username or any(ch.isspace() for ch in username):
        raise ValidationError("Username must be non-empty and contain no whitespace.")
    # login falls back to e-mail lookup, so a username must never look like one
    if "@" in username:
        raise ValidationError("Username must not contain '@'.")
    if len(username) > USERNAME_MAX_LENGTH:
        raise ValidationError(
            f"Username must be at most {USERNAME_MAX_LENGTH} characters long."
        )
    email = normalize_email(email)
    if len(email) > EMAIL_MAX_LENGTH or not EMAIL_PATTERN.match(email):
        raise ValidationError("E-mail address is not valid.")
    validate_new_password(password, password_confirm)


# --- Construction ---


def open_account(
    account_id: str,
    username: str,
    email: str,
    password_hash: str,
    created_at: datetime,
) -> Account:
    """Build the record for a freshly registered account (version 1)."""
    return Account(
        id=account_id,
        username=username,
        email=normalize_email(email),
        password_hash=password_hash,
        created_at=created_at,
    )


# --- Commands ---


def _next(account: Account, **changes) -> Account:
    return replace(account, version=account.version + 1, **changes)


def issue_client_token(account: Account, token: str) -> Account:
    """Attach a new client token, replacing any previous one."""
    return _next(account, client_token=token)


def generate_recovery(account: Account, token: str, expires_at: datetime) -> Account:
    """Attach a fresh recovery token, superseding any pending one."""
    return _next(account, recovery_token=token, recovery_token_expires_at=expires_at)


def recovery_token_matches(account: Account, token: str, now: datetime) -> bool:
    """Return True if ``token`` is the account's pending, unexpired recovery token.

    Comparison is exact and constant-time. An empty token never matches.
    """
    if not token or account.recovery_token is None:
        return False
    if (
        account.recovery_token_expires_at is None
        or account.recovery_token_expires_at <= now
    ):
        return False
    return hmac.compare_digest(
        account.recovery_token.encode("utf-8"), token.encode("utf-8")
    )


def redeem_recovery(
    account: Account, token: str, password_hash: str, now: datetime
) -> Account:
    """Consume the recovery token and install a new password hash.

    Raises:
        InvalidTokenError: If ``token`` does not match a pending, unexpired token.
    """
    if not recovery_token_matches(account, token, now):
        raise InvalidTokenError
    return _next(
        account,
        password_hash=password_hash,
        recovery_token=None,
        recovery_token_expires_at=None,
    )


def change_password(account: Account, password_hash: str) -> Account:
    """Install a new password hash; a pending recovery token is discarded."""
    return _next(
        account,
        password_hash=password_hash,
        recovery_token=None,
        recovery_token_expires_at=None,
    )
