"""Safe external view of an account.

Secrets are masked with a literal marker rather than dropped: a sanitized
view always has the same keys as the record, so clients can rely on the
shape while never seeing the values.

A pending ``recovery_token`` is not masked. It is a short-lived credential
that support staff hand to the account owner out of band, so the view
carries it in full together with its expiry.
"""

from dataclasses import fields
from typing import Any

from metriq.interfaces.account_store import Account

REDACTED = "[REDACTED]"
REDACTED_FIELDS = ("password_hash", "client_token")


def sanitize(account: Account) -> dict[str, Any]:
    """Project an account to a dict with `REDACTED_FIELDS` masked.

    All other fields are copied unchanged. The record itself is not modified.
    """
    view = {f.name: getattr(account, f.name) for f in fields(account)}
    for name in REDACTED_FIELDS:
        view[name] = REDACTED
    return view
