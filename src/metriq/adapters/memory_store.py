"""In-memory shared data store for the in-memory adapters."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from metriq.interfaces.account_store import Account
from metriq.interfaces.task_store import Task


@dataclass(slots=True)
class InMemoryStoreData:
    """Shared backing store for `InMemoryAccountStore` and `InMemoryTaskStore`.

    A single instance should be passed to both adapters so that deleting an
    account can drop its subscriptions and detach its submitted tasks, the
    way foreign-key cascades do in the SQL schema.

    Records are immutable, so a snapshot is a shallow copy of the containers.
    """

    # keyed by account id
    accounts: dict[str, Account] = field(default_factory=dict)

    # keyed by task id
    tasks: dict[str, Task] = field(default_factory=dict)

    # (task_id, user_id) pairs in subscription order
    subscriptions: list[tuple[str, str]] = field(default_factory=list)

    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def snapshot(self) -> InMemoryStoreData:
        """Return a copy of the current contents (sharing no containers)."""
        return InMemoryStoreData(
            accounts=dict(self.accounts),
            tasks=dict(self.tasks),
            subscriptions=list(self.subscriptions),
        )

    def restore(self, snapshot: InMemoryStoreData) -> None:
        """Replace the current contents with those of ``snapshot``."""
        self.accounts = dict(snapshot.accounts)
        self.tasks = dict(snapshot.tasks)
        self.subscriptions = list(snapshot.subscriptions)
