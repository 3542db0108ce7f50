"""ID and token generators for METRIQ."""

import secrets
import threading
import uuid

from ulid import monotonic

from metriq.interfaces.id_generator import IdGenerator, TokenGenerator

# pylint: disable=too-few-public-methods


class ULIDGenerator(IdGenerator):
    """Thread-safe monotonic ULID generator.

    ULIDs are unique, lexicographically sortable identifiers made of a
    timestamp and a random component, which keeps account and task ids in
    creation order. Uses the `ulid-py` library.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def new_id(self) -> str:
        """Generate a new ULID (serialized across threads)."""
        with self._lock:
            return str(monotonic.new())


class UUIDv4Generator(IdGenerator):
    """UUIDv4 generator.

    Random identifiers with no ordering guarantees.
    """

    def new_id(self) -> str:
        """Generate a new UUID."""
        return str(uuid.uuid4())


class SimpleIdGenerator(IdGenerator):
    """Sequential, zero-padded ids.

    Note:
        Not suitable for production use; primarily for testing and demos.
    """

    def __init__(self, length: int = 26) -> None:
        self._counter = 0
        self._length = length
        self._lock = threading.Lock()

    def new_id(self) -> str:
        """Generate the next identifier in sequence."""
        with self._lock:
            self._counter += 1
            return f"{self._counter:0{self._length}d}"


class SecretTokenGenerator(TokenGenerator):
    """URL-safe random tokens from the `secrets` module.

    Used for client tokens and password-recovery tokens.

    Args:
        nbytes: Number of random bytes before base64 encoding. Defaults to 32.
    """

    def __init__(self, nbytes: int = 32) -> None:
        if nbytes < 16:  # pylint: disable=magic-value-comparison
            raise ValueError("nbytes must be at least 16")
        self._nbytes = nbytes

    def new_token(self) -> str:
        return secrets.token_urlsafe(self._nbytes)

