"""Interface for one-way password hashing."""

import abc


class PasswordHasher(abc.ABC):
    """Contract for hashing and verifying passwords.

    Implementations are stateless apart from configuration. The digest format
    is opaque to callers; it must never equal the plaintext and must embed
    whatever salt it needs.
    """

    @abc.abstractmethod
    def hash(self, password: str) -> str:
        """Return a salted one-way digest of ``password``."""

    @abc.abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        """Return True if ``password`` matches ``password_hash``.

        Malformed digests verify as False rather than raising.
        """
