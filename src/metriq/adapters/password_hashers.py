"""Password hashers.

`BcryptPasswordHasher` is the production implementation. bcrypt only looks
at the first 72 bytes of its input, so longer passwords are rejected rather
than silently truncated.
"""

import logging

import bcrypt

from metriq.interfaces.password_hasher import PasswordHasher

logger = logging.getLogger(__name__)

BCRYPT_MAX_PASSWORD_BYTES = 72
BCRYPT_MIN_ROUNDS = 4
BCRYPT_MAX_ROUNDS = 31


class PasswordTooLongError(ValueError):
    """Raised when a password exceeds what bcrypt can hash without truncation."""

    def __init__(self) -> None:
        super().__init__(
            f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes long."
        )


class BcryptPasswordHasher(PasswordHasher):
    """Salted bcrypt digests.

    Args:
        rounds: bcrypt cost factor (log2 of the iteration count). Tests use
            the minimum of 4 to stay fast.
    """

    def __init__(self, rounds: int = 12) -> None:
        if not BCRYPT_MIN_ROUNDS <= rounds <= BCRYPT_MAX_ROUNDS:
            raise ValueError(
                f"rounds must be between {BCRYPT_MIN_ROUNDS} and {BCRYPT_MAX_ROUNDS}"
            )
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """Hash ``password`` with a fresh salt.

        Raises:
            PasswordTooLongError: If the UTF-8 encoding exceeds 72 bytes.
        """
        encoded = password.encode("utf-8")
        if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
            raise PasswordTooLongError
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(encoded, salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        encoded = password.encode("utf-8")
        if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))
        except ValueError:
            logger.debug("Stored password hash is not a valid bcrypt digest")
            return False
