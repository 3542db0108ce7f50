"""Interfaces for generating identifiers and opaque secrets.

Identifiers name records and may be guessable; tokens are bearer secrets
(client tokens, recovery tokens) and must not be.
"""

import abc

# pylint: disable=too-few-public-methods


class IdGenerator(abc.ABC):
    """Contract for generating unique record identifiers."""

    @abc.abstractmethod
    def new_id(self) -> str:
        """Generate a new unique identifier."""


class TokenGenerator(abc.ABC):
    """Contract for generating unguessable opaque tokens."""

    @abc.abstractmethod
    def new_token(self) -> str:
        """Generate a new token with enough entropy to act as a credential."""
