"""Result envelopes returned by the service facades.

Callers branch on ``success`` before looking at ``body``: on success it holds
the operation's value (possibly ``None``), on failure an `ErrorInfo`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from metriq.domain.errors import DomainError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class ErrorInfo:
    """Machine-readable code plus a human-readable message."""

    code: str
    message: str

    @classmethod
    def from_error(cls, error: DomainError) -> ErrorInfo:
        return cls(code=error.code, message=str(error))


@dataclass(frozen=True, slots=True)
class Result(Generic[T]):
    """Outcome of a service operation."""

    success: bool
    body: T | ErrorInfo | None = None

    @classmethod
    def ok(cls, body: T | None = None) -> Result[T]:
        return cls(success=True, body=body)

    @classmethod
    def fail(cls, error: DomainError) -> Result[T]:
        return cls(success=False, body=ErrorInfo.from_error(error))

    @property
    def error(self) -> ErrorInfo | None:
        """The failure details, or ``None`` for a successful result."""
        return self.body if isinstance(self.body, ErrorInfo) else None


@dataclass(frozen=True, slots=True)
class AccountIdentity:
    """Minimal identity returned by a successful login."""

    id: str
    username: str
    email: str
