"""Fixtures for id and token generator contract tests."""

from collections.abc import Iterable

import pytest

from metriq.adapters.id_generators import (
    SecretTokenGenerator,
    SimpleIdGenerator,
    ULIDGenerator,
    UUIDv4Generator,
)
from metriq.interfaces.id_generator import IdGenerator, TokenGenerator


@pytest.fixture(params=["ulid", "uuid4", "simple"])
def id_generator(
    request: pytest.FixtureRequest,
) -> Iterable[IdGenerator]:
    """Return a fresh IdGenerator instance for the requested backend.

    Supported params:
      - `"ulid"` → ULIDGenerator
      - `"uuid4"` → UUIDv4Generator
      - `"simple"` → SimpleIdGenerator
    """

    match request.param:
        case "ulid":
            yield ULIDGenerator()
        case "uuid4":
            yield UUIDv4Generator()
        case "simple":
            yield SimpleIdGenerator()
        case _:
            raise ValueError(f"unknown id generator type: {request.param}")


@pytest.fixture(params=["secrets", "secrets-64"])
def token_generator(request: pytest.FixtureRequest) -> Iterable[TokenGenerator]:
    """Yield a fresh TokenGenerator for the requested configuration."""
    match request.param:
        case "secrets":
            yield SecretTokenGenerator()
        case "secrets-64":
            yield SecretTokenGenerator(nbytes=64)
        case _:
            raise ValueError(f"unknown token generator type: {request.param}")
