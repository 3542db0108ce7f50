"""Fixtures for password hasher contract tests."""

from collections.abc import Iterable

import pytest

from metriq.adapters.password_hashers import BcryptPasswordHasher
from metriq.interfaces.password_hasher import PasswordHasher


@pytest.fixture(params=["bcrypt"])
def password_hasher(request: pytest.FixtureRequest) -> Iterable[PasswordHasher]:
    """Yield a PasswordHasher for the requested backend.

    bcrypt runs at its minimum cost so the suite stays fast.
    """
    match request.param:
        case "bcrypt":
            yield BcryptPasswordHasher(rounds=4)
        case _:
            raise ValueError(f"unknown password hasher type: {request.param}")
