"""Configuration utilities for METRIQ.

This module centralizes small helpers and constants related to application
configuration. Everything is read from the environment at call time so tests
can override values with ``monkeypatch.setenv``.
"""

import os
import sys
from datetime import timedelta
from importlib.resources import files
from typing import TextIO

from alembic.config import Config

ALEMBIC_URL_KEY = "sqlalchemy.url"  # pragma: no mutate
ALEMBIC_SCRIPT_LOCATION_KEY = "script_location"  # pragma: no mutate

DB_URL_ENV = "METRIQ_DB_URL"
RECOVERY_TOKEN_TTL_ENV = "METRIQ_RECOVERY_TOKEN_TTL_MINUTES"
BCRYPT_ROUNDS_ENV = "METRIQ_BCRYPT_ROUNDS"

DEFAULT_RECOVERY_TOKEN_TTL_MINUTES = 30
DEFAULT_BCRYPT_ROUNDS = 12


class DatabaseUrlNotSetError(Exception):
    """Raised when the METRIQ_DB_URL environment variable is not set."""


class InvalidSettingError(ValueError):
    """Raised when a numeric setting in the environment cannot be parsed."""

    def __init__(self, name: str, value: str) -> None:
        super().__init__(f"{name} must be a positive integer, got {value!r}.")
        self.name = name
        self.value = value


def get_db_url() -> str:
    """Get the database URL from the environment.

    Returns:
        The value of the `METRIQ_DB_URL` environment variable.

    Raises:
        DatabaseUrlNotSetError: If `METRIQ_DB_URL` is not set.
    """
    if not (url := os.environ.get(DB_URL_ENV)):
        raise DatabaseUrlNotSetError
    return url


def _positive_int(name: str, default: int) -> int:
    if not (raw := os.environ.get(name)):
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise InvalidSettingError(name, raw) from e
    if value <= 0:
        raise InvalidSettingError(name, raw)
    return value


def get_recovery_token_ttl() -> timedelta:
    """Lifetime of a freshly issued password-recovery token."""
    return timedelta(
        minutes=_positive_int(
            RECOVERY_TOKEN_TTL_ENV, DEFAULT_RECOVERY_TOKEN_TTL_MINUTES
        )
    )


def get_bcrypt_rounds() -> int:
    """Cost factor used when hashing passwords with bcrypt."""
    return _positive_int(BCRYPT_ROUNDS_ENV, DEFAULT_BCRYPT_ROUNDS)


def build_alembic_config(
    db_url: str | None = None, stdout: TextIO = sys.stdout
) -> Config:
    """Build an Alembic `Config` object for METRIQ's migrations.

    Sets only Alembic "main" options:
    - `sqlalchemy.url` → the database URL you pass
    - `script_location` → METRIQ's packaged Alembic scripts

    Args:
        db_url: SQLAlchemy database URL (e.g., `sqlite:///:memory:`). Can be
            `None` (default) only in contexts where Alembic won't need to
            connect to the DB.
        stdout: Text stream Alembic will write status lines to. Defaults to
            `sys.stdout`; override in tests to capture output.

    Returns:
        An `alembic.config.Config` pointing to METRIQ's migration scripts.
    """
    cfg = Config(stdout=stdout)
    if db_url is not None:
        cfg.set_main_option(ALEMBIC_URL_KEY, db_url)
    cfg.set_main_option(
        ALEMBIC_SCRIPT_LOCATION_KEY,
        str(files("metriq.adapters.db.alembic")),
    )
    return cfg
