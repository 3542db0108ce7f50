"""Parse ``-L NAME=LEVEL`` options into per-logger levels.

Values may be repeated on the command line or given as one comma/space
separated list (as ``METRIQ_LOGGER_LEVELS`` is). The noisy libraries METRIQ
sits on start at WARNING unless overridden.
"""

import logging
import re

import click

DEFAULT_LIB_LEVELS = {"sqlalchemy": logging.WARNING, "alembic": logging.WARNING}

_SEPARATORS = re.compile(r"[,\s]+")


def split_items(value: str | list[str] | tuple[str, ...] | None) -> list[str]:
    """Flatten option values into individual ``NAME=LEVEL`` items."""
    if not value:
        return []
    chunks = [value] if isinstance(value, str) else list(value)
    return [item for chunk in chunks for item in _SEPARATORS.split(chunk) if item]


def level_from_name(level_name: str) -> int:
    """Convert a standard level name (case-insensitive) to its number.

    Raises:
        click.BadParameter: If the name is not a logging level.
    """
    level = logging.getLevelName(level_name.strip().upper())
    if not isinstance(level, int):
        raise click.BadParameter(f"Invalid log level: {level_name}")
    return level


def parse_log_level(
    ctx: click.Context,  # pylint: disable=unused-argument
    param: click.Parameter | None,  # pylint: disable=unused-argument
    value: str | list[str] | tuple[str, ...] | None,
) -> dict[str, int]:
    """Click callback returning `DEFAULT_LIB_LEVELS` updated with the overrides.

    Raises:
        click.BadParameter: If an item is not NAME=LEVEL or LEVEL is unknown.
    """
    levels = dict(DEFAULT_LIB_LEVELS)
    for item in split_items(value):
        name, sep, level_name = item.partition("=")
        if not sep or not name.strip():
            raise click.BadParameter(f"Expected NAME=LEVEL, got {item!r}")
        levels[name.strip()] = level_from_name(level_name)
    return levels
