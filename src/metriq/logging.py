"""Logging setup for the METRIQ CLI.

The CLI logs through the root logger to two handlers:

- a Rich console handler on stderr whose threshold follows ``-v``/``-q``;
- an optional "flight recorder": a `MemoryHandler` that keeps recent records
  at DEBUG and writes them to a file only when something goes wrong (or on
  exit when force-flushed).

Both handlers pass records through `DigestMaskFilter` so a password hash
that ends up in a message never reaches the terminal or the log file.
"""

from __future__ import annotations

import logging
import os
import platform
import re
import sys
from collections.abc import Mapping
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

import alembic
import bcrypt
import sqlalchemy
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from logging import Logger

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "metriq"
DEFAULT_CONSOLE_LEVEL = logging.WARNING
MASK = "[REDACTED]"

# bcrypt modular-crypt digests: $2a$/$2b$/$2y$, two-digit cost, 53 chars of salt+hash
_BCRYPT_DIGEST_RE = re.compile(r"\$2[aby]\$\d{2}\$[./A-Za-z0-9]{53}")

FILE_FORMAT = (
    "[%(asctime)s] [%(process)d:%(threadName)s] "
    "%(levelname)s %(name)s:%(lineno)d: %(message)s"
)


def console_level(verbose_count: int = 0, quiet_count: int = 0) -> int:
    """Map repeated ``-v``/``-q`` flags to a console level.

    Each ``-v`` lowers the WARNING default by one level and each ``-q`` raises
    it; the result is clamped to DEBUG..CRITICAL.

    >>> console_level(2, 0) == logging.DEBUG
    True
    """
    level = DEFAULT_CONSOLE_LEVEL - 10 * verbose_count + 10 * quiet_count
    return max(logging.DEBUG, min(logging.CRITICAL, level))


class ThirdPartyPrefixFilter(logging.Filter):
    """Set ``record.prefix`` to ``"[library]"`` for non-METRIQ loggers.

    Project records get an empty prefix. Never drops a record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith(PROJECT_PREFIX):
            record.prefix = ""
        else:
            # "sqlalchemy.engine.Engine" -> "[sqlalchemy]"
            record.prefix = f"[{record.name.split('.')[0]}]"
        return True


class DigestMaskFilter(logging.Filter):
    """Replace bcrypt digests in a record's rendered message with a mask.

    The message is rendered once (``msg % args``) and stored back with
    ``args`` cleared, so later handlers see the masked text.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        masked = _BCRYPT_DIGEST_RE.sub(MASK, message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


def config_console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Build the stderr console handler.

    Args:
        level: Minimum level to show; forced to DEBUG in debug mode.
        debug_mode: Show logger names, timestamps and source locations.
        color: Allow ANSI colors (mirrors click-extra's ``--color``).

    Returns:
        RichHandler: Handler to attach to the root logger.
    """
    ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]
    color_system: ColorSystem | None = "auto" if color else None

    if debug_mode:
        level = logging.DEBUG

    handler = RichHandler(
        level=level,
        console=Console(color_system=color_system, stderr=True),
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )
    if debug_mode:
        handler.setFormatter(logging.Formatter("%(asctime)s %(name)s: %(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(prefix)s %(message)s"))
        handler.addFilter(ThirdPartyPrefixFilter())
    handler.addFilter(DigestMaskFilter())
    return handler


def config_flight_recorder(
    path: Path,
    capacity: int = 2000,
    flush_level: int = logging.WARNING,
    flush_on_close: bool = False,
) -> MemoryHandler:
    """Build the flight recorder.

    Records are buffered up to ``capacity`` and written to ``path`` when a
    record at ``flush_level`` or above arrives, or when the handler closes if
    ``flush_on_close`` is set. The file is truncated each run so it always
    describes the latest invocation.
    """
    file_handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT))

    recorder = MemoryHandler(
        capacity=capacity,
        flushLevel=flush_level,
        target=file_handler,
        flushOnClose=flush_on_close,
    )
    recorder.addFilter(DigestMaskFilter())
    return recorder


def install_handlers(
    handlers: list[logging.Handler], logger_levels: Mapping[str, int]
) -> None:
    """Route every record through ``handlers`` and apply per-logger levels.

    The root logger is opened to DEBUG; each handler applies its own
    threshold. Any handlers left over from a previous run are replaced.
    """
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)
    for name, level in logger_levels.items():
        logging.getLogger(name).setLevel(level)


def log_startup(  # pylint: disable=too-many-arguments
    logger: Logger,
    *,
    app_version: str,
    level: int,
    handlers: list[logging.Handler],
    log_path: Path | None,
    flight_recorder: bool,
    flight_capacity: int | None,
    force_flush_fr: bool,
    logger_levels: Mapping[str, int],
) -> None:
    """Log a one-line INFO summary followed by DEBUG diagnostics.

    The diagnostics (interpreter, platform, library versions, handlers and
    overrides) are what a bug report needs; they normally only surface in
    the flight-recorder file.
    """
    logger.info(
        "METRIQ %s - console=%s, flight-recorder=%s",
        app_version,
        logging.getLevelName(level),
        "ON" if flight_recorder else "OFF",
    )

    logger.debug("Python: %s", sys.version.split()[0])
    logger.debug("Platform: %s %s", platform.system(), platform.release())
    logger.debug("PID: %s", os.getpid())
    logger.debug("CWD: %s", Path.cwd())
    logger.debug("Alembic: %s", alembic.__version__)
    logger.debug("SQLAlchemy: %s", sqlalchemy.__version__)
    logger.debug("bcrypt: %s", getattr(bcrypt, "__version__", "<unknown>"))
    logger.debug("Handlers: %s", [type(h).__name__ for h in handlers])
    if flight_recorder:
        logger.debug(
            "Flight recorder: path=%s, capacity=%s, flush_on_close=%s",
            log_path if log_path else "<none>",
            flight_capacity,
            force_flush_fr,
        )
    logger.debug(
        "Per-logger overrides: %s",
        {name: logging.getLevelName(lvl) for name, lvl in logger_levels.items()}
        or "<none>",
    )
