"""METRIQ CLI entry point.

Defines the top-level ``metriq`` command (via Click-Extra) and registers the
subcommand groups.

Available groups
- ``metriq db`` — forward-only schema management
  (upgrade/current/status).
- ``metriq accounts`` — register, inspect and delete user accounts.

Examples
    $ metriq --version
    $ metriq db upgrade
    $ metriq -v accounts show 01J9Z3W6Q2M8N4R5T7V9X1Y3Z5
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click
import click_extra as clickx
from platformdirs import user_log_dir

from metriq import __version__
from metriq.logging import (
    config_console_handler,
    config_flight_recorder,
    console_level,
    install_handlers,
    log_startup,
)

from .accounts import accounts as accounts_group
from .db import db as db_group
from .helpers.log_level_parser import parse_log_level

if TYPE_CHECKING:
    from logging import Handler

logger = logging.getLogger(__name__)


HELP = """METRIQ command-line interface.

    Manage the METRIQ account database: apply schema migrations, register
    and inspect user accounts, and list the tasks a user follows. Account
    output is always sanitized.
    """


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help=(
        "Increase the default WARNING verbosity by one level "
        "for each additional repetition of the option."
    ),
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help=(
        "Decrease the default WARNING verbosity by one level "
        "for each additional repetition of the option."
    ),
    default=0,
)
@click.option(
    "--debug/--no-debug",
    is_flag=True,
    help="Enable debug mode (enables extra developer diagnostics beyond -vvv).",
    default=False,
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path to log file (overrides default flight recorder path).",
    default=lambda: Path(user_log_dir("metriq", appauthor=False, ensure_exists=True))
    / "latest.log",
    envvar="METRIQ_LOG_PATH",
    show_default="<user log dir>/latest.log",
    show_envvar=True,
)
@click.option(
    "--flight-recorder-capacity",
    type=click.IntRange(min=1),
    default=2000,
    hidden=True,
    envvar="METRIQ_FLIGHT_RECORDER_CAPACITY",
    show_envvar=True,
    help="Capacity of the flight recorder (in number of log records).",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    is_flag=True,
    help=(
        "Enable the in-memory flight recorder. Keeps the last N log records "
        "(tunable via METRIQ_FLIGHT_RECORDER_CAPACITY) at DEBUG granularity "
        "(unaffected by -v/-q) and writes them to --log-path when a WARNING/ERROR "
        "occurs, or on clean exit if --force-flush is set."
    ),
    default=True,
    envvar="METRIQ_FLIGHT_RECORDER",
    show_envvar=True,
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush_flight_recorder",
    is_flag=True,
    help=(
        "Force-flush the flight recorder buffer to --log-path on program exit. "
        "Normally the buffer only dumps on WARNING/ERROR."
    ),
    default=False,
    envvar="METRIQ_FORCE_FLUSH_FLIGHT_RECORDER",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    help=(
        "Set MINIMUM LEVEL for specific LOGGERS (NAME=LEVEL). Applies to BOTH "
        "console and flight-recorder. Repeatable (e.g. -L sqlalchemy=INFO "
        "-L metriq.service_layer=DEBUG) or via METRIQ_LOGGER_LEVELS."
    ),
    default=("sqlalchemy=WARNING", "alembic=WARNING"),
    envvar="METRIQ_LOGGER_LEVELS",
    show_default=True,
    show_envvar=True,
)
@clickx.pass_context
def metriq(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    flight_recorder: bool,
    force_flush_flight_recorder: bool,
    logger_levels: dict[str, int],
) -> None:
    """METRIQ command-line interface."""

    level = console_level(verbose_count, quiet_count)

    handlers: list[Handler] = []

    # 1) console
    use_color = ctx.color is not False  # None or True => allow color
    handlers.append(
        config_console_handler(level=level, debug_mode=debug, color=use_color)
    )

    # 2) flight recorder
    if flight_recorder:
        handlers.append(
            config_flight_recorder(
                path=log_path,
                capacity=flight_recorder_capacity,
                flush_on_close=force_flush_flight_recorder,
            )
        )

    install_handlers(handlers, logger_levels)

    log_startup(
        logger,
        app_version=__version__,
        level=level,
        handlers=handlers,
        log_path=log_path if flight_recorder else None,
        flight_recorder=flight_recorder,
        flight_capacity=flight_recorder_capacity if flight_recorder else None,
        force_flush_fr=force_flush_flight_recorder,
        logger_levels=logger_levels,
    )

    # flush/close handlers after the subcommand returns
    ctx.call_on_close(logging.shutdown)


metriq.add_command(db_group)
metriq.add_command(accounts_group)
