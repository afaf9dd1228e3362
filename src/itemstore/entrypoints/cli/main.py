"""ITEMSTORE CLI entry point.

Defines the top-level ``itemstore`` command (via Click-Extra) and registers
its groups:

- ``itemstore db``: forward-only schema management (current/upgrade/status).
- ``itemstore items``: inspection of the item tree (show/children/versions/fields/init).

Examples
    $ itemstore --version
    $ itemstore db upgrade --force
    $ itemstore items show 11111111-1111-1111-1111-111111111111
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click
import click_extra as clickx
from platformdirs import user_log_dir

from itemstore import __version__
from itemstore.logging import console_handler, flight_recorder, log_startup

from .db import db as db_group
from .helpers.log_level_parser import parse_log_level
from .items import items as items_group

if TYPE_CHECKING:
    from logging import Handler

logger = logging.getLogger(__name__)


HELP = """ITEMSTORE command-line interface.

    ITEMSTORE keeps a hierarchical, versioned, multi-language content item
    tree in a relational database, one document per item, and serves item
    definitions through a size-bounded prefetch cache.
    """


def default_log_path() -> Path:
    """Default flight recorder file under the user log directory."""
    return Path(user_log_dir("itemstore", appauthor=False)) / "latest.log"


def effective_level(verbose_count: int, quiet_count: int) -> int:
    """Console level: WARNING, one step down per -v and up per -q."""
    level = logging.WARNING - 10 * verbose_count + 10 * quiet_count
    return max(logging.DEBUG, min(logging.CRITICAL, level))


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
    help="Lower the WARNING console threshold by one level per repetition.",
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help="Raise the WARNING console threshold by one level per repetition.",
    default=0,
)
@click.option(
    "--debug/--no-debug",
    is_flag=True,
    help="Debug console output (DEBUG level, logger names, source locations).",
    default=False,
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Flight recorder file.",
    default=default_log_path,
    envvar="ITEMSTORE_LOG_PATH",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--flight-recorder-capacity",
    type=click.IntRange(min=1),
    default=2000,
    hidden=True,
    envvar="ITEMSTORE_FLIGHT_RECORDER_CAPACITY",
    show_envvar=True,
    help="Number of log records the flight recorder keeps.",
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "use_flight_recorder",
    is_flag=True,
    help=(
        "Keep the last log records at DEBUG granularity in memory and write "
        "them to --log-path when a WARNING or ERROR is logged (or on exit "
        "with --force-flush). Console verbosity is unaffected."
    ),
    default=True,
    show_envvar=True,
)
@click.option(
    "--force-flush/--no-force-flush",
    "force_flush",
    is_flag=True,
    help="Write the flight recorder buffer to --log-path on exit as well.",
    default=False,
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
        "Minimum level for a specific logger (NAME=LEVEL); applies to both "
        "console and flight recorder. Repeatable, e.g. -L sqlalchemy.engine=INFO."
    ),
    default=("sqlalchemy=WARNING", "alembic=WARNING"),
    show_default=True,
    show_envvar=True,
)
@clickx.pass_context
def itemstore(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder_capacity: int,
    use_flight_recorder: bool,
    force_flush: bool,
    logger_levels: dict[str, int],
) -> None:
    """ITEMSTORE command-line interface."""

    level = effective_level(verbose_count, quiet_count)

    handlers: list[Handler] = [
        console_handler(level=level, debug_mode=debug, color=ctx.color is not False)
    ]
    if use_flight_recorder:
        handlers.append(
            flight_recorder(
                path=log_path,
                capacity=flight_recorder_capacity,
                flush_on_close=force_flush,
            )
        )

    # root captures everything; handlers do the filtering
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)

    for name, lvl in logger_levels.items():
        logging.getLogger(name).setLevel(lvl)

    log_startup(
        logger,
        app_version=__version__,
        level=level,
        handlers=handlers,
        log_path=log_path if use_flight_recorder else None,
        recorder_capacity=flight_recorder_capacity if use_flight_recorder else None,
        force_flush=force_flush,
        logger_levels=logger_levels,
    )

    ctx.call_on_close(logging.shutdown)


itemstore.add_command(db_group)
itemstore.add_command(items_group)
