"""Logging setup for the ITEMSTORE command line.

Console output goes through Rich on stderr. An optional in-memory "flight
recorder" keeps the most recent records at DEBUG granularity and dumps them
to a file when something goes wrong, so a failed provider start-up or
migration can be diagnosed after the fact even when the console was quiet.
"""

from __future__ import annotations

import logging
import os
import platform
import sys
from logging.handlers import MemoryHandler
from pathlib import Path
from typing import TYPE_CHECKING, Literal, TypeAlias

import alembic
import sqlalchemy
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from logging import Logger

# pylint: disable=too-few-public-methods

PROJECT_PREFIX = "itemstore"

ColorSystem: TypeAlias = Literal["auto", "standard", "256", "truecolor", "windows"]

FLIGHT_RECORDER_FORMAT = (
    "[%(asctime)s] [%(process)d:%(threadName)s] "
    "%(levelname)s %(name)s:%(lineno)d: %(message)s"
)


class LibraryPrefixFilter(logging.Filter):
    """Tag records from other libraries with a bracketed source.

    Records from ``itemstore.*`` loggers get an empty ``record.prefix``; any
    other record gets the top-level package of its logger, e.g. ``[sqlalchemy]``
    for ``sqlalchemy.engine.Engine``. Nothing is filtered out.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        top = record.name.split(".")[0]
        record.prefix = "" if top == PROJECT_PREFIX else f"[{top}]"
        return True


def console_handler(
    level: int = logging.INFO, debug_mode: bool = False, color: bool = True
) -> RichHandler:
    """Build the Rich console handler.

    Args:
        level: Minimum level shown on the console. Forced to DEBUG in debug mode.
        debug_mode: Show logger names, timestamps and source locations.
        color: Emit ANSI colors; follows click-extra's ``--color/--no-color``.

    Returns:
        RichHandler: A handler writing to stderr.
    """
    color_system: ColorSystem | None = "auto" if color else None
    console = Console(color_system=color_system, stderr=True)

    if debug_mode:
        level = logging.DEBUG

    handler = RichHandler(
        level=level,
        console=console,
        rich_tracebacks=True,
        show_time=False,
        show_path=debug_mode,
        enable_link_path=debug_mode,
    )

    if debug_mode:
        handler.setFormatter(logging.Formatter("%(asctime)s %(name)s: %(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(prefix)s %(message)s"))
        handler.addFilter(LibraryPrefixFilter())

    return handler


def flight_recorder(
    path: Path,
    capacity: int = 2000,
    flush_level: int = logging.WARNING,
    flush_on_close: bool = False,
) -> MemoryHandler:
    """Build a memory-buffered handler that dumps to `path`.

    Up to `capacity` records are held in memory. The buffer is written out when
    a record at `flush_level` or above arrives, when it fills up, and, if
    `flush_on_close` is set, when logging shuts down.

    Returns:
        MemoryHandler: The buffering handler; its target is a FileHandler.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(FLIGHT_RECORDER_FORMAT))

    return MemoryHandler(
        capacity=capacity,
        flushLevel=flush_level,
        target=file_handler,
        flushOnClose=flush_on_close,
    )


def log_startup(  # pylint: disable=too-many-arguments
    logger: Logger,
    *,
    app_version: str,
    level: int,
    handlers: list[logging.Handler],
    log_path: Path | None,
    recorder_capacity: int | None,
    force_flush: bool,
    logger_levels: dict[str, int],
) -> None:
    """Log a one-line summary at INFO and environment diagnostics at DEBUG.

    Args:
        logger: Logger to write to.
        app_version: ITEMSTORE version.
        level: Effective console level.
        handlers: Handlers installed on the root logger.
        log_path: Flight recorder file, if any.
        recorder_capacity: Flight recorder buffer size; ``None`` when the
            recorder is off.
        force_flush: Whether the recorder dumps on a clean exit.
        logger_levels: Per-logger level overrides in effect.
    """
    recording = recorder_capacity is not None

    logger.info(
        "ITEMSTORE %s (console=%s, flight-recorder=%s)",
        app_version,
        logging.getLevelName(level),
        "ON" if recording else "OFF",
    )

    logger.debug("Python: %s", sys.version.split()[0])
    logger.debug("Platform: %s %s", platform.system(), platform.release())
    logger.debug("PID: %s", os.getpid())
    logger.debug("CWD: %s", Path.cwd())
    logger.debug("SQLAlchemy: %s", sqlalchemy.__version__)
    logger.debug("Alembic: %s", alembic.__version__)
    logger.debug("Handlers: %s", [type(h).__name__ for h in handlers])
    if recording:
        logger.debug(
            "Flight recorder: path=%s, capacity=%s, flush_on_close=%s",
            log_path if log_path else "<none>",
            recorder_capacity,
            force_flush,
        )
    logger.debug(
        "Per-logger overrides: %s",
        {name: logging.getLevelName(lvl) for name, lvl in logger_levels.items()}
        or "<none>",
    )
