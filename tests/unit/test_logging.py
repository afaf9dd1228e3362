"""Unit tests for console/flight-recorder logging helpers."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from rich.logging import RichHandler

from itemstore.logging import (
    LibraryPrefixFilter,
    console_handler,
    flight_recorder,
    log_startup,
)


def make_record(name: str) -> logging.LogRecord:
    """A minimal INFO record from logger `name`."""
    return logging.LogRecord(name, logging.INFO, __file__, 1, "msg", None, None)


@pytest.mark.parametrize(
    "name, prefix",
    [
        ("itemstore.service_layer.item_mapper", ""),
        ("itemstore", ""),
        ("sqlalchemy.engine.Engine", "[sqlalchemy]"),
        ("alembic", "[alembic]"),
        ("itemstorex", "[itemstorex]"),
    ],
)
def test_prefix_filter(name: str, prefix: str):
    """Only records from other packages get a bracketed prefix."""
    record = make_record(name)
    assert LibraryPrefixFilter().filter(record) is True
    assert record.prefix == prefix  # type: ignore[attr-defined]


def test_console_handler_levels():
    """Debug mode forces DEBUG and drops the prefix filter."""
    normal = console_handler(level=logging.WARNING)
    debug = console_handler(level=logging.WARNING, debug_mode=True, color=False)

    assert isinstance(normal, RichHandler)
    assert normal.level == logging.WARNING
    assert any(isinstance(f, LibraryPrefixFilter) for f in normal.filters)
    assert debug.level == logging.DEBUG
    assert not debug.filters


def test_flight_recorder_dumps_on_warning(tmp_path: Path):
    """Buffered records reach the file once a WARNING arrives."""
    path = tmp_path / "logs" / "latest.log"
    handler = flight_recorder(path, capacity=10)
    target = handler.target
    logger = logging.getLogger("itemstore.tests.flight")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    logger.addHandler(handler)
    try:
        logger.debug("quiet detail")
        assert path.read_text(encoding="utf-8") == ""

        logger.warning("something odd")
        contents = path.read_text(encoding="utf-8")
        assert "quiet detail" in contents
        assert "WARNING itemstore.tests.flight" in contents
    finally:
        logger.removeHandler(handler)
        handler.close()
        target.close()  # type: ignore[union-attr]


def test_log_startup(caplog: pytest.LogCaptureFixture, tmp_path: Path):
    """A summary line at INFO, diagnostics at DEBUG."""
    logger = logging.getLogger("itemstore.tests.startup")
    with caplog.at_level(logging.DEBUG, logger="itemstore.tests.startup"):
        log_startup(
            logger,
            app_version="1.2.3",
            level=logging.INFO,
            handlers=[logging.NullHandler()],
            log_path=tmp_path / "latest.log",
            recorder_capacity=50,
            force_flush=True,
            logger_levels={"sqlalchemy": logging.WARNING},
        )

    infos = [r.getMessage() for r in caplog.records if r.levelno == logging.INFO]
    assert infos == ["ITEMSTORE 1.2.3 (console=INFO, flight-recorder=ON)"]
    text = caplog.text
    assert "SQLAlchemy:" in text
    assert "capacity=50" in text
    assert "'sqlalchemy': 'WARNING'" in text
