"""Fixtures for driving the ``itemstore`` CLI."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from tests.fixtures.items import JOIN_PARENT_ID


@pytest.fixture
def cli_env(sqlite_url: str, tmp_path: Path) -> dict[str, str]:
    """Environment pointing the CLI at a scratch database and directories."""
    return {
        "ITEMSTORE_DB_URL": sqlite_url,
        "ITEMSTORE_JOIN_PARENT_ID": str(JOIN_PARENT_ID),
        "ITEMSTORE_BLOB_ROOT": str(tmp_path / "blobs"),
        "ITEMSTORE_LOG_PATH": str(tmp_path / "logs" / "latest.log"),
    }


@pytest.fixture
def runner(cli_env: dict[str, str]) -> CliRunner:
    """A CliRunner using `cli_env`."""
    return CliRunner(env=cli_env)
