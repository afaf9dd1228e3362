"""Fixture plugins and folder-based marks for the ITEMSTORE test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

pytest_plugins = [
    "tests.fixtures.sqlite",
    "tests.fixtures.postgres",
    "tests.fixtures.items",
]

TESTS_ROOT = Path(__file__).parent.resolve()

#: Top-level test folder → mark added to every test collected from it.
FOLDER_MARKS = {
    "unit": "unit",
    "contract": "contract",
    "integration": "integration",
    "functional": "functional",
}


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(  # pylint: disable=unused-argument
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Mark each test after the folder it lives in, unless already marked."""
    for item in items:
        try:
            folder = item.path.resolve().relative_to(TESTS_ROOT).parts[0]
        except ValueError:
            continue
        if (mark := FOLDER_MARKS.get(folder)) is None:
            continue
        if not any(marker.name == mark for marker in item.iter_markers()):
            item.add_marker(getattr(pytest.mark, mark))

