"""ITEMSTORE test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/class/function.
- contract/     : Port behavior enforced across every adapter.
- integration/  : Adapters and provider against a real (SQLite) database.
- functional/   : The ``itemstore`` CLI, driven through ``CliRunner``.
- fixtures/     : Shared fixtures, loaded via ``pytest_plugins``.

Markers are applied per folder by the root conftest; hypothesis tests also
carry ``@pytest.mark.property``.
"""
