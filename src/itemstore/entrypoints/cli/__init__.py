"""The ``itemstore`` command line."""
