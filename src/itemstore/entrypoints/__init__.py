"""Entrypoints (inbound adapters) for ITEMSTORE.

Expose the provider to the outside world, currently as the `itemstore` CLI.
Parse and validate inputs, call the provider, and present results.

Dependency rule: may import `itemstore.bootstrap` and `itemstore.service_layer`;
avoid importing `itemstore.adapters` directly.
"""
