"""Domain layer for ITEMSTORE.

Contains the item data model: identifiers and their sentinels, field-value
keys and the scope-matching rule, item documents, item definitions, and the
change-set shapes handed in by the host repository. Technology-agnostic.

Dependency rule: do not import from `itemstore.adapters` or
`itemstore.entrypoints`.
"""
