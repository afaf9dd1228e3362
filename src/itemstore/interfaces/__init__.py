"""Interfaces (application boundary) for ITEMSTORE.

Defines framework-free contracts shared by the service layer and adapters:
the item document store, the blob store and the sized cache container.

Dependency rule: may import `itemstore.domain` only. It is imported by
`itemstore.service_layer`, `itemstore.adapters`, and `itemstore.bootstrap`.
"""
