"""ITEMSTORE

A persistence adapter that serves a hierarchical, versioned, multi-language
content-item repository out of a document-oriented backing store. Items keep
their versioned and localized field values as a flat keyed collection inside a
single document, and hot item metadata is served from an identifier-keyed
prefetch cache.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
