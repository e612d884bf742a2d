"""
Storage exceptions for the Library Catalog.

Callers need to tell three situations apart when loading a collection:

- the store does not exist yet (expected on first run, start empty)
- the store exists but cannot be read or written
- the store was read but does not hold a valid encoding of the collection

``StoreNotFoundError`` subclasses ``StoreIOError`` so code that only cares
about I/O can catch the parent.
"""


class StorageException(Exception):
    """Base exception for storage operations."""


class StoreIOError(StorageException):
    """Raised when a store cannot be read or written."""


class StoreNotFoundError(StoreIOError):
    """Raised when loading from a store that does not exist."""


class StoreDecodeError(StorageException):
    """Raised when a store's content is not a valid encoding of the collection."""
