"""
Storage package for the Library Catalog.

This package provides:
- PersistentCollection: generic record list with whole-collection save/load
- Blob stores the collections persist to (files or a SQLite table)
- Storage exceptions distinguishing absent, unreadable and undecodable stores
"""

from .backends import BlobStore, FileBlobStore, SQLiteBlobStore
from .collection import PersistentCollection
from .errors import StorageException, StoreDecodeError, StoreIOError, StoreNotFoundError
from .schema import Base, CollectionBlob
from .session import DatabaseManager

__all__ = [
    "Base",
    "BlobStore",
    "CollectionBlob",
    "DatabaseManager",
    "FileBlobStore",
    "PersistentCollection",
    "SQLiteBlobStore",
    "StorageException",
    "StoreDecodeError",
    "StoreIOError",
    "StoreNotFoundError",
]
