"""
Blob stores for persistent collections.

A blob store maps a store name to one opaque byte payload. Persistent
collections serialize themselves whole and hand the bytes to a store, so
the stores know nothing about records.

Two stores are provided:
- FileBlobStore: one file per name under a directory
- SQLiteBlobStore: one row per name in a SQLite table via SQLAlchemy

Both translate their native failures into the storage exceptions, so a
caller can tell an absent store from an unreadable one.
"""

import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from sqlalchemy.exc import SQLAlchemyError

from .errors import StoreIOError, StoreNotFoundError
from .schema import CollectionBlob
from .session import DatabaseManager

logger = logging.getLogger(__name__)


class BlobStore(ABC):
    """Abstract named byte store."""

    @abstractmethod
    def read(self, name: str) -> bytes:
        """
        Read the payload saved under ``name``.

        Raises:
            StoreNotFoundError: If nothing was ever saved under ``name``
            StoreIOError: If the store cannot be read
        """

    @abstractmethod
    def write(self, name: str, data: bytes) -> None:
        """
        Replace the payload saved under ``name``.

        A reader sees either the previous payload or ``data``, never a mix.

        Raises:
            StoreIOError: If the store cannot be written
        """

    def describe(self, name: str) -> str:
        """Human-readable location of ``name`` for log messages."""
        return name


class FileBlobStore(BlobStore):
    """
    Stores each payload as a file under a base directory.

    Names are resolved relative to the directory; an absolute name is used
    as-is. Writes go through a temporary file in the target directory that
    is fsynced and then moved over the target with ``os.replace``.
    """

    def __init__(self, directory: Path | str):
        self.directory = Path(directory)

    def resolve(self, name: str) -> Path:
        return self.directory / name

    def describe(self, name: str) -> str:
        return str(self.resolve(name))

    def read(self, name: str) -> bytes:
        path = self.resolve(name)
        try:
            return path.read_bytes()
        except FileNotFoundError as e:
            raise StoreNotFoundError(f"No store at {path}") from e
        except OSError as e:
            raise StoreIOError(f"Cannot read store {path}: {e}") from e

    def write(self, name: str, data: bytes) -> None:
        path = self.resolve(name)
        tmp_path: str | None = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_path, path)
            tmp_path = None
        except OSError as e:
            raise StoreIOError(f"Cannot write store {path}: {e}") from e
        finally:
            if tmp_path is not None:
                Path(tmp_path).unlink(missing_ok=True)
        logger.debug("Wrote %d bytes to %s", len(data), path)


class SQLiteBlobStore(BlobStore):
    """
    Stores each payload as a row of the ``collection_blobs`` table.

    The table is created on first use. Every read and write runs in its own
    session scope, so the row is replaced atomically on save.
    """

    def __init__(self, db_manager: DatabaseManager):
        self.db_manager = db_manager
        self._schema_ready = False

    def _ensure_schema(self, name: str) -> None:
        if self._schema_ready:
            return
        try:
            self.db_manager.init_database()
        except OSError as e:
            raise StoreIOError(f"Cannot prepare store {self.describe(name)}: {e}") from e
        self._schema_ready = True

    def describe(self, name: str) -> str:
        return f"{self.db_manager.database_url}#{name}"

    def read(self, name: str) -> bytes:
        try:
            self._ensure_schema(name)
            with self.db_manager.session_scope() as session:
                blob = session.get(CollectionBlob, name)
                payload = None if blob is None else bytes(blob.payload)
        except SQLAlchemyError as e:
            raise StoreIOError(f"Cannot read store {self.describe(name)}: {e}") from e

        if payload is None:
            raise StoreNotFoundError(f"No store at {self.describe(name)}")
        return payload

    def write(self, name: str, data: bytes) -> None:
        try:
            self._ensure_schema(name)
            with self.db_manager.session_scope() as session:
                session.merge(CollectionBlob(name=name, payload=data, size=len(data)))
        except SQLAlchemyError as e:
            raise StoreIOError(f"Cannot write store {self.describe(name)}: {e}") from e
        logger.debug("Wrote %d bytes to %s", len(data), self.describe(name))
