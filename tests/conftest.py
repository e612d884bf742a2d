"""Test configuration and fixtures for the Library Catalog.

Fixtures provide:
1. Isolated stores - each test gets its own temporary directory or database
2. Configuration reset - the global config never leaks between tests
3. Sample records shared across test modules
"""

from collections.abc import Generator
from pathlib import Path

import pytest

from library_catalog.catalog import Catalog
from library_catalog.config import reset_config
from library_catalog.models import Book, Member
from library_catalog.storage import BlobStore, DatabaseManager, FileBlobStore, SQLiteBlobStore


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Generator[None, None, None]:
    """Run each test from a clean directory with a fresh config singleton."""
    monkeypatch.chdir(tmp_path)
    reset_config()
    yield
    reset_config()


# === Store Fixtures ===


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "data"


@pytest.fixture
def file_store(data_dir: Path) -> FileBlobStore:
    return FileBlobStore(data_dir)


@pytest.fixture
def db_manager(tmp_path: Path) -> Generator[DatabaseManager, None, None]:
    """Provide a database manager on a temporary SQLite file."""
    path = tmp_path / "db" / "catalog.db"
    manager = DatabaseManager(f"sqlite:///{path}", database_path=path)
    yield manager
    manager.close()


@pytest.fixture
def sqlite_store(db_manager: DatabaseManager) -> SQLiteBlobStore:
    return SQLiteBlobStore(db_manager)


@pytest.fixture(params=["file", "sqlite"])
def blob_store(request: pytest.FixtureRequest) -> BlobStore:
    """Run a test once against each storage backend."""
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
def catalog(file_store: FileBlobStore) -> Catalog:
    return Catalog(file_store)


# === Record Fixtures ===


@pytest.fixture
def dune() -> Book:
    return Book(title="Dune", author="Frank Herbert", isbn="111", publication_year=1965)


@pytest.fixture
def sample_books() -> list[Book]:
    """Three books deliberately not in title order."""
    return [
        Book(title="Solaris", author="Stanislaw Lem", isbn="333", publication_year=1961),
        Book(title="Dune", author="Frank Herbert", isbn="111", publication_year=1965),
        Book(
            title="The Left Hand of Darkness",
            author="Ursula K. Le Guin",
            isbn="222",
            publication_year=1969,
        ),
    ]


@pytest.fixture
def ann() -> Member:
    return Member(name="Ann", member_id="M1")
