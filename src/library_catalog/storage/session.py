"""
Database session management for the SQLite blob store.

Key considerations:
- Sessions are short-lived, one per save or load
- Context managers guarantee the session is closed on every exit path
- Database errors are logged, rolled back and re-raised to the store,
  which translates them into storage exceptions
"""

import logging
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from .schema import Base

logger = logging.getLogger(__name__)


class DatabaseManager:
    """
    Manages the database engine and sessions for the SQLite blob store.

    The engine and session factory are created lazily on first use.
    """

    def __init__(self, database_url: str, database_path: Path | None = None):
        """
        Initialize the database manager.

        Args:
            database_url: SQLAlchemy database URL, e.g. ``sqlite:///data/catalog.db``
            database_path: SQLite file behind the URL; its directory is created
                by ``init_database``
        """
        self.database_url = database_url
        self.database_path = database_path
        self._engine: Engine | None = None
        self._session_factory: sessionmaker | None = None

    @property
    def engine(self) -> Engine:
        """Get or create the database engine."""
        if self._engine is None:
            self._engine = create_engine(self.database_url, echo=False)
            logger.info("Database engine created: %s", self._engine.url)
        return self._engine

    @property
    def session_factory(self) -> sessionmaker:
        """Get or create the session factory."""
        if self._session_factory is None:
            self._session_factory = sessionmaker(
                bind=self.engine,
                autoflush=False,
                # Keep loaded blobs usable after the session closes
                expire_on_commit=False,
            )
        return self._session_factory

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """
        Provide a transactional scope for database operations.

        ```python
        with db_manager.session_scope() as session:
            blob = session.get(CollectionBlob, "books.json")
        # Session is automatically committed or rolled back
        ```

        Yields:
            Database session

        Raises:
            Any database errors are logged and re-raised
        """
        session = self.session_factory()
        try:
            yield session
            session.commit()
            logger.debug("Database transaction committed successfully")
        except Exception:
            logger.exception("Database error, rolling back")
            session.rollback()
            raise
        finally:
            session.close()

    def init_database(self) -> None:
        """
        Create the database directory and the blob table if they do not exist.

        Raises:
            OSError: If the database directory cannot be created
            SQLAlchemyError: If the schema cannot be created
        """
        if self.database_path is not None:
            self.database_path.parent.mkdir(parents=True, exist_ok=True)
            logger.info("Using SQLite database at: %s", self.database_path)
        Base.metadata.create_all(bind=self.engine)
        logger.debug("Database schema ready")

    def close(self) -> None:
        """Dispose of the engine and forget the session factory."""
        if self._engine:
            self._engine.dispose()
            logger.info("Database engine disposed")
        self._engine = None
        self._session_factory = None
