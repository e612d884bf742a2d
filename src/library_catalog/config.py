"""Configuration management for the Library Catalog.

Settings come from (highest priority first) constructor arguments,
``LIBRARY_CATALOG_*`` environment variables, then a ``.env`` file.
"""

import logging
import sys
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CatalogConfig(BaseSettings):
    """Catalog configuration.

    Controls where the books, members and transactions collections are
    persisted and how the outer surfaces (CLI, MCP server) log.
    """

    model_config = SettingsConfigDict(
        # Use LIBRARY_CATALOG_ prefix for all env vars
        env_prefix="LIBRARY_CATALOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Storage Configuration ===

    storage_backend: str = Field(
        default="file",
        description="Where collections are persisted: one file each, or rows in SQLite",
        pattern=r"^(file|sqlite)$",
    )

    data_dir: Path = Field(
        default=Path("data"),
        description="Directory holding the collection files for the file backend",
    )

    database_path: Path = Field(
        default=Path("data/catalog.db"),
        description="SQLite database file for the sqlite backend",
    )

    books_store: str = Field(
        default="books.json",
        description="Store name for the books collection",
        min_length=1,
    )

    members_store: str = Field(
        default="members.json",
        description="Store name for the members collection",
        min_length=1,
    )

    transactions_store: str = Field(
        default="transactions.json",
        description="Store name for the transaction ledger",
        min_length=1,
    )

    record_transactions: bool = Field(
        default=True,
        description="Record a Transaction for every borrow and close it on return",
    )

    # === Server Metadata ===

    server_name: str = Field(
        default="library-catalog",
        description="MCP server name used in protocol handshake",
        pattern=r"^[a-z0-9-]+$",
    )

    # === Development Configuration ===

    debug: bool = Field(
        default=False,
        description="Enable debug logging",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR)$",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept lowercase level names from the environment."""
        return v.upper() if isinstance(v, str) else v

    @model_validator(mode="after")
    def validate_store_names(self) -> "CatalogConfig":
        """Each collection needs its own store, or saves would overwrite each other."""
        names = [self.books_store, self.members_store, self.transactions_store]
        if len(set(names)) != len(names):
            raise ValueError("books_store, members_store and transactions_store must differ")
        return self

    @property
    def effective_log_level(self) -> int:
        """Numeric logging level, forced to DEBUG in debug mode."""
        if self.debug:
            return logging.DEBUG
        return logging.getLevelName(self.log_level)

    def get_database_url(self) -> str:
        """Get SQLAlchemy database URL for the sqlite backend."""
        return f"sqlite:///{self.database_path}"


class _ConfigStore:
    """Internal storage for configuration singleton."""

    _instance: CatalogConfig | None = None


def get_config() -> CatalogConfig:
    """Get or create the global configuration instance."""
    if _ConfigStore._instance is None:  # type: ignore[reportPrivateUsage]
        _ConfigStore._instance = CatalogConfig()  # type: ignore[reportPrivateUsage]
    return _ConfigStore._instance  # type: ignore[reportPrivateUsage]


def reset_config() -> None:
    """Reset configuration (useful for testing)."""
    _ConfigStore._instance = None  # type: ignore[reportPrivateUsage]


def configure_logging(config: CatalogConfig) -> None:
    """Configure root logging to stderr at the configured level.

    Stderr keeps stdout free for the CLI menu and the MCP stdio transport.
    """
    logging.basicConfig(
        level=config.effective_log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
