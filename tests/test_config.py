"""Tests for catalog configuration.

These tests cover:
1. Default values
2. Environment variable loading
3. Validation of backend, log level and store names
4. The global configuration accessor
"""

import logging
import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from library_catalog.config import CatalogConfig, get_config, reset_config


class TestCatalogConfig:
    """Test catalog configuration behavior."""

    def test_default_configuration(self):
        config = CatalogConfig()

        assert config.storage_backend == "file"
        assert config.data_dir == Path("data")
        assert config.books_store == "books.json"
        assert config.members_store == "members.json"
        assert config.transactions_store == "transactions.json"
        assert config.record_transactions is True
        assert config.log_level == "INFO"
        assert config.debug is False

    def test_environment_variable_loading(self):
        env_vars = {
            "LIBRARY_CATALOG_STORAGE_BACKEND": "sqlite",
            "LIBRARY_CATALOG_DATABASE_PATH": "/tmp/catalog-test.db",
            "LIBRARY_CATALOG_BOOKS_STORE": "catalog-books",
            "LIBRARY_CATALOG_RECORD_TRANSACTIONS": "false",
            "LIBRARY_CATALOG_LOG_LEVEL": "debug",
        }

        with patch.dict(os.environ, env_vars):
            config = CatalogConfig()

        assert config.storage_backend == "sqlite"
        assert config.database_path == Path("/tmp/catalog-test.db")
        assert config.books_store == "catalog-books"
        assert config.record_transactions is False
        assert config.log_level == "DEBUG"

    def test_env_file_loading(self, tmp_path):
        """The working directory's .env is read (tests run from tmp_path)."""
        (tmp_path / ".env").write_text("LIBRARY_CATALOG_MEMBERS_STORE=people.json\n")

        assert CatalogConfig().members_store == "people.json"

    def test_invalid_backend(self):
        with pytest.raises(ValidationError):
            CatalogConfig(storage_backend="postgres")

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            CatalogConfig(log_level="LOUD")

    def test_store_names_must_differ(self):
        with pytest.raises(ValidationError, match="must differ"):
            CatalogConfig(books_store="shared.json", members_store="shared.json")

    def test_effective_log_level(self):
        assert CatalogConfig(log_level="WARNING").effective_log_level == logging.WARNING
        assert CatalogConfig(log_level="WARNING", debug=True).effective_log_level == logging.DEBUG

    def test_database_url(self):
        config = CatalogConfig(database_path=Path("/tmp/c.db"))

        assert config.get_database_url() == "sqlite:////tmp/c.db"


class TestConfigSingleton:
    """get_config returns one shared instance until reset."""

    def test_same_instance(self):
        assert get_config() is get_config()

    def test_reset(self):
        first = get_config()
        reset_config()

        assert get_config() is not first
