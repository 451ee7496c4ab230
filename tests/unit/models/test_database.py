"""
Unit tests for database module.
"""

import os
import tempfile
from unittest.mock import patch

import duckdb
import pytest

from seismic_gallery.models.database import DatabaseManager, create_database, get_database_manager


class TestDatabaseManager:
    """Test cases for DatabaseManager class."""

    def test_init(self):
        manager = DatabaseManager("/tmp/test.db")

        assert manager.db_path == "/tmp/test.db"
        assert manager._connection is None

    def test_connect_reuses_connection(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            manager = DatabaseManager(os.path.join(tmp_dir, "test.db"))

            conn = manager.connect()
            assert isinstance(conn, duckdb.DuckDBPyConnection)
            assert manager.connect() is conn

            manager.close()
            assert manager._connection is None

    def test_initialize_and_verify_schema(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            with DatabaseManager(os.path.join(tmp_dir, "test.db")) as manager:
                assert manager.verify_schema() is False

                manager.initialize_schema()
                assert manager.verify_schema() is True

                # Running it twice is harmless
                manager.initialize_schema()
                assert manager.verify_schema() is True

    def test_initialize_schema_incompatible(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            manager = DatabaseManager(os.path.join(tmp_dir, "test.db"))

            with patch("seismic_gallery.models.database.validate_schema_compatibility", return_value=False):
                with pytest.raises(RuntimeError, match="Schema is not compatible"):
                    manager.initialize_schema()

    def test_ids_increase_with_each_insert(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            with DatabaseManager(os.path.join(tmp_dir, "test.db")) as manager:
                manager.initialize_schema()

                first = manager.execute_query(
                    "INSERT INTO artworks (username, image_url) VALUES (?, ?) RETURNING id", ("@a", "u1")
                )
                second = manager.execute_query(
                    "INSERT INTO artworks (username, image_url) VALUES (?, ?) RETURNING id", ("@b", "u2")
                )

                assert first[0][0] == 1
                assert second[0][0] == 2

    def test_execute_query_error(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            with DatabaseManager(os.path.join(tmp_dir, "test.db")) as manager:
                with pytest.raises(duckdb.Error):
                    manager.execute_query("SELECT * FROM missing_table")

    def test_context_manager_closes_connection(self):
        with tempfile.TemporaryDirectory() as tmp_dir:
            manager = DatabaseManager(os.path.join(tmp_dir, "test.db"))

            with manager:
                manager.connect()
                assert manager._connection is not None

            assert manager._connection is None


class TestDatabaseFunctions:
    """Test cases for module-level database helpers."""

    def test_create_database(self, db_path):
        manager = create_database(db_path)

        assert os.path.exists(db_path)
        with manager:
            assert manager.verify_schema() is True

    def test_create_database_failure(self, db_path):
        with patch.object(DatabaseManager, "initialize_schema", side_effect=duckdb.Error("disk full")):
            with pytest.raises(RuntimeError, match="Database creation failed"):
                create_database(db_path)

    def test_get_database_manager_creates_missing(self, db_path):
        manager = get_database_manager(db_path)

        assert os.path.exists(db_path)
        assert manager.db_path == db_path

    def test_get_database_manager_missing_without_create(self, db_path):
        with pytest.raises(FileNotFoundError, match="Database file not found"):
            get_database_manager(db_path, create_if_missing=False)

    def test_get_database_manager_repairs_schema(self, db_path):
        os.makedirs(os.path.dirname(db_path), exist_ok=True)
        duckdb.connect(db_path).close()

        manager = get_database_manager(db_path)

        with manager:
            assert manager.verify_schema() is True
