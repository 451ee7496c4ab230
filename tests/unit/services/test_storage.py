"""
Unit tests for storage service.
"""

from unittest.mock import MagicMock, patch

import pytest
from google.cloud.exceptions import GoogleCloudError, NotFound

from seismic_gallery.services.storage import StorageError, StorageService, get_storage_service


@pytest.fixture
def mock_client_class():
    with patch("seismic_gallery.services.storage.storage.Client") as client_class:
        yield client_class


class TestStorageServiceInit:
    """Test cases for StorageService construction."""

    def test_init_success(self, mock_client_class):
        mock_client = MagicMock()
        mock_bucket = MagicMock()
        mock_client.bucket.return_value = mock_bucket
        mock_client_class.return_value = mock_client

        service = StorageService()

        assert service.artworks_bucket_name == "test-artworks"
        assert service.project_id == "test-project"
        assert service.client == mock_client
        assert service.artworks_bucket == mock_bucket
        assert service.database_bucket is None
        assert service.database_mirror_enabled is False
        mock_client_class.assert_called_once_with(project="test-project")

    def test_init_with_database_bucket(self, mock_client_class):
        service = StorageService(database_bucket_name="test-database")

        assert service.database_bucket is not None
        assert service.database_mirror_enabled is True
        mock_client_class.return_value.bucket.assert_any_call("test-database")

    def test_init_missing_bucket_name(self, monkeypatch):
        monkeypatch.delenv("GCS_ARTWORKS_BUCKET")

        with pytest.raises(StorageError, match="GCS_ARTWORKS_BUCKET environment variable is required"):
            StorageService()

    def test_init_missing_project_id(self, monkeypatch):
        monkeypatch.delenv("GOOGLE_CLOUD_PROJECT")

        with pytest.raises(StorageError, match="GOOGLE_CLOUD_PROJECT environment variable is required"):
            StorageService()

    def test_init_empty_bucket_name(self, monkeypatch):
        monkeypatch.setenv("GCS_ARTWORKS_BUCKET", "")

        with pytest.raises(StorageError, match="GCS_ARTWORKS_BUCKET environment variable is required") as exc_info:
            StorageService()

        assert isinstance(exc_info.value.original_exception, ValueError)

    def test_init_reads_config_helpers(self, mock_client_class):
        with patch("seismic_gallery.services.storage.get_artworks_bucket", return_value="configured-artworks"), patch(
            "seismic_gallery.services.storage.get_project_id", return_value="configured-project"
        ):
            service = StorageService()

        assert service.artworks_bucket_name == "configured-artworks"
        mock_client_class.assert_called_once_with(project="configured-project")

    def test_init_explicit_arguments_skip_config(self, mock_client_class, monkeypatch):
        monkeypatch.delenv("GCS_ARTWORKS_BUCKET")
        monkeypatch.delenv("GOOGLE_CLOUD_PROJECT")

        service = StorageService(bucket_name="explicit-artworks", project_id="explicit-project")

        assert service.artworks_bucket_name == "explicit-artworks"
        assert service.project_id == "explicit-project"

    def test_init_client_error(self, mock_client_class):
        mock_client_class.side_effect = Exception("Client initialization failed")

        with pytest.raises(StorageError, match="Failed to initialize GCS client"):
            StorageService()

    def test_get_storage_service_singleton(self, mock_client_class):
        assert get_storage_service() is get_storage_service()
        mock_client_class.assert_called_once()


class TestStorageServiceObjects:
    """Test cases for image object operations."""

    def setup_method(self):
        with patch("seismic_gallery.services.storage.storage.Client") as mock_client_class:
            self.mock_bucket = MagicMock()
            mock_client_class.return_value.bucket.return_value = self.mock_bucket
            self.service = StorageService(bucket_name="test-artworks", project_id="test-project")

        self.mock_blob = MagicMock()
        self.mock_blob.generation = 12345
        self.mock_bucket.blob.return_value = self.mock_blob

    def test_put_object_success(self, sample_image_data):
        result = self.service.put_object("1700000000000-cat.png", sample_image_data, "image/png")

        self.mock_bucket.blob.assert_called_once_with("1700000000000-cat.png")
        self.mock_blob.upload_from_string.assert_called_once_with(sample_image_data, content_type="image/png")
        assert self.mock_blob.metadata["upload_type"] == "artwork"
        assert result == {
            "key": "1700000000000-cat.png",
            "file_size": len(sample_image_data),
            "content_type": "image/png",
            "generation": 12345,
        }

    def test_put_object_derives_content_type(self, sample_image_data):
        result = self.service.put_object("5-photo.JPG", sample_image_data)

        assert result["content_type"] == "image/jpeg"
        self.mock_blob.upload_from_string.assert_called_once_with(sample_image_data, content_type="image/jpeg")

    def test_put_object_unknown_extension(self):
        assert self.service.put_object("5-notes", b"data")["content_type"] == "application/octet-stream"

    def test_put_object_gcs_error(self, sample_image_data):
        self.mock_blob.upload_from_string.side_effect = GoogleCloudError("quota exceeded")

        with pytest.raises(StorageError, match="quota exceeded") as exc_info:
            self.service.put_object("5-cat.png", sample_image_data)

        assert exc_info.value.code == "object_write_failed"
        assert exc_info.value.details["key"] == "5-cat.png"

    def test_put_object_unexpected_error(self, sample_image_data):
        self.mock_blob.upload_from_string.side_effect = RuntimeError("socket closed")

        with pytest.raises(StorageError, match="Unexpected error writing"):
            self.service.put_object("5-cat.png", sample_image_data)

    def test_get_public_url(self):
        self.mock_blob.public_url = "https://storage.googleapis.com/test-artworks/5-my%20cat.png"

        assert self.service.get_public_url("5-my cat.png") == self.mock_blob.public_url
        self.mock_bucket.blob.assert_called_once_with("5-my cat.png")

    def test_delete_object_success(self):
        self.mock_blob.exists.return_value = True

        self.service.delete_object("5-cat.png")

        self.mock_blob.delete.assert_called_once()

    def test_delete_object_missing(self):
        self.mock_blob.exists.return_value = False

        self.service.delete_object("5-cat.png")

        self.mock_blob.delete.assert_not_called()

    def test_delete_object_not_found_race(self):
        self.mock_blob.exists.return_value = True
        self.mock_blob.delete.side_effect = NotFound("gone")

        self.service.delete_object("5-cat.png")

    def test_delete_object_gcs_error(self):
        self.mock_blob.exists.return_value = True
        self.mock_blob.delete.side_effect = GoogleCloudError("permission denied")

        with pytest.raises(StorageError, match="Failed to delete object") as exc_info:
            self.service.delete_object("5-cat.png")

        assert exc_info.value.code == "object_delete_failed"


class TestStorageServiceDatabaseMirror:
    """Test cases for the DuckDB file mirror."""

    def setup_method(self):
        with patch("seismic_gallery.services.storage.storage.Client") as mock_client_class:
            self.artworks_bucket = MagicMock()
            self.database_bucket = MagicMock()
            mock_client_class.return_value.bucket.side_effect = [self.artworks_bucket, self.database_bucket]
            self.service = StorageService(
                bucket_name="test-artworks",
                project_id="test-project",
                database_bucket_name="test-database",
            )

        self.mock_blob = MagicMock()
        self.mock_blob.name = "databases/artworks.db"
        self.database_bucket.blob.return_value = self.mock_blob

    def test_upload_database_file(self):
        result = self.service.upload_database_file(b"duckdb", "artworks.db")

        self.database_bucket.blob.assert_called_once_with("databases/artworks.db")
        self.mock_blob.upload_from_string.assert_called_once_with(
            b"duckdb", content_type="application/octet-stream"
        )
        assert result == {"gcs_path": "databases/artworks.db", "bucket": "test-database"}
        self.artworks_bucket.blob.assert_not_called()

    def test_upload_database_file_error(self):
        self.mock_blob.upload_from_string.side_effect = GoogleCloudError("unavailable")

        with pytest.raises(StorageError, match="Failed to upload database file"):
            self.service.upload_database_file(b"duckdb", "artworks.db")

    def test_download_database_file(self):
        self.mock_blob.exists.return_value = True
        self.mock_blob.download_as_bytes.return_value = b"duckdb"

        assert self.service.download_database_file("artworks.db") == b"duckdb"

    def test_download_database_file_missing(self):
        self.mock_blob.exists.return_value = False

        with pytest.raises(StorageError, match="Database file not found"):
            self.service.download_database_file("artworks.db")

    def test_database_file_exists(self):
        self.mock_blob.exists.return_value = False

        assert self.service.database_file_exists("artworks.db") is False

    def test_mirror_not_configured(self, mock_client_class):
        service = StorageService(bucket_name="test-artworks", project_id="test-project")

        with pytest.raises(StorageError, match="Database bucket not configured"):
            service.upload_database_file(b"duckdb", "artworks.db")
