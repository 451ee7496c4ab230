"""
Pytest configuration and shared fixtures for seismic_gallery tests.
"""

from urllib.parse import quote

import pytest

from seismic_gallery.config import get_config
from seismic_gallery.services.metadata import reset_metadata_service
from seismic_gallery.services.storage import reset_storage_service
from seismic_gallery.ui.handlers.error import StorageError, get_error_handler

# 1x1 transparent PNG
PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01\x08\x06\x00\x00\x00\x1f\x15\xc4\x89"
    b"\x00\x00\x00\rIDATx\x9cc\xf8\x0f\x00\x00\x01\x01\x00\x05\x18\xd8N\x00\x00\x00\x00IEND\xaeB`\x82"
)


@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch, tmp_path):
    """Point every test at a throwaway database and fake GCS settings."""
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("GOOGLE_CLOUD_PROJECT", "test-project")
    monkeypatch.setenv("GCS_ARTWORKS_BUCKET", "test-artworks")
    monkeypatch.setenv("GALLERY_DB_PATH", str(tmp_path / "db" / "artworks.db"))
    monkeypatch.delenv("GCS_DATABASE_BUCKET", raising=False)
    monkeypatch.delenv("DEBUG", raising=False)

    get_config().clear_cache()
    reset_storage_service()
    reset_metadata_service()
    get_error_handler().reset_statistics()

    yield

    get_config().clear_cache()
    reset_storage_service()
    reset_metadata_service()


@pytest.fixture
def sample_image_data():
    """Raw bytes of a tiny PNG image."""
    return PNG_BYTES


@pytest.fixture
def db_path(tmp_path):
    """Path of a DuckDB file that does not exist yet."""
    return str(tmp_path / "gallery" / "artworks.db")


class FakeObjectStore:
    """
    In-memory stand-in for StorageService's object operations.

    Public URLs are built the way GCS builds them, with the key quoted.
    Set fail_put or fail_delete to an exception to make the next calls fail.
    """

    base_url = "https://storage.googleapis.com/test-artworks"

    def __init__(self):
        self.objects: dict[str, bytes] = {}
        self.calls: list[tuple[str, str]] = []
        self.fail_put: Exception | None = None
        self.fail_delete: Exception | None = None

    def put_object(self, key, data, content_type=None):
        self.calls.append(("put_object", key))
        if self.fail_put is not None:
            raise self.fail_put
        self.objects[key] = data
        return {"key": key, "file_size": len(data), "content_type": content_type, "generation": 1}

    def get_public_url(self, key):
        self.calls.append(("get_public_url", key))
        return f"{self.base_url}/{quote(key)}"

    def delete_object(self, key):
        self.calls.append(("delete_object", key))
        if self.fail_delete is not None:
            raise self.fail_delete
        self.objects.pop(key, None)


@pytest.fixture
def object_store():
    """A fresh in-memory object store."""
    return FakeObjectStore()


@pytest.fixture
def storage_failure():
    """A StorageError like the one GCS failures surface as."""
    return StorageError("503 Service Unavailable", code="object_write_failed")
