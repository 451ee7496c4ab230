"""Storage service for Google Cloud Storage operations."""

from datetime import datetime
from pathlib import Path

from google.cloud import storage  # type: ignore[attr-defined]
from google.cloud.exceptions import GoogleCloudError, NotFound

from ..config import get_artworks_bucket, get_database_bucket, get_project_id
from ..logging_config import get_logger
from ..ui.handlers.error import StorageError

logger = get_logger(__name__)

DATABASE_PREFIX = "databases"

CONTENT_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".bmp": "image/bmp",
    ".svg": "image/svg+xml",
    ".avif": "image/avif",
    ".heic": "image/heic",
    ".heif": "image/heif",
    ".tiff": "image/tiff",
    ".tif": "image/tiff",
}


class StorageService:
    """Object store for artwork images, plus the optional database mirror bucket."""

    def __init__(
        self,
        bucket_name: str | None = None,
        project_id: str | None = None,
        database_bucket_name: str | None = None,
    ) -> None:
        """
        Initialize the storage service.

        Args:
            bucket_name: Public bucket for artwork images (defaults to GCS_ARTWORKS_BUCKET)
            project_id: GCP project ID (defaults to GOOGLE_CLOUD_PROJECT)
            database_bucket_name: Bucket mirroring the DuckDB file (defaults to GCS_DATABASE_BUCKET)

        Raises:
            StorageError: If required configuration is missing or the client cannot be created
        """
        try:
            self.artworks_bucket_name = bucket_name or get_artworks_bucket()
        except ValueError as e:
            raise StorageError("GCS_ARTWORKS_BUCKET environment variable is required", original_exception=e) from e

        try:
            self.project_id = project_id or get_project_id()
        except ValueError as e:
            raise StorageError("GOOGLE_CLOUD_PROJECT environment variable is required", original_exception=e) from e

        self.database_bucket_name = database_bucket_name or get_database_bucket()

        try:
            self.client = storage.Client(project=self.project_id)
            self.artworks_bucket = self.client.bucket(self.artworks_bucket_name)
            self.database_bucket = (
                self.client.bucket(self.database_bucket_name) if self.database_bucket_name else None
            )
            logger.info(
                "storage_service_initialized",
                artworks_bucket=self.artworks_bucket_name,
                database_bucket=self.database_bucket_name,
                project_id=self.project_id,
            )
        except Exception as e:
            raise StorageError(f"Failed to initialize GCS client: {e}", original_exception=e) from e

    def put_object(self, key: str, data: bytes, content_type: str | None = None) -> dict:
        """
        Write an image object under the given key.

        An existing object with the same key is overwritten.

        Args:
            key: Object key
            data: Raw image bytes
            content_type: MIME type (derived from the key's extension when omitted)

        Returns:
            dict: Upload result with key, size and content type

        Raises:
            StorageError: If the write fails
        """
        content_type = content_type or self._get_content_type(key)

        try:
            blob = self.artworks_bucket.blob(key)
            blob.metadata = {
                "uploaded_at": datetime.now().isoformat(),
                "file_size": str(len(data)),
                "upload_type": "artwork",
            }
            blob.upload_from_string(data, content_type=content_type)

            logger.info("object_written", key=key, file_size=len(data), content_type=content_type)

            return {
                "key": key,
                "file_size": len(data),
                "content_type": content_type,
                "generation": blob.generation,
            }

        except GoogleCloudError as e:
            raise StorageError(f"{e}", code="object_write_failed", details={"key": key}, original_exception=e) from e
        except Exception as e:
            raise StorageError(
                f"Unexpected error writing '{key}': {e}",
                code="object_write_failed",
                details={"key": key},
                original_exception=e,
            ) from e

    def get_public_url(self, key: str) -> str:
        """
        Resolve the public URL of an object.

        The bucket is expected to grant public read access; no request is
        made to GCS.
        """
        url: str = self.artworks_bucket.blob(key).public_url
        return url

    def delete_object(self, key: str) -> None:
        """
        Delete an image object.

        A missing object is logged and treated as already deleted.

        Raises:
            StorageError: If the deletion fails
        """
        try:
            blob = self.artworks_bucket.blob(key)

            if not blob.exists():
                logger.warning("object_not_found_for_deletion", key=key)
                return

            blob.delete()
            logger.info("object_deleted", key=key)

        except NotFound:
            logger.warning("object_not_found_for_deletion", key=key)
        except GoogleCloudError as e:
            raise StorageError(
                f"Failed to delete object '{key}': {e}",
                code="object_delete_failed",
                details={"key": key},
                original_exception=e,
            ) from e
        except Exception as e:
            raise StorageError(
                f"Unexpected error deleting '{key}': {e}",
                code="object_delete_failed",
                details={"key": key},
                original_exception=e,
            ) from e

    def _get_content_type(self, filename: str) -> str:
        """
        Determine content type from filename.

        Args:
            filename: File name or object key

        Returns:
            str: MIME content type
        """
        return CONTENT_TYPES.get(Path(filename).suffix.lower(), "application/octet-stream")

    # Database mirror

    @property
    def database_mirror_enabled(self) -> bool:
        """True when a database bucket is configured."""
        return self.database_bucket is not None

    def _database_blob(self, filename: str):
        if self.database_bucket is None:
            raise StorageError("Database bucket not configured")
        return self.database_bucket.blob(f"{DATABASE_PREFIX}/{filename}")

    def database_file_exists(self, filename: str) -> bool:
        """Check if the mirrored database file exists."""
        try:
            exists: bool = self._database_blob(filename).exists()
            return exists
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"Failed to check database file existence: {e}", original_exception=e) from e

    def upload_database_file(self, file_data: bytes, filename: str) -> dict[str, str]:
        """
        Upload the DuckDB file to the database bucket.

        Raises:
            StorageError: If upload fails
        """
        try:
            blob = self._database_blob(filename)
            blob.metadata = {
                "filename": filename,
                "upload_timestamp": datetime.now().isoformat(),
                "file_type": "database",
            }
            blob.upload_from_string(file_data, content_type="application/octet-stream")

            logger.info(
                "database_file_uploaded",
                filename=filename,
                gcs_path=blob.name,
                bucket=self.database_bucket_name,
                file_size=len(file_data),
            )
            return {"gcs_path": blob.name, "bucket": str(self.database_bucket_name)}

        except StorageError:
            raise
        except GoogleCloudError as e:
            raise StorageError(f"Failed to upload database file '{filename}': {e}", original_exception=e) from e
        except Exception as e:
            raise StorageError(
                f"Unexpected error uploading database file '{filename}': {e}", original_exception=e
            ) from e

    def download_database_file(self, filename: str) -> bytes:
        """
        Download the DuckDB file from the database bucket.

        Raises:
            StorageError: If the file is missing or the download fails
        """
        try:
            blob = self._database_blob(filename)

            if not blob.exists():
                raise StorageError(f"Database file not found: {blob.name}")

            file_data: bytes = blob.download_as_bytes()
            logger.info("database_file_downloaded", filename=filename, file_size=len(file_data))
            return file_data

        except StorageError:
            raise
        except NotFound as e:
            raise StorageError(f"Database file not found: {filename}", original_exception=e) from e
        except GoogleCloudError as e:
            raise StorageError(f"Failed to download database file '{filename}': {e}", original_exception=e) from e
        except Exception as e:
            raise StorageError(
                f"Unexpected error downloading database file '{filename}': {e}", original_exception=e
            ) from e


_storage_service: StorageService | None = None


def get_storage_service() -> StorageService:
    """
    Get the global storage service instance.

    Returns:
        StorageService: Global storage service instance
    """
    global _storage_service

    if _storage_service is None:
        _storage_service = StorageService()

    return _storage_service


def reset_storage_service() -> None:
    """Drop the global storage service so the next call rebuilds it from configuration."""
    global _storage_service
    _storage_service = None
