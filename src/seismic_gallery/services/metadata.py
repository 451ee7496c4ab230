"""
Metadata service for artwork records stored in DuckDB.

This is the record store of the gallery: one artworks table with an
auto-incrementing id, the owner's handle and the public image URL.

When a database bucket is configured the DuckDB file is mirrored to GCS:
it is downloaded on first use if no local copy exists, and uploaded again
after every successful insert or delete. A failed mirror upload is logged
and never fails the mutation that triggered it.

Usage Examples:
    service = ArtworkMetadataService("/tmp/seismic_gallery/artworks.db")

    artwork = service.insert_artwork("@alice", "https://storage.googleapis.com/art/1-cat.png")
    newest_first = service.list_artworks()
    service.delete_artwork(artwork.id)
"""

import threading
import time
from pathlib import Path

from ..config import get_database_bucket, get_database_path
from ..logging_config import get_logger, log_error, log_performance, log_user_action
from ..models.artwork import Artwork
from ..models.database import DatabaseManager, create_database, get_database_manager
from ..ui.handlers.error import DatabaseError, StorageError
from .storage import StorageService, get_storage_service

logger = get_logger(__name__)

SELECT_COLUMNS = "id, username, image_url"


class ArtworkMetadataService:
    """
    Record store for artworks.

    All public methods serialize access to the DuckDB connection, so one
    instance can be shared by every Streamlit session of the process.

    Attributes:
        local_db_path: Path of the DuckDB file
        database_filename: Object name of the mirrored file in the database bucket
    """

    def __init__(self, db_path: str | None = None, storage_service: StorageService | None = None):
        """
        Initialize the metadata service.

        Args:
            db_path: DuckDB file path (defaults to GALLERY_DB_PATH)
            storage_service: Storage service used for the database mirror
                (resolved lazily when a database bucket is configured)
        """
        self.local_db_path = Path(db_path or get_database_path())
        self.database_filename = self.local_db_path.name
        self._storage_service = storage_service
        self._db_manager: DatabaseManager | None = None
        self._lock = threading.RLock()

        logger.info("metadata_service_initialized", local_db_path=str(self.local_db_path))

    @property
    def storage_service(self) -> StorageService | None:
        """Storage service for the mirror, or None when mirroring is not configured."""
        if self._storage_service is None and get_database_bucket():
            self._storage_service = get_storage_service()
        return self._storage_service

    @property
    def mirror_enabled(self) -> bool:
        """True when the DuckDB file is mirrored to GCS."""
        service = self.storage_service
        return service is not None and bool(service.database_mirror_enabled)

    @property
    def db_manager(self) -> DatabaseManager:
        """Get database manager, initializing if needed."""
        if self._db_manager is None:
            self._db_manager = get_database_manager(str(self.local_db_path), create_if_missing=True)
        return self._db_manager

    def ensure_local_database(self) -> bool:
        """
        Ensure the local database exists, downloading the mirror if needed.

        Returns:
            bool: True if the database was downloaded from GCS, False otherwise

        Raises:
            DatabaseError: If database setup fails
        """
        try:
            if self.local_db_path.exists():
                return False

            if self.mirror_enabled and self._download_from_gcs():
                logger.info("database_downloaded_from_gcs", filename=self.database_filename)
                return True

            self.local_db_path.parent.mkdir(parents=True, exist_ok=True)
            create_database(str(self.local_db_path))
            logger.info("new_database_created", local_path=str(self.local_db_path))
            return False

        except DatabaseError:
            raise
        except Exception as e:
            raise DatabaseError(f"Failed to ensure local database: {e}", original_exception=e) from e

    def _download_from_gcs(self) -> bool:
        """
        Download the mirrored database file.

        Returns:
            bool: True if downloaded, False if the mirror holds no file yet
        """
        service = self.storage_service
        if service is None:
            return False

        try:
            if not service.database_file_exists(self.database_filename):
                return False

            db_data = service.download_database_file(self.database_filename)
            self.local_db_path.parent.mkdir(parents=True, exist_ok=True)
            self.local_db_path.write_bytes(db_data)

            with self.db_manager as db:
                if not db.verify_schema():
                    raise DatabaseError("Downloaded database failed schema verification")

            return True

        except Exception as e:
            if self.local_db_path.exists():
                self.local_db_path.unlink()
            self._db_manager = None
            if isinstance(e, DatabaseError):
                raise
            raise DatabaseError(f"Failed to download database from GCS: {e}", original_exception=e) from e

    def sync_to_gcs(self) -> bool:
        """
        Upload the local database file to the mirror bucket.

        Returns:
            bool: True if uploaded, False if mirroring is disabled or the upload failed
        """
        service = self.storage_service
        if service is None or not service.database_mirror_enabled:
            return False

        try:
            start_time = time.perf_counter()
            service.upload_database_file(self.local_db_path.read_bytes(), self.database_filename)
            log_performance("database_sync_to_gcs", time.perf_counter() - start_time)
            return True
        except (StorageError, OSError) as e:
            log_error(e, {"operation": "sync_to_gcs", "local_path": str(self.local_db_path)})
            return False

    # CRUD Operations

    def insert_artwork(self, username: str, image_url: str) -> Artwork:
        """
        Insert one artwork row.

        Args:
            username: Normalized owner handle
            image_url: Public URL of the stored image

        Returns:
            Artwork: The inserted row with its assigned id

        Raises:
            DatabaseError: If the insert fails
        """
        try:
            with self._lock:
                self.ensure_local_database()

                with self.db_manager as db:
                    result = db.execute_query(
                        f"INSERT INTO artworks (username, image_url) VALUES (?, ?) RETURNING {SELECT_COLUMNS}",
                        (username, image_url),
                    )

                artwork = Artwork.from_row(result[0])
                self.sync_to_gcs()

            log_user_action(username, "artwork_record_inserted", artwork_id=artwork.id, image_url=image_url)
            return artwork

        except DatabaseError:
            raise
        except Exception as e:
            log_error(e, {"operation": "insert_artwork", "username": username, "image_url": image_url})
            raise DatabaseError(f"Failed to insert artwork: {e}", original_exception=e) from e

    def list_artworks(self) -> list[Artwork]:
        """
        Get every artwork, most recently created first.

        Returns:
            List of Artwork ordered by id descending

        Raises:
            DatabaseError: If the query fails
        """
        try:
            start_time = time.perf_counter()

            with self._lock:
                self.ensure_local_database()

                with self.db_manager as db:
                    result = db.execute_query(f"SELECT {SELECT_COLUMNS} FROM artworks ORDER BY id DESC")

            artworks = [Artwork.from_row(row) for row in result]
            log_performance("list_artworks", time.perf_counter() - start_time, artworks_count=len(artworks))
            return artworks

        except DatabaseError:
            raise
        except Exception as e:
            log_error(e, {"operation": "list_artworks"})
            raise DatabaseError(f"Failed to list artworks: {e}", original_exception=e) from e

    def get_artwork_by_id(self, artwork_id: int) -> Artwork | None:
        """
        Get one artwork by id.

        Returns:
            Artwork instance or None if not found

        Raises:
            DatabaseError: If retrieval fails
        """
        try:
            with self._lock:
                self.ensure_local_database()

                with self.db_manager as db:
                    result = db.execute_query(
                        f"SELECT {SELECT_COLUMNS} FROM artworks WHERE id = ?",
                        (artwork_id,),
                    )

            return Artwork.from_row(result[0]) if result else None

        except DatabaseError:
            raise
        except Exception as e:
            log_error(e, {"operation": "get_artwork_by_id", "artwork_id": artwork_id})
            raise DatabaseError(f"Failed to get artwork by ID: {e}", original_exception=e) from e

    def get_artworks_count(self) -> int:
        """Get total number of artworks."""
        try:
            with self._lock:
                self.ensure_local_database()

                with self.db_manager as db:
                    result = db.execute_query("SELECT COUNT(*) FROM artworks")

            return int(result[0][0]) if result else 0

        except DatabaseError:
            raise
        except Exception as e:
            log_error(e, {"operation": "get_artworks_count"})
            raise DatabaseError(f"Failed to count artworks: {e}", original_exception=e) from e

    def delete_artwork(self, artwork_id: int) -> bool:
        """
        Delete one artwork row by id.

        Args:
            artwork_id: Id of the row to delete

        Returns:
            True if a row was deleted, False if no row had that id

        Raises:
            DatabaseError: If deletion fails
        """
        try:
            with self._lock:
                self.ensure_local_database()

                with self.db_manager as db:
                    result = db.execute_query("DELETE FROM artworks WHERE id = ? RETURNING id", (artwork_id,))

                deleted = len(result) > 0
                if deleted:
                    self.sync_to_gcs()

            if deleted:
                logger.info("artwork_record_deleted", artwork_id=artwork_id)
            else:
                logger.warning("artwork_not_found_for_deletion", artwork_id=artwork_id)

            return deleted

        except DatabaseError:
            raise
        except Exception as e:
            log_error(e, {"operation": "delete_artwork", "artwork_id": artwork_id})
            raise DatabaseError(f"Failed to delete artwork: {e}", original_exception=e) from e


_metadata_service: ArtworkMetadataService | None = None


def get_metadata_service() -> ArtworkMetadataService:
    """Get the global metadata service instance."""
    global _metadata_service

    if _metadata_service is None:
        _metadata_service = ArtworkMetadataService()

    return _metadata_service


def reset_metadata_service() -> None:
    """Drop the global metadata service so the next call rebuilds it from configuration."""
    global _metadata_service
    _metadata_service = None
