"""Listing workflow: the gallery's own newest-first copy of the artworks table."""

from datetime import UTC, datetime

from ..logging_config import get_logger
from ..models.artwork import Artwork
from ..services.metadata import ArtworkMetadataService, get_metadata_service

logger = get_logger(__name__)


class ListingWorkflow:
    """
    Owns the displayed artworks and refreshes them by explicit pull.

    A failed query keeps the previously displayed artworks; the failure is
    only logged.
    """

    def __init__(self, metadata_service: ArtworkMetadataService | None = None) -> None:
        self._metadata_service = metadata_service
        self.artworks: list[Artwork] = []
        self.loaded = False
        self.last_refreshed_at: datetime | None = None

    @property
    def metadata_service(self) -> ArtworkMetadataService:
        if self._metadata_service is None:
            self._metadata_service = get_metadata_service()
        return self._metadata_service

    def refresh(self) -> list[Artwork]:
        """
        Reload every artwork, most recent first.

        Returns:
            list[Artwork]: The artworks now displayed
        """
        try:
            artworks = self.metadata_service.list_artworks()
        except Exception as e:
            logger.warning("artwork_listing_failed", error=str(e), kept=len(self.artworks))
            return self.artworks

        self.artworks = list(artworks)
        self.loaded = True
        self.last_refreshed_at = datetime.now(UTC)
        logger.debug("artworks_refreshed", count=len(self.artworks))
        return self.artworks

    def ensure_loaded(self) -> list[Artwork]:
        """Refresh on first activation only."""
        if not self.loaded:
            return self.refresh()
        return self.artworks
