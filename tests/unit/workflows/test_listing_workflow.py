"""
Unit tests for the listing workflow.
"""

from unittest.mock import MagicMock

from seismic_gallery.models.artwork import Artwork
from seismic_gallery.ui.handlers.error import DatabaseError
from seismic_gallery.workflows.listing import ListingWorkflow


def make_artwork(artwork_id: int) -> Artwork:
    return Artwork(id=artwork_id, username=f"@user{artwork_id}", image_url=f"https://img/{artwork_id}-a.png")


class TestListingWorkflow:
    """Test cases for ListingWorkflow."""

    def setup_method(self):
        self.metadata = MagicMock()
        self.workflow = ListingWorkflow(metadata_service=self.metadata)

    def test_initial_state(self):
        assert self.workflow.artworks == []
        assert self.workflow.loaded is False
        assert self.workflow.last_refreshed_at is None

    def test_refresh(self):
        self.metadata.list_artworks.return_value = [make_artwork(3), make_artwork(1)]

        artworks = self.workflow.refresh()

        assert [artwork.id for artwork in artworks] == [3, 1]
        assert self.workflow.artworks == artworks
        assert self.workflow.loaded is True
        assert self.workflow.last_refreshed_at is not None

    def test_refresh_replaces_list(self):
        self.metadata.list_artworks.return_value = [make_artwork(1)]
        self.workflow.refresh()

        self.metadata.list_artworks.return_value = [make_artwork(2), make_artwork(1)]
        self.workflow.refresh()

        assert [artwork.id for artwork in self.workflow.artworks] == [2, 1]

    def test_refresh_failure_keeps_previous_list(self):
        self.metadata.list_artworks.return_value = [make_artwork(1)]
        self.workflow.refresh()

        self.metadata.list_artworks.side_effect = DatabaseError("Failed to list artworks: locked")
        artworks = self.workflow.refresh()

        assert [artwork.id for artwork in artworks] == [1]

    def test_first_refresh_failure(self):
        self.metadata.list_artworks.side_effect = DatabaseError("Failed to list artworks: locked")

        assert self.workflow.refresh() == []
        assert self.workflow.loaded is False

    def test_ensure_loaded_queries_once(self):
        self.metadata.list_artworks.return_value = [make_artwork(1)]

        self.workflow.ensure_loaded()
        self.workflow.ensure_loaded()

        self.metadata.list_artworks.assert_called_once()
