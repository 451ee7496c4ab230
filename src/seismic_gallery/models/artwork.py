"""
Artwork model for the gallery application.

This module contains the Artwork dataclass that represents one row of the
artworks table in DuckDB.
"""

from dataclasses import dataclass
from typing import Any

from ..utils.handles import profile_url


@dataclass(frozen=True)
class Artwork:
    """
    A single gallery entry.

    The id is assigned by the record store and never changes; username
    always starts with '@'; image_url is the public URL of
    the stored image object.
    """

    id: int
    username: str
    image_url: str

    def to_dict(self) -> dict:
        """
        Convert Artwork to a dictionary keyed by column name.

        Returns:
            Dictionary representation of the artwork row
        """
        return {
            "id": self.id,
            "username": self.username,
            "image_url": self.image_url,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Artwork":
        """
        Create Artwork from a dictionary (e.g., from session state or an API payload).

        Args:
            data: Dictionary containing id, username and image_url

        Returns:
            Artwork instance
        """
        return cls(id=int(data["id"]), username=data["username"], image_url=data["image_url"])

    @classmethod
    def from_row(cls, row: tuple[Any, ...]) -> "Artwork":
        """Create Artwork from a (id, username, image_url) result tuple."""
        return cls(id=int(row[0]), username=row[1], image_url=row[2])

    def validate(self) -> bool:
        """
        Validate the Artwork instance.

        Returns:
            True if valid, False otherwise
        """
        if self.id is None or self.id <= 0:
            return False

        if len(self.username) < 2 or not self.username.startswith("@"):
            return False

        return bool(self.image_url)

    @property
    def display_handle(self) -> str:
        """Handle as shown on the gallery card."""
        return self.username

    @property
    def profile_url(self) -> str:
        """Link to the owner's X profile."""
        return profile_url(self.username)
