"""
Services module for the gallery application.

This module contains the backend collaborators the workflows write through:
- StorageService: Google Cloud Storage object store for artwork images
- ArtworkMetadataService: DuckDB record store for the artworks table
"""

from .metadata import ArtworkMetadataService, get_metadata_service
from .storage import StorageError, StorageService, get_storage_service

__all__ = [
    "ArtworkMetadataService",
    "get_metadata_service",
    "StorageError",
    "StorageService",
    "get_storage_service",
]
