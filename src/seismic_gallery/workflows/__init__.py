"""
Workflows module for the gallery application.

Each workflow owns its own state and talks to the services it is given:
- UploadWorkflow: validate, store the image, insert the record
- ListingWorkflow: newest-first artworks, refreshed by explicit pull
- DeletionWorkflow: type-the-handle gate, then record and image removal
"""

from .deletion import DeletionOutcome, DeletionState, DeletionWorkflow, Notice
from .listing import ListingWorkflow
from .upload import SelectedFile, UploadOutcome, UploadWorkflow

__all__ = [
    "DeletionOutcome",
    "DeletionState",
    "DeletionWorkflow",
    "Notice",
    "ListingWorkflow",
    "SelectedFile",
    "UploadOutcome",
    "UploadWorkflow",
]
