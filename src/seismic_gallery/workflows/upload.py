"""Upload workflow: validate input, store the image, then record it."""

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ..logging_config import get_logger, log_user_action
from ..models.artwork import Artwork
from ..services.metadata import ArtworkMetadataService, get_metadata_service
from ..services.storage import StorageService, get_storage_service
from ..ui.handlers.error import ErrorKind, ValidationError, handle_error, user_message_for
from ..utils.handles import build_storage_key, is_blank, normalize_handle

logger = get_logger(__name__)


def current_time_ms() -> int:
    """Milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


@dataclass(frozen=True)
class SelectedFile:
    """An image picked by the user, either browsed or dropped onto the form."""

    name: str
    data: bytes
    content_type: str | None = None

    @classmethod
    def from_uploaded_file(cls, uploaded_file: Any) -> "SelectedFile":
        """Build from a Streamlit UploadedFile."""
        return cls(
            name=uploaded_file.name,
            data=uploaded_file.getvalue(),
            content_type=getattr(uploaded_file, "type", None) or None,
        )


@dataclass(frozen=True)
class UploadOutcome:
    """Result of one submit."""

    artwork: Artwork | None = None
    error_kind: ErrorKind | None = None
    message: str = ""

    @property
    def success(self) -> bool:
        return self.artwork is not None


class UploadWorkflow:
    """
    Upload form state and submit logic.

    submit() writes the image object first and the artwork record second,
    so a record is never visible without its image. A failed record write
    leaves the image in storage; no compensating delete is attempted.

    Attributes:
        handle: Handle text as typed
        selected_file: Chosen image, or None
        uploading: True while backend calls are in flight
        error_message: Message of the last failed submit ("" after success)
    """

    def __init__(
        self,
        storage_service: StorageService | None = None,
        metadata_service: ArtworkMetadataService | None = None,
        on_uploaded: Callable[[], Any] | None = None,
        clock_ms: Callable[[], int] = current_time_ms,
    ) -> None:
        self._storage_service = storage_service
        self._metadata_service = metadata_service
        self.on_uploaded = on_uploaded
        self.clock_ms = clock_ms

        self.handle = ""
        self.selected_file: SelectedFile | None = None
        self.uploading = False
        self.error_message = ""

    @property
    def storage_service(self) -> StorageService:
        if self._storage_service is None:
            self._storage_service = get_storage_service()
        return self._storage_service

    @property
    def metadata_service(self) -> ArtworkMetadataService:
        if self._metadata_service is None:
            self._metadata_service = get_metadata_service()
        return self._metadata_service

    def set_handle(self, text: str) -> None:
        self.handle = text or ""

    def select_file(self, selected_file: SelectedFile | None) -> None:
        """Capture the file chosen by browsing or drag and drop."""
        self.selected_file = selected_file

    def reset(self) -> None:
        """Clear the form inputs."""
        self.handle = ""
        self.selected_file = None

    def _validate(self) -> tuple[str, SelectedFile]:
        """
        Check the form locally.

        Returns:
            tuple: (normalized handle, selected file)

        Raises:
            ValidationError: MissingHandle or MissingFile
        """
        if is_blank(self.handle):
            raise ValidationError("Handle is empty", kind=ErrorKind.MISSING_HANDLE)
        if self.selected_file is None:
            raise ValidationError("No file selected", kind=ErrorKind.MISSING_FILE)
        return normalize_handle(self.handle), self.selected_file

    def _fail(self, kind: ErrorKind, detail: str = "") -> UploadOutcome:
        self.error_message = user_message_for(kind, detail)
        return UploadOutcome(error_kind=kind, message=self.error_message)

    def submit(self) -> UploadOutcome:
        """
        Store the selected image and insert its artwork record.

        Returns:
            UploadOutcome: The new artwork, or the kind of failure
        """
        self.error_message = ""

        try:
            username, selected_file = self._validate()
        except ValidationError as e:
            return self._fail(e.kind)

        key = build_storage_key(selected_file.name, self.clock_ms())
        object_written = False
        self.uploading = True

        try:
            storage_service = self.storage_service
            storage_service.put_object(key, selected_file.data, selected_file.content_type)
            object_written = True

            image_url = storage_service.get_public_url(key)
            artwork = self.metadata_service.insert_artwork(username, image_url)

        except Exception as e:
            handle_error(e, {"operation": "upload_artwork", "key": key, "object_written": object_written})
            if not object_written:
                return self._fail(ErrorKind.OBJECT_WRITE_FAILED, detail=str(e))

            logger.warning("orphaned_object_left_in_storage", key=key, username=username)
            return self._fail(ErrorKind.RECORD_WRITE_FAILED)

        finally:
            self.uploading = False

        log_user_action(username, "artwork_uploaded", artwork_id=artwork.id, key=key, file_size=len(selected_file.data))

        self.reset()
        if self.on_uploaded is not None:
            self.on_uploaded()

        return UploadOutcome(artwork=artwork)
