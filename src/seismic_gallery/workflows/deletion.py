"""
Deletion workflow with a type-the-handle confirmation gate.

State machine:

    IDLE --request(artwork)--> CONFIRM_PENDING
    CONFIRM_PENDING --cancel()--> IDLE
    CONFIRM_PENDING --confirm(), handle mismatch--> CONFIRM_PENDING
    CONFIRM_PENDING --confirm(), handle match--> EXECUTING --> IDLE

EXECUTING deletes the artwork record first and the image object second.
If the record delete fails nothing else happens. If only the object delete
fails the image stays orphaned in storage and the workflow completes.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..logging_config import get_logger, log_user_action
from ..models.artwork import Artwork
from ..services.metadata import ArtworkMetadataService, get_metadata_service
from ..services.storage import StorageService, get_storage_service
from ..ui.handlers.error import ErrorKind, ValidationError, handle_error, user_message_for
from ..utils.handles import object_key_from_url

logger = get_logger(__name__)

NOTICE_DURATION_SECONDS = 3.0
DELETED_MESSAGE = "Artwork deleted successfully ✅"


class DeletionState(Enum):
    IDLE = "idle"
    CONFIRM_PENDING = "confirm_pending"
    EXECUTING = "executing"


@dataclass(frozen=True)
class Notice:
    """A transient message that disappears once expires_at has passed."""

    message: str
    expires_at: float

    def is_active(self, now: float) -> bool:
        return now < self.expires_at


@dataclass(frozen=True)
class DeletionOutcome:
    """Result of one confirm()."""

    deleted: bool = False
    object_removed: bool = False
    error_kind: ErrorKind | None = None
    message: str = ""


class DeletionWorkflow:
    """
    Gate and execution of artwork deletion.

    Attributes:
        state: Current DeletionState
        target: Artwork awaiting confirmation (None when idle)
        confirmation: Re-entry buffer typed by the user
        error_message: Blocking or diagnostic message of the last attempt
        notice: Success notice of the last completed deletion
    """

    def __init__(
        self,
        storage_service: StorageService | None = None,
        metadata_service: ArtworkMetadataService | None = None,
        on_deleted: Callable[[], Any] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._storage_service = storage_service
        self._metadata_service = metadata_service
        self.on_deleted = on_deleted
        self.clock = clock

        self.state = DeletionState.IDLE
        self.target: Artwork | None = None
        self.confirmation = ""
        self.error_message = ""
        self.notice: Notice | None = None

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

    @property
    def is_pending(self) -> bool:
        return self.state is DeletionState.CONFIRM_PENDING

    def request(self, artwork: Artwork) -> None:
        """Ask for confirmation before deleting artwork."""
        self.state = DeletionState.CONFIRM_PENDING
        self.target = artwork
        self.confirmation = ""
        self.error_message = ""
        logger.info("artwork_delete_requested", artwork_id=artwork.id, username=artwork.username)

    def set_confirmation(self, text: str) -> None:
        self.confirmation = text or ""

    def cancel(self) -> None:
        """Abandon the pending deletion without side effects."""
        if self.target is not None:
            logger.info("artwork_delete_cancelled", artwork_id=self.target.id)
        self._to_idle()

    def _to_idle(self) -> None:
        self.state = DeletionState.IDLE
        self.target = None
        self.confirmation = ""

    def _check_confirmation(self, target: Artwork) -> None:
        """
        Compare the trimmed re-entry buffer with the stored handle.

        The comparison is exact and case-sensitive; a missing '@' is a mismatch.

        Raises:
            ValidationError: HandleMismatch
        """
        if self.confirmation.strip() != target.username:
            raise ValidationError(
                "Confirmation handle does not match",
                kind=ErrorKind.HANDLE_MISMATCH,
                details={"artwork_id": target.id},
            )

    def confirm(self) -> DeletionOutcome:
        """
        Delete the pending target if the confirmation matches.

        Returns:
            DeletionOutcome: What was deleted, or why nothing was
        """
        target = self.target
        if self.state is not DeletionState.CONFIRM_PENDING or target is None:
            return DeletionOutcome()

        try:
            self._check_confirmation(target)
        except ValidationError as e:
            self.error_message = user_message_for(e.kind)
            logger.info("artwork_delete_rejected", artwork_id=target.id)
            return DeletionOutcome(error_kind=e.kind, message=self.error_message)

        self.state = DeletionState.EXECUTING
        self.error_message = ""

        try:
            self.metadata_service.delete_artwork(target.id)
        except Exception as e:
            handle_error(e, {"operation": "delete_artwork_record", "artwork_id": target.id})
            self.error_message = user_message_for(ErrorKind.RECORD_DELETE_FAILED)
            self._to_idle()
            return DeletionOutcome(error_kind=ErrorKind.RECORD_DELETE_FAILED, message=self.error_message)

        object_removed, error_kind = self._remove_object(target)

        self._to_idle()
        if self.on_deleted is not None:
            self.on_deleted()

        self.notice = Notice(DELETED_MESSAGE, self.clock() + NOTICE_DURATION_SECONDS)
        log_user_action(target.username, "artwork_deleted", artwork_id=target.id, object_removed=object_removed)

        return DeletionOutcome(
            deleted=True,
            object_removed=object_removed,
            error_kind=error_kind,
            message=DELETED_MESSAGE,
        )

    def _remove_object(self, target: Artwork) -> tuple[bool, ErrorKind | None]:
        """Delete the image behind target.image_url; failures leave it orphaned."""
        key = object_key_from_url(target.image_url)
        if not key:
            logger.warning("object_key_not_derivable", artwork_id=target.id, image_url=target.image_url)
            return False, None

        try:
            self.storage_service.delete_object(key)
            return True, None
        except Exception as e:
            handle_error(e, {"operation": "delete_artwork_object", "artwork_id": target.id, "key": key})
            logger.warning("orphaned_object_left_in_storage", key=key, artwork_id=target.id)
            return False, ErrorKind.OBJECT_DELETE_FAILED

    def active_notice(self) -> Notice | None:
        """The success notice while it has not expired."""
        if self.notice is not None and not self.notice.is_active(self.clock()):
            self.notice = None
        return self.notice
