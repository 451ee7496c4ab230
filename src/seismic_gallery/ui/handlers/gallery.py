"""Gallery handlers: per-session workflow instances and deletion actions."""

import streamlit as st
import structlog

from ...models.artwork import Artwork
from ...workflows.deletion import DeletionOutcome, DeletionWorkflow, Notice
from ...workflows.listing import ListingWorkflow
from ...workflows.upload import UploadWorkflow

logger = structlog.get_logger(__name__)


def initialize_gallery_session() -> None:
    """
    Create this session's workflows once.

    Upload and deletion both signal the listing workflow to refresh after a
    successful mutation.
    """
    if "listing_workflow" not in st.session_state:
        st.session_state.listing_workflow = ListingWorkflow()

    listing: ListingWorkflow = st.session_state.listing_workflow

    if "upload_workflow" not in st.session_state:
        st.session_state.upload_workflow = UploadWorkflow(on_uploaded=listing.refresh)

    if "deletion_workflow" not in st.session_state:
        st.session_state.deletion_workflow = DeletionWorkflow(on_deleted=listing.refresh)

    if "upload_form_nonce" not in st.session_state:
        st.session_state.upload_form_nonce = 0

    if "toasted_notice" not in st.session_state:
        st.session_state.toasted_notice = None


def get_listing_workflow() -> ListingWorkflow:
    initialize_gallery_session()
    return st.session_state.listing_workflow


def get_upload_workflow() -> UploadWorkflow:
    initialize_gallery_session()
    return st.session_state.upload_workflow


def get_deletion_workflow() -> DeletionWorkflow:
    initialize_gallery_session()
    return st.session_state.deletion_workflow


def load_artworks() -> list[Artwork]:
    """Artworks to display, loading them on first activation."""
    return get_listing_workflow().ensure_loaded()


def request_artwork_deletion(artwork: Artwork) -> None:
    get_deletion_workflow().request(artwork)


def confirm_artwork_deletion(confirmation: str) -> DeletionOutcome:
    """Run the confirmation gate with the text typed into the dialog."""
    workflow = get_deletion_workflow()
    workflow.set_confirmation(confirmation)
    outcome = workflow.confirm()

    logger.info(
        "deletion_confirm_handled",
        deleted=outcome.deleted,
        error_kind=outcome.error_kind.value if outcome.error_kind else None,
    )
    return outcome


def cancel_artwork_deletion() -> None:
    get_deletion_workflow().cancel()


def take_pending_notice() -> Notice | None:
    """
    The active success notice if it has not been shown yet in this session.

    Each notice is returned once so a rerun does not show it twice.
    """
    notice = get_deletion_workflow().active_notice()
    if notice is None or notice == st.session_state.toasted_notice:
        return None

    st.session_state.toasted_notice = notice
    return notice


def take_deletion_error() -> str:
    """
    The failure message of the last completed deletion attempt, once.

    Mismatch messages belong to the open dialog and are left in place.
    """
    workflow = get_deletion_workflow()
    if workflow.is_pending or not workflow.error_message:
        return ""

    message = workflow.error_message
    workflow.error_message = ""
    return message
