"""Upload handlers for the gallery application."""

from typing import Any

import streamlit as st
import structlog

from ...workflows.upload import SelectedFile, UploadOutcome
from .gallery import get_upload_workflow

logger = structlog.get_logger(__name__)


def handle_upload_submit(handle_text: str, uploaded_file: Any | None) -> UploadOutcome:
    """
    Submit the upload form.

    Args:
        handle_text: Text of the handle input
        uploaded_file: Streamlit UploadedFile (browsed or dropped), or None

    Returns:
        UploadOutcome: Result of the workflow
    """
    workflow = get_upload_workflow()
    workflow.set_handle(handle_text)
    workflow.select_file(SelectedFile.from_uploaded_file(uploaded_file) if uploaded_file is not None else None)

    outcome = workflow.submit()

    if outcome.success:
        clear_upload_form()

    logger.info(
        "upload_submit_handled",
        success=outcome.success,
        error_kind=outcome.error_kind.value if outcome.error_kind else None,
    )
    return outcome


def clear_upload_form() -> None:
    """Reset the handle input and the file uploader by giving them fresh widget keys."""
    st.session_state.upload_form_nonce = st.session_state.get("upload_form_nonce", 0) + 1
