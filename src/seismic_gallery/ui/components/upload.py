"""Upload form component."""

import streamlit as st
import structlog

from ..handlers.gallery import get_upload_workflow
from ..handlers.upload import handle_upload_submit

logger = structlog.get_logger(__name__)

ACCEPTED_IMAGE_TYPES = ["png", "jpg", "jpeg", "gif", "webp", "bmp", "svg", "avif", "heic", "heif", "tif", "tiff"]


def render_upload_form() -> None:
    """
    Render the handle input, the drag-and-drop uploader and the Upload button.

    Widget keys carry the form nonce so a successful upload starts a fresh
    empty form.
    """
    workflow = get_upload_workflow()
    nonce = st.session_state.upload_form_nonce

    with st.container(border=True):
        st.markdown("#### Upload Your Art")

        col1, col2, col3 = st.columns([2, 3, 1], vertical_alignment="bottom")

        with col1:
            handle_text = st.text_input(
                "X username",
                placeholder="Enter your X username",
                key=f"handle_input_{nonce}",
            )

        with col2:
            uploaded_file = st.file_uploader(
                "Drag & drop or browse",
                type=ACCEPTED_IMAGE_TYPES,
                accept_multiple_files=False,
                key=f"artwork_uploader_{nonce}",
            )

        with col3:
            submitted = st.button(
                "Uploading..." if workflow.uploading else "Upload",
                type="primary",
                disabled=workflow.uploading,
                width="stretch",
                key="upload_button",
            )

        if submitted:
            with st.spinner("Uploading..."):
                outcome = handle_upload_submit(handle_text, uploaded_file)

            if outcome.success:
                st.rerun()

        if workflow.error_message:
            st.error(workflow.error_message)
