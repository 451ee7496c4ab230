"""Gallery components: artwork grid, delete confirmation dialog and notices."""

import html

import streamlit as st
import structlog

from ...models.artwork import Artwork
from ...workflows.deletion import NOTICE_DURATION_SECONDS
from ..handlers.gallery import (
    cancel_artwork_deletion,
    confirm_artwork_deletion,
    get_deletion_workflow,
    request_artwork_deletion,
    take_deletion_error,
    take_pending_notice,
)

logger = structlog.get_logger(__name__)

COLS_PER_ROW = 3


def render_artwork_grid(artworks: list[Artwork]) -> None:
    """
    Render artworks in a grid, newest first.

    Args:
        artworks: Artworks in display order
    """
    for i in range(0, len(artworks), COLS_PER_ROW):
        cols = st.columns(COLS_PER_ROW)

        for j, col in enumerate(cols):
            index = i + j
            with col:
                if index < len(artworks):
                    render_artwork_card(artworks[index])
                else:
                    st.empty()


def artwork_link_html(artwork: Artwork) -> str:
    """Centered handle linking to the owner's X profile; both values are HTML-escaped."""
    url = html.escape(artwork.profile_url, quote=True)
    handle = html.escape(artwork.display_handle, quote=True)
    return (
        f"<div style='text-align: center;'><a href='{url}' target='_blank' "
        f"rel='noopener noreferrer'><strong>{handle}</strong></a></div>"
    )


def render_artwork_card(artwork: Artwork) -> None:
    """Render one artwork with its owner's handle and a Delete button."""
    with st.container(border=True):
        try:
            st.image(artwork.image_url, width="stretch")
        except Exception as e:
            logger.error("render_artwork_image_error", artwork_id=artwork.id, error=str(e))
            st.error("❌ Image could not be loaded")

        st.markdown(artwork_link_html(artwork), unsafe_allow_html=True)

        if st.button("Delete", key=f"delete_{artwork.id}", width="stretch"):
            request_artwork_deletion(artwork)
            render_delete_confirmation_dialog()


@st.dialog("Confirm Deletion")
def render_delete_confirmation_dialog() -> None:
    """
    Ask the user to re-type the owner's handle.

    A mismatch keeps the dialog open with a blocking message; a completed
    deletion or Cancel closes it.
    """
    workflow = get_deletion_workflow()
    target = workflow.target
    if target is None:
        st.rerun()

    st.markdown("To delete this artwork, please type the owner's username below:")
    st.code(target.username, language=None)

    confirmation = st.text_input(
        "Username",
        placeholder="Enter username to confirm",
        key=f"delete_confirmation_{target.id}",
        label_visibility="collapsed",
    )

    col1, col2 = st.columns(2)

    with col1:
        if st.button("Cancel", width="stretch", key="cancel_delete"):
            cancel_artwork_deletion()
            st.rerun()

    with col2:
        if st.button("Delete", type="primary", width="stretch", key="confirm_delete"):
            outcome = confirm_artwork_deletion(confirmation)
            if workflow.is_pending:
                st.error(outcome.message)
            else:
                st.rerun()


def render_deletion_feedback() -> None:
    """Show the deletion success toast and the last deletion failure, each once."""
    notice = take_pending_notice()
    if notice is not None:
        st.toast(notice.message, duration=int(NOTICE_DURATION_SECONDS))

    error_message = take_deletion_error()
    if error_message:
        st.error(error_message)
