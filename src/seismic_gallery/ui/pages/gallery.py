"""Gallery page: upload form followed by the artwork grid."""

import streamlit as st
import structlog

from ..components.common import render_empty_state, render_error_message
from ..components.gallery import render_artwork_grid, render_deletion_feedback
from ..components.upload import render_upload_form
from ..handlers.gallery import load_artworks

logger = structlog.get_logger(__name__)


def render_gallery_page() -> None:
    """Render the upload form and every artwork, most recent first."""
    render_upload_form()

    st.divider()

    try:
        artworks = load_artworks()
    except Exception as e:
        logger.error("gallery_page_error", error=str(e))
        render_error_message("Gallery error", "The gallery could not be displayed.", str(e))
        return

    render_deletion_feedback()

    if not artworks:
        render_empty_state(
            title="No artworks yet",
            description="Be the first to share your art with the community!",
        )
        return

    st.caption(f"{len(artworks)} artworks")
    render_artwork_grid(artworks)
