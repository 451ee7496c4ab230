"""
Main Streamlit application for seismic_gallery.

This is the entry point of the art gallery web application.
"""

import streamlit as st

from seismic_gallery.config import get_debug_mode
from seismic_gallery.logging_config import configure_structured_logging, get_logger
from seismic_gallery.ui.components.common import render_footer, render_header
from seismic_gallery.ui.handlers.gallery import initialize_gallery_session
from seismic_gallery.ui.pages.gallery import render_gallery_page

configure_structured_logging()
logger = get_logger(__name__)


def main() -> None:
    """Main application entry point."""
    logger.info("application_starting", page="main")

    st.set_page_config(
        page_title="Seismic Art Gallery",
        page_icon="🎨",
        layout="wide",
        menu_items={
            "Get Help": None,
            "Report a bug": None,
            "About": "Seismic Art Gallery - community art showcase",
        },
    )

    initialize_gallery_session()

    render_header()

    with st.container():
        render_gallery_page()

    render_footer()

    if get_debug_mode():
        with st.expander("Debug Info"):
            st.write("Session State:", st.session_state)


if __name__ == "__main__":
    main()
