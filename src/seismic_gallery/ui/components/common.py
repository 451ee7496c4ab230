"""Reusable UI components for the gallery application."""

import streamlit as st

from ... import __version__

APP_TITLE = "Seismic Art Gallery"
APP_TAGLINE = "Showcase your creative art for the Seismic Community"
AUTHOR_HANDLE = "@Mota_kidah"
AUTHOR_URL = "https://x.com/Mota_kidah"


def render_header() -> None:
    """Render the title, tagline and author credit."""
    st.markdown(
        f"""
    <div style='text-align: center; margin-bottom: 2rem;'>
        <h1 style='margin-bottom: 0.25rem;'>🎨 {APP_TITLE}</h1>
        <p style='color: #666; margin: 0.5rem 0;'>{APP_TAGLINE}</p>
        <a href='{AUTHOR_URL}' target='_blank' rel='noopener noreferrer'
           style='font-size: 0.9em;'>Built by {AUTHOR_HANDLE}</a>
    </div>
    """,
        unsafe_allow_html=True,
    )


def render_empty_state(title: str, description: str, icon: str = "🖼️") -> None:
    """
    Render an empty state message.

    Args:
        title: Main title for the empty state
        description: Description text
        icon: Emoji icon to display
    """
    col1, col2, col3 = st.columns([1, 2, 1])

    with col2:
        st.markdown(
            f"""
        <div style='text-align: center; padding: 2rem 0;'>
            <div style='font-size: 4rem; margin-bottom: 1rem;'>{icon}</div>
            <h3 style='color: #666; margin-bottom: 1rem;'>{title}</h3>
            <p style='color: #888;'>{description}</p>
        </div>
        """,
            unsafe_allow_html=True,
        )


def render_error_message(error_type: str, message: str, details: str | None = None) -> None:
    """
    Render a standardized error message.

    Args:
        error_type: Short error title
        message: Main error message
        details: Additional error details (optional)
    """
    st.error(f"**{error_type}:** {message}")

    if details:
        with st.expander("🔍 Error details"):
            st.code(details)


def render_footer() -> None:
    """Render the application footer."""
    st.divider()

    st.markdown(
        f"""
    <div style='text-align: center; color: #666; font-size: 0.8em;'>
        <strong>seismic_gallery v{__version__}</strong>
    </div>
    """,
        unsafe_allow_html=True,
    )
