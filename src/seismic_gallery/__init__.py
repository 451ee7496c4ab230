"""
seismic_gallery - Community art gallery web application with Streamlit

A web application for sharing artwork with the Seismic community:
- Image upload (browse or drag and drop) tagged with an X handle
- Image storage in Google Cloud Storage with public URLs
- Artwork records managed with DuckDB
- Newest-first gallery with handle-confirmed deletion
"""

__version__ = "0.1.0"
__author__ = "seismic_gallery"
__description__ = "Community art gallery web application with Streamlit"
