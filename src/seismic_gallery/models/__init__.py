"""
Models module for the gallery application.

This module contains data models and schemas:
- Artwork: Data class for one artworks row
- Database schema and table definitions
- DatabaseManager: Database connection and schema management
"""

from .artwork import Artwork
from .database import DatabaseManager, create_database, get_database_manager
from .schema import get_schema_statements, validate_schema_compatibility

__all__ = [
    "Artwork",
    "DatabaseManager",
    "create_database",
    "get_database_manager",
    "get_schema_statements",
    "validate_schema_compatibility",
]
