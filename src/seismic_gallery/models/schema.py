"""
Database schema definitions for the gallery application.

The artworks table has an auto-incrementing id backed by a DuckDB sequence,
so ordering by id is ordering by insertion time.
"""

from typing import List

ARTWORKS_TABLE = "artworks"

ARTWORKS_COLUMNS = ("id", "username", "image_url")

ARTWORKS_ID_SEQUENCE = """
CREATE SEQUENCE IF NOT EXISTS artworks_id_seq START 1;
"""

ARTWORKS_TABLE_SCHEMA = """
CREATE TABLE IF NOT EXISTS artworks (
    id BIGINT PRIMARY KEY DEFAULT nextval('artworks_id_seq'),
    username TEXT NOT NULL,
    image_url TEXT NOT NULL
);
"""

# Sequence must exist before the table default references it
ALL_SCHEMA_STATEMENTS = [ARTWORKS_ID_SEQUENCE, ARTWORKS_TABLE_SCHEMA]


def get_schema_statements() -> List[str]:
    """
    Get all database schema creation statements.

    Returns:
        List of SQL statements to create the sequence and table
    """
    return ALL_SCHEMA_STATEMENTS


def validate_schema_compatibility() -> bool:
    """
    Check that every Artwork field is declared in the table schema.

    Returns:
        True if schema is compatible, False otherwise
    """
    schema_lower = ARTWORKS_TABLE_SCHEMA.lower()
    return all(column in schema_lower for column in ARTWORKS_COLUMNS)
