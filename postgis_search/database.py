"""
Database module for postgis-search.

Provides PostGIS connection management and schema setup.
"""

import logging
from contextlib import contextmanager
from typing import Generator

import psycopg
from psycopg.rows import dict_row

from postgis_search.validation import quote_identifier

logger = logging.getLogger(__name__)

# Errors raised by the store propagate unchanged to callers
StoreExecutionError = psycopg.Error

# Module-level connection for the application
_database_url: str | None = None
_connection: psycopg.Connection | None = None


SCHEMA = """
CREATE EXTENSION IF NOT EXISTS postgis;

-- Searchable rows: points of interest and the regions searching them
CREATE TABLE IF NOT EXISTS {table} (
    id BIGSERIAL PRIMARY KEY,
    name TEXT,
    lat DOUBLE PRECISION,                   -- degrees, WGS84
    lng DOUBLE PRECISION,                   -- degrees, WGS84
    {point_column} geography(Point, 4326),
    {shape_column} geography(MultiPolygon, 4326)
);

CREATE INDEX IF NOT EXISTS {point_index} ON {table} USING GIST ({point_column});
CREATE INDEX IF NOT EXISTS {shape_index} ON {table} USING GIST ({shape_column});
-- Bounding box searches compare on geometry
CREATE INDEX IF NOT EXISTS {point_geom_index} ON {table} USING GIST (({point_column}::geometry));
"""


def init_database(database_url: str) -> None:
    """Open the application's connection to the PostGIS database."""
    global _database_url, _connection

    _database_url = database_url
    _connection = psycopg.connect(database_url, row_factory=dict_row)


def init_schema(
    table: str = "objects",
    point_column: str = "geog_point",
    shape_column: str = "geog_shape",
) -> None:
    """Create the PostGIS extension and a searchable table if missing."""
    bare = table.split(".")[-1]
    statement = SCHEMA.format(
        table=quote_identifier(table),
        point_column=quote_identifier(point_column),
        shape_column=quote_identifier(shape_column),
        point_index=quote_identifier(f"idx_{bare}_{point_column}"),
        shape_index=quote_identifier(f"idx_{bare}_{shape_column}"),
        point_geom_index=quote_identifier(f"idx_{bare}_{point_column}_geom"),
    )
    with get_cursor() as cursor:
        cursor.execute(statement)
    logger.info(f"Schema ready for table {table}")


def get_connection() -> psycopg.Connection:
    """Get the current database connection."""
    if _connection is None:
        raise RuntimeError("Database not initialized. Call init_database() first.")
    return _connection


@contextmanager
def get_cursor() -> Generator[psycopg.Cursor, None, None]:
    """Get a database cursor with automatic commit/rollback."""
    conn = get_connection()
    cursor = conn.cursor()
    try:
        yield cursor
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        cursor.close()


def close_database() -> None:
    """Close the database connection."""
    global _connection
    if _connection is not None:
        _connection.close()
        _connection = None
