"""PostGIS search - geospatial query composition for PostGIS-backed tables."""

__version__ = "0.3.0"
