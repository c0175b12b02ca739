"""FastAPI dependencies shared by the endpoint routers."""

from fastapi import HTTPException

from postgis_search.search import SpatialSearch
from postgis_search.validation import validate_identifier


def get_spatial_search() -> SpatialSearch:
    """Searcher bound to the configured tables and columns."""
    return SpatialSearch()


def checked_table(table: str) -> str:
    """
    Validate a table name taken from the request path.

    Raises:
        HTTPException: If the name is not a plain SQL identifier
    """
    try:
        return validate_identifier(table)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
