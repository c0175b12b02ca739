"""Search endpoints for postgis-search."""

from fastapi import APIRouter, Depends, HTTPException

from postgis_search.config import settings
from postgis_search.models import (
    BoundingBoxSearchRequest,
    RadiusSearchRequest,
    SearchResponse,
    ShapeSearchRequest,
)
from postgis_search.search import SpatialSearch

from .dependencies import get_spatial_search

router = APIRouter()

MISSING_LOCATION = "Search location has neither a geography point nor coordinates"


@router.post("/radius", response_model=SearchResponse)
def search_radius(
    request: RadiusSearchRequest,
    searcher: SpatialSearch = Depends(get_spatial_search),
) -> SearchResponse:
    """Return every object within the radius (meters) of the location."""
    radius = request.radius if request.radius is not None else settings.default_radius
    rows = searcher.objects_in_radius(request.location, radius)
    if rows is None:
        raise HTTPException(status_code=422, detail=MISSING_LOCATION)
    return SearchResponse(results=rows)


@router.post("/nearest", response_model=SearchResponse)
def search_nearest(
    request: RadiusSearchRequest,
    searcher: SpatialSearch = Depends(get_spatial_search),
) -> SearchResponse:
    """
    Return the single closest object within the radius.

    Results hold zero or one row. Among objects at exactly the same
    distance the database decides which one comes back.
    """
    radius = request.radius if request.radius is not None else settings.default_radius
    if request.location.kind == "none":
        raise HTTPException(status_code=422, detail=MISSING_LOCATION)

    row = searcher.nearest_object(request.location, radius)
    return SearchResponse(results=[row] if row else [])


@router.post("/shape", response_model=SearchResponse)
def search_shape(
    request: ShapeSearchRequest,
    searcher: SpatialSearch = Depends(get_spatial_search),
) -> SearchResponse:
    """Return every object covered by the shape, boundary included."""
    return SearchResponse(results=searcher.objects_in_shape(request.shape))


@router.post("/bbox", response_model=SearchResponse)
def search_bbox(
    request: BoundingBoxSearchRequest,
    searcher: SpatialSearch = Depends(get_spatial_search),
) -> SearchResponse:
    """Return every object inside the lon/lat box, edges included."""
    return SearchResponse(results=searcher.objects_in_bounding_box(request.box))
