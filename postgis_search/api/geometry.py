"""Geometry calculation endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from postgis_search.geo import EmptyInputError, spherical_centroid
from postgis_search.models import (
    BoundingBoxIntersectsRequest,
    BoundingBoxWithinRadiusRequest,
    CentroidRequest,
    CentroidResponse,
    CheckResponse,
    UnionRequest,
    UnionResponse,
)
from postgis_search.search import SpatialSearch

from .dependencies import get_spatial_search

router = APIRouter()


@router.post("/centroid", response_model=CentroidResponse)
def centroid(request: CentroidRequest) -> CentroidResponse:
    """Average center of [lat, lng] points. Computed locally."""
    try:
        lat, lng = spherical_centroid(request.points)
    except EmptyInputError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return CentroidResponse(lat=lat, lng=lng)


@router.post("/union", response_model=UnionResponse)
def union(
    request: UnionRequest,
    searcher: SpatialSearch = Depends(get_spatial_search),
) -> UnionResponse:
    """Combine the shapes of the given rows into one simplified shape."""
    return UnionResponse(shape=searcher.union_simplify(request.ids))


@router.post("/bbox/intersects", response_model=CheckResponse)
def bbox_intersects(
    request: BoundingBoxIntersectsRequest,
    searcher: SpatialSearch = Depends(get_spatial_search),
) -> CheckResponse:
    """Whether the shape reaches into the inset box."""
    return CheckResponse(result=searcher.bounding_box_contains(request.shape, request.box))


@router.post("/bbox/within-radius", response_model=CheckResponse)
def bbox_within_radius(
    request: BoundingBoxWithinRadiusRequest,
    searcher: SpatialSearch = Depends(get_spatial_search),
) -> CheckResponse:
    """Whether the inset box is within the radius of the point."""
    return CheckResponse(
        result=searcher.bounding_box_within_radius(request.point, request.radius, request.box)
    )
