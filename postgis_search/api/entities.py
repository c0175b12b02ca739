"""Endpoints searching from, and measuring, a stored row."""

from fastapi import APIRouter, Depends, HTTPException, Query

from postgis_search.config import settings
from postgis_search.models import (
    AreaResponse,
    DistanceResponse,
    SearchResponse,
    SpatialEntity,
)
from postgis_search.search import SpatialSearch

from .dependencies import checked_table, get_spatial_search

router = APIRouter()


def _load(searcher: SpatialSearch, table: str, entity_id: str) -> SpatialEntity:
    entity = searcher.load_entity(checked_table(table), entity_id)
    if entity is None:
        raise HTTPException(status_code=404, detail=f"No row {entity_id} in {table}")
    return entity


@router.get("/{table}/{entity_id}/nearby", response_model=SearchResponse)
def entity_nearby(
    table: str,
    entity_id: str,
    radius: float | None = Query(default=None, ge=0),
    searcher: SpatialSearch = Depends(get_spatial_search),
) -> SearchResponse:
    """Objects within the radius of the row's point or coordinates."""
    entity = _load(searcher, table, entity_id)
    rows = searcher.objects_in_radius_of(
        entity, radius if radius is not None else settings.default_radius
    )
    if rows is None:
        raise HTTPException(status_code=422, detail=f"{table} {entity_id} has no location")
    return SearchResponse(results=rows)


@router.get("/{table}/{entity_id}/nearest", response_model=SearchResponse)
def entity_nearest(
    table: str,
    entity_id: str,
    radius: float | None = Query(default=None, ge=0),
    searcher: SpatialSearch = Depends(get_spatial_search),
) -> SearchResponse:
    """The closest object within the radius of the row."""
    entity = _load(searcher, table, entity_id)
    if entity.location().kind == "none":
        raise HTTPException(status_code=422, detail=f"{table} {entity_id} has no location")

    row = searcher.nearest_object_to(
        entity, radius if radius is not None else settings.default_radius
    )
    return SearchResponse(results=[row] if row else [])


@router.get("/{table}/{entity_id}/contained", response_model=SearchResponse)
def entity_contained(
    table: str,
    entity_id: str,
    searcher: SpatialSearch = Depends(get_spatial_search),
) -> SearchResponse:
    """Objects covered by the row's shape."""
    entity = _load(searcher, table, entity_id)
    rows = searcher.objects_in_shape_of(entity)
    if rows is None:
        raise HTTPException(status_code=422, detail=f"{table} {entity_id} has no shape")
    return SearchResponse(results=rows)


@router.get(
    "/{table}/{entity_id}/distance/{other_table}/{other_id}",
    response_model=DistanceResponse,
)
def entity_distance(
    table: str,
    entity_id: str,
    other_table: str,
    other_id: str,
    searcher: SpatialSearch = Depends(get_spatial_search),
) -> DistanceResponse:
    """Miles between two rows' points; null when either has no point."""
    entity = _load(searcher, table, entity_id)
    other = _load(searcher, other_table, other_id)
    if other.geog_point is None:
        return DistanceResponse(miles=None)
    return DistanceResponse(miles=searcher.distance_between(entity, other.geog_point))


@router.get("/{table}/{entity_id}/area", response_model=AreaResponse)
def entity_area(
    table: str,
    entity_id: str,
    searcher: SpatialSearch = Depends(get_spatial_search),
) -> AreaResponse:
    """Square miles covered by the row's shape."""
    entity = _load(searcher, table, entity_id)
    return AreaResponse(square_miles=searcher.area_of_shape(entity))
