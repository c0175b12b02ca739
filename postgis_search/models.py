"""
Pydantic models for postgis-search.

These models define the location representations, the searching entity,
and the request/response structures for the HTTP API.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Discriminator, Field, Tag


# -----------------------------------------------------------------------------
# Core Geometry Models
# -----------------------------------------------------------------------------


class BoundingBox(BaseModel):
    """Axis-aligned lon/lat envelope (WGS84 degrees).

    Ordering of min/max is not validated; a malformed box simply matches
    nothing in the store.
    """

    min_lng: float
    min_lat: float
    max_lng: float
    max_lat: float


# -----------------------------------------------------------------------------
# Search Context: how the searching entity knows where it is
# -----------------------------------------------------------------------------


class GeographyPoint(BaseModel):
    """A stored geography value (EWKT or hex EWKB), passed through as-is."""

    kind: Literal["geography"] = "geography"
    geog_point: str


class Coordinates(BaseModel):
    """Raw latitude/longitude in degrees."""

    kind: Literal["coordinates"] = "coordinates"
    lat: float
    lng: float


class NoLocation(BaseModel):
    """The entity has nothing to search from."""

    kind: Literal["none"] = "none"


def _location_kind(value: Any) -> str | None:
    """Variant tag for a location; inferred from its fields when `kind` is absent."""
    if isinstance(value, dict):
        if "kind" in value:
            return value["kind"]
        if "geog_point" in value:
            return "geography"
        if "lat" in value or "lng" in value:
            return "coordinates"
        return "none"
    return getattr(value, "kind", None)


SearchContext = Annotated[
    Union[
        Annotated[GeographyPoint, Tag("geography")],
        Annotated[Coordinates, Tag("coordinates")],
        Annotated[NoLocation, Tag("none")],
    ],
    Discriminator(_location_kind),
]


class SpatialEntity(BaseModel):
    """A row of a spatial table acting as the "searching" entity."""

    id: int | str
    table: str
    geog_point: str | None = None
    geog_shape: str | None = None
    lat: float | None = None
    lng: float | None = None

    def location(self) -> GeographyPoint | Coordinates | NoLocation:
        """Pick the entity's location representation.

        A stored geography point wins over raw coordinates.
        """
        if self.geog_point is not None:
            return GeographyPoint(geog_point=self.geog_point)
        if self.lat is not None and self.lng is not None:
            return Coordinates(lat=self.lat, lng=self.lng)
        return NoLocation()

    @classmethod
    def from_row(
        cls,
        table: str,
        row: dict[str, Any],
        point_column: str = "geog_point",
        shape_column: str = "geog_shape",
    ) -> "SpatialEntity":
        """Build an entity from a store row, keeping only the columns present."""
        return cls(
            id=row["id"],
            table=table,
            geog_point=row.get(point_column),
            geog_shape=row.get(shape_column),
            lat=row.get("lat"),
            lng=row.get("lng"),
        )


# -----------------------------------------------------------------------------
# Search Models
# -----------------------------------------------------------------------------


class RadiusSearchRequest(BaseModel):
    """Request to search around a location."""

    location: SearchContext = Field(
        ...,
        description=(
            "{\"geog_point\": ...} or {\"lat\": ..., \"lng\": ...}; "
            "an optional \"kind\" (geography, coordinates, none) overrides inference"
        ),
    )
    radius: float | None = Field(
        default=None, ge=0, description="Search radius in meters (server default if omitted)"
    )


class ShapeSearchRequest(BaseModel):
    """Request to search within a serialized geography shape."""

    shape: str


class BoundingBoxSearchRequest(BaseModel):
    """Request to search within a lon/lat envelope."""

    box: BoundingBox


class SearchResponse(BaseModel):
    """Response from a search query."""

    status: Literal["ok"] = "ok"
    results: list[dict[str, Any]]


# -----------------------------------------------------------------------------
# Geometry Models
# -----------------------------------------------------------------------------


class CentroidRequest(BaseModel):
    """Points as [lat, lng] pairs in degrees."""

    points: list[tuple[float, float]]


class CentroidResponse(BaseModel):
    lat: float
    lng: float


class UnionRequest(BaseModel):
    """Identifiers of the shape rows to combine."""

    ids: list[int] = Field(..., description="Row ids (BIGSERIAL)")


class UnionResponse(BaseModel):
    shape: str | None


class BoundingBoxIntersectsRequest(BaseModel):
    shape: str
    box: BoundingBox


class BoundingBoxWithinRadiusRequest(BaseModel):
    point: str
    radius: float = Field(..., ge=0, description="Radius in meters")
    box: BoundingBox


class CheckResponse(BaseModel):
    result: bool


class DistanceResponse(BaseModel):
    miles: float | None


class AreaResponse(BaseModel):
    square_miles: float | None


# -----------------------------------------------------------------------------
# Error Models
# -----------------------------------------------------------------------------


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    detail: str | None = None
