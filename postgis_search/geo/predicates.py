"""
Spatial predicate construction.

Builds parameterized PostGIS filter and ordering fragments. Nothing here
talks to the database: each function returns a value that the caller
appends to a query and executes later. Identifiers are quoted through
`quote_identifier`; every value travels as a bound `%s` parameter.
"""

from dataclasses import dataclass
from typing import Any

from postgis_search.models import BoundingBox, Coordinates, GeographyPoint, NoLocation
from postgis_search.validation import quote_identifier

from .constants import DEFAULT_RADIUS_M, SRID_WGS84

Location = GeographyPoint | Coordinates | NoLocation


@dataclass(frozen=True)
class SpatialFilter:
    """A SQL fragment with `%s` placeholders and the values bound to them."""

    sql: str
    params: tuple[Any, ...] = ()


@dataclass(frozen=True)
class NearestQuery:
    """Filter, ascending distance ordering and a one-row limit."""

    filter: SpatialFilter
    order_by: SpatialFilter
    limit: int = 1


def point_ewkt(lat: float, lng: float) -> str:
    """Serialize coordinates as WGS84 EWKT. Longitude comes first."""
    return f"SRID={SRID_WGS84};POINT({lng} {lat})"


def reference_point(location: Location) -> SpatialFilter | None:
    """
    Geography expression for the point a search is centered on.

    Returns None when the location is unknown.
    """
    if isinstance(location, GeographyPoint):
        return SpatialFilter("%s::geography", (location.geog_point,))
    if isinstance(location, Coordinates):
        return SpatialFilter(
            "ST_GeographyFromText(%s)", (point_ewkt(location.lat, location.lng),)
        )
    return None


def radius_filter(
    location: Location,
    radius: float = DEFAULT_RADIUS_M,
    column: str = "geog_point",
) -> SpatialFilter | None:
    """
    Select rows whose point lies within `radius` meters of the location.

    Args:
        location: Where the search is centered
        radius: Search radius in meters
        column: Geography point column of the searched table

    Returns:
        The filter, or None if the location is unknown
    """
    ref = reference_point(location)
    if ref is None:
        return None

    return SpatialFilter(
        f"ST_DWithin({quote_identifier(column)}, {ref.sql}, %s)",
        ref.params + (radius,),
    )


def nearest_filter(
    location: Location,
    radius: float = DEFAULT_RADIUS_M,
    column: str = "geog_point",
) -> NearestQuery | None:
    """
    Select the single closest row within `radius` meters of the location.

    Rows at exactly the same distance come back in whatever order the
    store produces.
    """
    ref = reference_point(location)
    if ref is None:
        return None

    col = quote_identifier(column)
    return NearestQuery(
        filter=SpatialFilter(f"ST_DWithin({col}, {ref.sql}, %s)", ref.params + (radius,)),
        order_by=SpatialFilter(f"ST_Distance({col}, {ref.sql})", ref.params),
        limit=1,
    )


def shape_containment_filter(
    shape: str | None,
    column: str = "geog_point",
) -> SpatialFilter | None:
    """Select rows whose point is covered by the shape, boundary included."""
    if shape is None:
        return None

    return SpatialFilter(
        f"ST_Covers(%s::geography, {quote_identifier(column)})",
        (shape,),
    )


def envelope(box: BoundingBox, geography: bool = True) -> SpatialFilter:
    """ST_MakeEnvelope for the box in WGS84, optionally cast to geography."""
    sql = f"ST_MakeEnvelope(%s, %s, %s, %s, {SRID_WGS84})"
    if geography:
        sql += "::geography"
    return SpatialFilter(sql, (box.min_lng, box.min_lat, box.max_lng, box.max_lat))


def bounding_box_filter(box: BoundingBox, column: str = "geog_point") -> SpatialFilter:
    """
    Select rows whose point is covered by the lon/lat envelope.

    The test runs on geometry so the envelope keeps straight lon/lat edges;
    points on the edges and corners are included.
    """
    env = envelope(box, geography=False)
    return SpatialFilter(
        f"ST_Covers({env.sql}, {quote_identifier(column)}::geometry)",
        env.params,
    )
