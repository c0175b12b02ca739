"""Geometry utilities for spatial queries."""

from .bbox import inset_bounding_box
from .centroid import EmptyInputError, spherical_centroid
from .constants import (
    BBOX_INSET_FRACTION,
    DEFAULT_RADIUS_M,
    METERS_PER_MILE,
    SIMPLIFY_TOLERANCE,
    SQ_METERS_PER_SQ_MILE,
    SRID_WGS84,
)
from .predicates import (
    NearestQuery,
    SpatialFilter,
    bounding_box_filter,
    envelope,
    nearest_filter,
    point_ewkt,
    radius_filter,
    reference_point,
    shape_containment_filter,
)
from .units import meters_to_miles, square_meters_to_square_miles

__all__ = [
    "SRID_WGS84",
    "DEFAULT_RADIUS_M",
    "METERS_PER_MILE",
    "SQ_METERS_PER_SQ_MILE",
    "BBOX_INSET_FRACTION",
    "SIMPLIFY_TOLERANCE",
    "SpatialFilter",
    "NearestQuery",
    "point_ewkt",
    "reference_point",
    "radius_filter",
    "nearest_filter",
    "shape_containment_filter",
    "envelope",
    "bounding_box_filter",
    "inset_bounding_box",
    "spherical_centroid",
    "EmptyInputError",
    "meters_to_miles",
    "square_meters_to_square_miles",
]
