"""Averaged spherical center of a set of points."""

import math
from typing import Iterable, Sequence


class EmptyInputError(ValueError):
    """Raised when a center is requested for zero points."""


def spherical_centroid(points: Iterable[Sequence[float]]) -> tuple[float, float]:
    """
    Calculate the average center of [lat, lng] points.

    Each point is projected onto the unit sphere, the Cartesian vectors are
    averaged, and the mean vector is projected back to latitude/longitude.
    This is the average center, not the geodesic (geographic) center.

    Args:
        points: [lat, lng] pairs in degrees

    Returns:
        (lat, lng) in degrees

    Raises:
        EmptyInputError: If no points are given
    """
    x = y = z = 0.0
    count = 0

    for point in points:
        lat = math.radians(float(point[0]))
        lng = math.radians(float(point[1]))

        x += math.cos(lat) * math.cos(lng)
        y += math.cos(lat) * math.sin(lng)
        z += math.sin(lat)
        count += 1

    if count == 0:
        raise EmptyInputError("Cannot compute the center of zero points")

    x /= count
    y /= count
    z /= count

    lng = math.atan2(y, x)
    hyp = math.sqrt(x * x + y * y)
    lat = math.atan2(z, hyp)

    return math.degrees(lat), math.degrees(lng)
