"""Unit conversions for distances and areas reported by the store in meters."""

from .constants import METERS_PER_MILE, SQ_METERS_PER_SQ_MILE


def meters_to_miles(meters: float) -> float:
    return meters / METERS_PER_MILE


def square_meters_to_square_miles(square_meters: float) -> float:
    return square_meters / SQ_METERS_PER_SQ_MILE
