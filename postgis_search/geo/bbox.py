"""Bounding box helpers."""

from postgis_search.models import BoundingBox

from .constants import BBOX_INSET_FRACTION


def inset_bounding_box(box: BoundingBox, fraction: float = BBOX_INSET_FRACTION) -> BoundingBox:
    """
    Shrink a bounding box toward its center.

    Each axis loses `fraction` of its span on both sides, so the default
    turns (0, 0, 10, 10) into (1, 1, 9, 9). The intersection and radius
    checks run against this inset box, not the requested one.

    Args:
        box: The requested bounding box
        fraction: Share of each span trimmed from each side

    Returns:
        The inset bounding box
    """
    lng_margin = (box.max_lng - box.min_lng) * fraction
    lat_margin = (box.max_lat - box.min_lat) * fraction

    return BoundingBox(
        min_lng=box.min_lng + lng_margin,
        min_lat=box.min_lat + lat_margin,
        max_lng=box.max_lng - lng_margin,
        max_lat=box.max_lat - lat_margin,
    )
