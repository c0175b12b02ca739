"""Constants shared by the geometry helpers."""

# WGS84 longitude/latitude
SRID_WGS84 = 4326

# Default search radius in meters
DEFAULT_RADIUS_M = 10_000

METERS_PER_MILE = 1609.34
SQ_METERS_PER_SQ_MILE = METERS_PER_MILE**2

# Fraction of each span trimmed from both sides of a box before the
# intersection/radius checks
BBOX_INSET_FRACTION = 0.1

# ST_SimplifyPreserveTopology tolerance applied to combined shapes
SIMPLIFY_TOLERANCE = 0.0001
