"""Great-circle distance between two lat/lon points."""

from math import asin, cos, radians, sin, sqrt

# Sphere radius per distance unit. Any unit not listed here falls back to
# metres; this is the documented behaviour, not an oversight.
EARTH_RADIUS = {
    "km": 6371,
    "mi": 3959,
    "m": 6371000,
}
DEFAULT_UNIT = "km"


def earth_radius(unit: str) -> float:
    """Return the Earth radius for *unit*, defaulting to metres."""
    return EARTH_RADIUS.get(unit, EARTH_RADIUS["m"])


def distance(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
    unit: str = DEFAULT_UNIT,
) -> float:
    """Return the haversine distance between two points.

    Args:
        lat1: Latitude of the first point in decimal degrees.
        lon1: Longitude of the first point in decimal degrees.
        lat2: Latitude of the second point in decimal degrees.
        lon2: Longitude of the second point in decimal degrees.
        unit: "km", "mi" or "m". Unrecognised units are treated as "m".

    Returns:
        The great-circle distance in the requested unit.
    """
    lat1, lon1, lat2, lon2 = map(radians, [lat1, lon1, lat2, lon2])
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlon / 2) ** 2
    # Rounding can push sqrt(a) slightly above 1 for antipodal points.
    return 2 * asin(min(1.0, sqrt(a))) * earth_radius(unit)
