"""Shared data models for nearest-location resolution."""

from dataclasses import dataclass
from math import isfinite
from typing import Any

# A service location record as delivered by the provider. Only the
# ``latitude``/``longitude`` fields are inspected; the rest is passed through.
Location = dict[str, Any]


@dataclass(frozen=True)
class Coordinate:
    """A point on the Earth's surface in decimal degrees."""

    latitude: float
    longitude: float

    def __post_init__(self):
        if not -90 <= self.latitude <= 90:
            raise ValueError(f"latitude {self.latitude} out of range [-90, 90]")
        if not -180 <= self.longitude <= 180:
            raise ValueError(f"longitude {self.longitude} out of range [-180, 180]")


def coordinates_of(location: Location) -> tuple[float, float] | None:
    """Return the (latitude, longitude) of a location record.

    Providers may send numbers as strings, so values are coerced with
    ``float()``. Returns None when either field is missing, null, not
    numeric or not finite.
    """
    latitude = location.get("latitude")
    longitude = location.get("longitude")
    if latitude is None or longitude is None:
        return None
    try:
        coords = float(latitude), float(longitude)
    except (TypeError, ValueError):
        return None
    if not all(isfinite(c) for c in coords):
        return None
    return coords
