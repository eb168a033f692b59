"""Nearest service location lookup using great-circle distances."""

import logging
from typing import Iterable, NamedTuple

from hrx_locations.distance import DEFAULT_UNIT, distance
from hrx_locations.exceptions import ConfigurationError, GeocodingError
from hrx_locations.geocoder import ArcGISGeocoder, Geocoder
from hrx_locations.models import Coordinate, Location, coordinates_of

logger = logging.getLogger(__name__)


class NearestResult(NamedTuple):
    """Outcome of a nearest-location search."""

    locations: list[Location]
    nearest: Location | None


def _as_coordinate(target: Coordinate | tuple[float, float]) -> Coordinate:
    if isinstance(target, Coordinate):
        return target
    latitude, longitude = target
    return Coordinate(latitude=float(latitude), longitude=float(longitude))


def resolve_nearest(
    locations: Iterable[Location],
    target: Coordinate | tuple[float, float],
    unit: str = DEFAULT_UNIT,
) -> NearestResult:
    """Find the location closest to *target*.

    Every location with coordinates is copied and annotated with a
    ``distance`` key in *unit*. Locations without usable coordinates are
    carried over unchanged and can never be the nearest one. On equal
    distances the earlier location wins. The input records are not
    modified, but the copies are shallow: nested values are shared with
    the input.

    Args:
        locations: Location records, each a mapping that may contain
            ``latitude`` and ``longitude``.
        target: The point to measure from.
        unit: Distance unit passed to :func:`distance`.

    Returns:
        A NearestResult with the annotated locations in input order and the
        nearest one, or None if no location had coordinates.
    """
    target = _as_coordinate(target)
    annotated: list[Location] = []
    nearest: Location | None = None
    best_dist = float("inf")
    skipped = 0

    for location in locations:
        coords = coordinates_of(location)
        if coords is None:
            annotated.append(dict(location))
            skipped += 1
            continue

        d = distance(target.latitude, target.longitude, coords[0], coords[1], unit)
        entry = {**location, "distance": d}
        annotated.append(entry)
        if d < best_dist:
            best_dist = d
            nearest = entry

    logger.debug(
        "Resolved %d location(s), %d without coordinates", len(annotated), skipped
    )
    return NearestResult(locations=annotated, nearest=nearest)


class NearestLocation:
    """Chainable helper that finds the nearest location to an address.

    Example::

        nearest = (
            NearestLocation()
            .set_candidates(delivery_locations)
            .set_target_coordinates(54.6872, 25.2797)
            .resolve()
            .get_nearest_location()
        )
    """

    def __init__(self, unit: str = DEFAULT_UNIT):
        self.unit = unit
        self._candidates: list[Location] = []
        self._target: Coordinate | None = None
        self._result: NearestResult | None = None

    @property
    def target(self) -> Coordinate | None:
        return self._target

    @property
    def candidates(self) -> list[Location]:
        """Annotated locations from the last resolve, else the supplied ones."""
        if self._result is not None:
            return self._result.locations
        return self._candidates

    def set_target_coordinates(self, latitude: float, longitude: float) -> "NearestLocation":
        """Set the point from which distances are measured."""
        self._target = Coordinate(latitude=float(latitude), longitude=float(longitude))
        return self

    def set_candidates(self, locations: Iterable[Location]) -> "NearestLocation":
        """Replace the list of locations to search."""
        self._candidates = list(locations)
        self._result = None
        return self

    def resolve(self, unit: str | None = None) -> "NearestLocation":
        """Compute distances to all candidates and pick the nearest.

        Raises:
            ConfigurationError: If no target coordinates were set.
        """
        if self._target is None:
            raise ConfigurationError(
                "Target coordinates are required to calculate the distance to locations"
            )
        if unit is None:
            unit = self.unit
        self._result = resolve_nearest(self._candidates, self._target, unit)
        return self

    def get_nearest_location(self) -> Location | None:
        """Return the nearest location found by the last resolve, if any."""
        if self._result is None:
            return None
        return self._result.nearest

    def find_nearest(
        self,
        address: str,
        country: str,
        geocoder: Geocoder | None = None,
    ) -> "NearestLocation":
        """Geocode *address* and resolve the nearest candidate to it.

        Raises:
            GeocodingError: If the address could not be resolved.
        """
        geocoder = geocoder or ArcGISGeocoder()
        coordinate = geocoder.geocode(address, country)
        if coordinate is None:
            raise GeocodingError(f"No coordinates found for address {address!r} ({country})")
        logger.info(
            "Geocoded %r to %.6f, %.6f", address, coordinate.latitude, coordinate.longitude
        )
        return self.set_target_coordinates(coordinate.latitude, coordinate.longitude).resolve()
