#!/usr/bin/env python3
"""CLI entry point for the nearest delivery location finder."""

import argparse
import csv
import json
import logging
import os
import sys

from dotenv import load_dotenv

from hrx_locations.distance import EARTH_RADIUS
from hrx_locations.exceptions import GeocodingError, HrxLocationsError
from hrx_locations.geocoder import ArcGISGeocoder, Geocoder
from hrx_locations.nearest_location import NearestLocation

load_dotenv()

logger = logging.getLogger(__name__)


def _load_locations(path):
    """Read location records from a JSON file.

    Accepts either a plain list or an object with a ``locations`` list.
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("locations", [])
    if not isinstance(data, list):
        raise ValueError(f"{path} does not contain a list of locations")
    for i, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise ValueError(f"location {i} in {path} is not an object")
    return data


def _sorted_by_distance(locations):
    """Locations nearest first, those without a distance last."""
    measured = [loc for loc in locations if "distance" in loc]
    unmeasured = [loc for loc in locations if "distance" not in loc]
    return sorted(measured, key=lambda loc: loc["distance"]) + unmeasured


def _label(location):
    return location.get("name") or location.get("address") or str(location.get("id", "?"))


def _print_result(nearest, locations, unit):
    """Print the nearest location and the distance table to stdout."""
    print(f"\n{'=' * 70}")
    print("  NEAREST LOCATION")
    print(f"  {_label(nearest)} | {nearest['distance']:.2f} {unit}")
    print(f"{'=' * 70}\n")

    for i, loc in enumerate(locations, 1):
        if "distance" in loc:
            print(f"  {i:>3}. {loc['distance']:>12.2f} {unit}  {_label(loc)}")
        else:
            print(f"  {i:>3}. {'-':>12} {unit}  {_label(loc)} (no coordinates)")
    print()


def _export_csv(locations, path):
    """Export the locations and their distances to a CSV file."""
    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["rank", "id", "name", "latitude", "longitude", "distance"])
        for i, loc in enumerate(locations, 1):
            writer.writerow([
                i, loc.get("id", ""), _label(loc),
                loc.get("latitude", ""), loc.get("longitude", ""),
                loc.get("distance", ""),
            ])
    print(f"Distances exported to {path}")


def run(args, geocoder: Geocoder | None = None) -> int:
    """Execute the CLI with parsed arguments and return the exit status."""
    try:
        candidates = _load_locations(args.locations)
    except (OSError, ValueError) as exc:
        print(f"Error: cannot read locations: {exc}", file=sys.stderr)
        return 1
    logger.debug("Loaded %d location(s) from %s", len(candidates), args.locations)

    resolver = NearestLocation(unit=args.unit).set_candidates(candidates)
    try:
        if args.address:
            if not args.country:
                raise GeocodingError("--country is required together with --address")
            print(f"Geocoding {args.address!r}...")
            resolver.find_nearest(args.address, args.country, geocoder or ArcGISGeocoder())
        else:
            resolver.set_target_coordinates(args.lat, args.lon).resolve()
    except (HrxLocationsError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    nearest = resolver.get_nearest_location()
    if nearest is None:
        print("No locations with coordinates found.")
        return 0

    ranked = _sorted_by_distance(resolver.candidates)
    _print_result(nearest, ranked, args.unit)

    if args.csv:
        _export_csv(ranked, args.csv)
    return 0


def build_parser():
    parser = argparse.ArgumentParser(
        description="Find the delivery location nearest to an address or coordinate.",
    )
    parser.add_argument(
        "--locations",
        metavar="FILE",
        required=True,
        help="JSON file with the list of delivery locations.",
    )

    target_group = parser.add_argument_group("Target options")
    target_group.add_argument("--address", help="Free-text address to geocode.")
    target_group.add_argument(
        "--country",
        help='Country code used when geocoding the address (e.g. "LT").',
    )
    target_group.add_argument("--lat", type=float, help="Target latitude.")
    target_group.add_argument("--lon", type=float, help="Target longitude.")

    parser.add_argument(
        "--unit",
        default=os.getenv("HRX_DISTANCE_UNIT", "km"),
        choices=sorted(EARTH_RADIUS),
        help='Distance unit (default: HRX_DISTANCE_UNIT env var or "km").',
    )
    parser.add_argument(
        "--csv",
        metavar="FILE",
        help="Export all locations with their distances to a CSV file.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.address and (args.lat is not None or args.lon is not None):
        parser.error("--address cannot be combined with --lat/--lon")
    if not args.address and (args.lat is None or args.lon is None):
        parser.error("either --address or both --lat and --lon are required")
    if args.unit not in EARTH_RADIUS:
        parser.error(f"unsupported distance unit {args.unit!r} (from HRX_DISTANCE_UNIT)")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    sys.exit(run(args))


if __name__ == "__main__":
    main()
