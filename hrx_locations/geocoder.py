"""Address geocoding against the ArcGIS World GeocodeServer."""

import logging
import os
from abc import ABC, abstractmethod

import requests
from dotenv import load_dotenv

from hrx_locations.models import Coordinate

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_URL = (
    "https://geocode.arcgis.com/arcgis/rest/services/World/GeocodeServer/"
    "findAddressCandidates"
)


class Geocoder(ABC):
    """Base class that all geocoders must implement."""

    @abstractmethod
    def geocode(self, address: str, country: str) -> Coordinate | None:
        """Resolve an address to coordinates.

        Args:
            address: Free-text postal address.
            country: Country code used to narrow the search (e.g. "LT").

        Returns:
            The coordinate of the best match, or None if nothing was found.
        """


class ArcGISGeocoder(Geocoder):
    """Client for the ArcGIS ``findAddressCandidates`` endpoint."""

    def __init__(
        self,
        url: str | None = None,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ):
        self.url = url or os.getenv("ARCGIS_GEOCODE_URL", DEFAULT_URL)
        if timeout is None and os.getenv("ARCGIS_GEOCODE_TIMEOUT"):
            timeout = float(os.environ["ARCGIS_GEOCODE_TIMEOUT"])
        self.timeout = timeout
        self.session = session or requests.Session()

    def _get(self, params: dict) -> dict:
        resp = self.session.get(self.url, params=params, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()

    def geocode(self, address: str, country: str) -> Coordinate | None:
        params = {
            "f": "pjson",
            "maxLocations": 1,
            "forStorage": "false",
            "singleLine": address,
            "sourceCountry": country,
        }
        try:
            data = self._get(params)
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Geocoding %r (%s) failed: %s", address, country, exc)
            return None

        candidates = data.get("candidates") if isinstance(data, dict) else None
        if not candidates:
            logger.debug("No geocoding candidates for %r (%s)", address, country)
            return None

        location = candidates[0].get("location", {})
        try:
            return Coordinate(
                latitude=float(location["y"]),
                longitude=float(location["x"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Unusable geocoding candidate for %r: %s", address, exc)
            return None


def get_coordinates_by_address(address: str, country: str) -> Coordinate | None:
    """Geocode *address* with the default ArcGIS geocoder."""
    return ArcGISGeocoder().geocode(address, country)
