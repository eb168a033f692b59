"""Errors raised by the nearest-location helpers."""


class HrxLocationsError(Exception):
    """Base class for all errors raised by hrx_locations."""


class ConfigurationError(HrxLocationsError, ValueError):
    """The resolver was used before it was fully configured."""


class GeocodingError(HrxLocationsError):
    """An address could not be resolved to coordinates."""
