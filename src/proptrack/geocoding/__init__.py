"""Address geocoding: protocol, Nominatim client, and mock provider."""

from __future__ import annotations

from proptrack.geocoding.models import Coordinates, GeocodingError
from proptrack.geocoding.service import Geocoder, MockGeocoder, create_geocoder

__all__ = ["Coordinates", "Geocoder", "GeocodingError", "MockGeocoder", "create_geocoder"]
