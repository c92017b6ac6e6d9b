"""Geocoder protocol, mock implementation, and provider factory."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from proptrack.core.config import GeocoderConfig
from proptrack.geocoding.models import Coordinates, GeocodingError


@runtime_checkable
class Geocoder(Protocol):
    """Protocol for free-text address lookups."""

    async def geocode(self, location: str) -> Coordinates: ...

    async def close(self) -> None: ...


class MockGeocoder:
    """Mock geocoder with fixture addresses for development/testing."""

    def __init__(self, fixtures: dict[str, Coordinates] | None = None) -> None:
        self._index: dict[str, Coordinates] = {}
        self.queries: list[str] = []
        if fixtures is None:
            self._load_fixtures()
        else:
            for address, coords in fixtures.items():
                self._index[address.lower()] = coords

    def _load_fixtures(self) -> None:
        fixtures = {
            "Carrer de Mallorca 401, Barcelona": Coordinates(latitude=41.4036, longitude=2.1744),
            "Passeig de Gràcia 92, Barcelona": Coordinates(latitude=41.3953, longitude=2.1619),
            "Carrer del Consell de Cent 340, Barcelona": Coordinates(latitude=41.3889, longitude=2.1649),
            "Rambla del Poblenou 120, Barcelona": Coordinates(latitude=41.4027, longitude=2.2019),
            "Example Street 123": Coordinates(latitude=41.3874, longitude=2.1686),
        }
        for address, coords in fixtures.items():
            self._index[address.lower()] = coords

    async def geocode(self, location: str) -> Coordinates:
        self.queries.append(location)
        key = location.strip().lower()
        if not key:
            raise GeocodingError(location, "empty location")
        if key in self._index:
            return self._index[key]
        # Partial match fallback
        for address, coords in self._index.items():
            if key in address or address in key:
                return coords
        raise GeocodingError(location, "Location not found")

    async def close(self) -> None:
        return None


def create_geocoder(config: GeocoderConfig) -> Geocoder:
    """Build the geocoder named by ``config.provider``."""
    provider = config.provider.lower()
    if provider == "mock":
        return MockGeocoder()
    if provider == "nominatim":
        from proptrack.geocoding.nominatim import NominatimGeocoder

        return NominatimGeocoder(config)
    raise ValueError(f"Unknown geocoding provider: {config.provider!r}")
