"""Geocoding data models."""

from __future__ import annotations

from pydantic import BaseModel


class Coordinates(BaseModel):
    """A latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float


class GeocodingError(Exception):
    """Raised when a location cannot be turned into coordinates."""

    def __init__(self, location: str, reason: str) -> None:
        super().__init__(f"Failed to geocode {location!r}: {reason}")
        self.location = location
        self.reason = reason
