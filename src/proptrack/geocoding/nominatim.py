"""OpenStreetMap Nominatim geocoder over httpx."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from proptrack.core.config import GeocoderConfig
from proptrack.geocoding.models import Coordinates, GeocodingError

logger = logging.getLogger(__name__)


class NominatimGeocoder:
    """Resolves an address with the Nominatim ``/search`` endpoint.

    Only the first match is used. Any non-2xx response, transport error,
    malformed payload or empty result list raises ``GeocodingError``;
    nothing is retried.
    """

    def __init__(
        self,
        config: GeocoderConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._http = httpx.AsyncClient(
            base_url=config.base_url,
            timeout=httpx.Timeout(config.timeout_seconds),
            headers={"User-Agent": config.user_agent},
            transport=transport,
        )

    def _params(self, location: str) -> dict[str, str | int]:
        params: dict[str, str | int] = {"q": location, "format": "json", "limit": 1}
        codes = ",".join(
            code.strip().lower()
            for code in self._config.country_codes.split(",")
            if code.strip()
        )
        if codes:
            params["countrycodes"] = codes
        if self._config.email.strip():
            params["email"] = self._config.email.strip()
        return params

    async def geocode(self, location: str) -> Coordinates:
        if not location.strip():
            raise GeocodingError(location, "empty location")

        try:
            resp = await self._http.get("/search", params=self._params(location))
        except httpx.HTTPError as exc:
            logger.warning("Transport error geocoding %r: %s", location, exc)
            raise GeocodingError(location, f"transport error: {exc}") from exc

        if not resp.is_success:
            logger.warning("Nominatim returned %d for %r", resp.status_code, location)
            raise GeocodingError(location, f"HTTP {resp.status_code}")

        try:
            payload: Any = resp.json()
        except ValueError as exc:
            raise GeocodingError(location, "invalid JSON response") from exc

        if not isinstance(payload, list):
            raise GeocodingError(location, "unexpected response format")
        if not payload:
            raise GeocodingError(location, "Location not found")

        first = payload[0]
        try:
            return Coordinates(latitude=float(first["lat"]), longitude=float(first["lon"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise GeocodingError(location, "result has no usable coordinates") from exc

    async def close(self) -> None:
        await self._http.aclose()
