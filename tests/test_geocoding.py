"""Tests for geocoder providers and the provider factory."""

from __future__ import annotations

import re

import httpx
import pytest

from proptrack.core.config import GeocoderConfig
from proptrack.geocoding.models import Coordinates, GeocodingError
from proptrack.geocoding.nominatim import NominatimGeocoder
from proptrack.geocoding.service import Geocoder, MockGeocoder, create_geocoder

SEARCH_URL = re.compile(r"https://nominatim\.test/search.*")


def _config(**overrides) -> GeocoderConfig:
    defaults = {
        "provider": "nominatim",
        "base_url": "https://nominatim.test",
        "user_agent": "proptrack-tests/1.0",
    }
    defaults.update(overrides)
    return GeocoderConfig(**defaults)


# ---------------------------------------------------------------------------
# Factory tests
# ---------------------------------------------------------------------------


class TestFactory:
    def test_creates_mock(self):
        assert isinstance(create_geocoder(_config(provider="mock")), MockGeocoder)

    async def test_creates_nominatim(self):
        geocoder = create_geocoder(_config())
        try:
            assert isinstance(geocoder, NominatimGeocoder)
            assert isinstance(geocoder, Geocoder)
        finally:
            await geocoder.close()

    def test_unknown_provider_raises(self):
        with pytest.raises(ValueError, match="Unknown geocoding provider"):
            create_geocoder(_config(provider="nope"))


# ---------------------------------------------------------------------------
# Nominatim provider tests
# ---------------------------------------------------------------------------


class TestNominatimGeocoder:
    async def test_first_result_used(self, httpx_mock):
        httpx_mock.add_response(
            url=SEARCH_URL,
            method="GET",
            json=[
                {"lat": "41.4036", "lon": "2.1744", "display_name": "Sagrada Familia"},
                {"lat": "0", "lon": "0"},
            ],
        )
        geocoder = NominatimGeocoder(_config())
        try:
            coords = await geocoder.geocode("Carrer de Mallorca 401, Barcelona")
            assert coords == Coordinates(latitude=41.4036, longitude=2.1744)
        finally:
            await geocoder.close()

    async def test_request_parameters(self, httpx_mock):
        httpx_mock.add_response(url=SEARCH_URL, json=[{"lat": "1", "lon": "2"}])
        geocoder = NominatimGeocoder(_config(country_codes="ES, fr", email="ops@example.com"))
        try:
            await geocoder.geocode("Via Augusta 15")
            request = httpx_mock.get_request()
            assert request.url.path == "/search"
            assert request.url.params["q"] == "Via Augusta 15"
            assert request.url.params["format"] == "json"
            assert request.url.params["limit"] == "1"
            assert request.url.params["countrycodes"] == "es,fr"
            assert request.url.params["email"] == "ops@example.com"
            assert request.headers["User-Agent"] == "proptrack-tests/1.0"
        finally:
            await geocoder.close()

    async def test_optional_parameters_omitted(self, httpx_mock):
        httpx_mock.add_response(url=SEARCH_URL, json=[{"lat": "1", "lon": "2"}])
        geocoder = NominatimGeocoder(_config())
        try:
            await geocoder.geocode("Via Augusta 15")
            params = httpx_mock.get_request().url.params
            assert "countrycodes" not in params
            assert "email" not in params
        finally:
            await geocoder.close()

    async def test_empty_result_fails(self, httpx_mock):
        httpx_mock.add_response(url=SEARCH_URL, json=[])
        geocoder = NominatimGeocoder(_config())
        try:
            with pytest.raises(GeocodingError, match="Location not found"):
                await geocoder.geocode("Nowhere Lane 0")
        finally:
            await geocoder.close()

    @pytest.mark.parametrize("status", [400, 429, 500, 503])
    async def test_non_2xx_fails(self, httpx_mock, status):
        httpx_mock.add_response(url=SEARCH_URL, status_code=status)
        geocoder = NominatimGeocoder(_config())
        try:
            with pytest.raises(GeocodingError, match=f"HTTP {status}"):
                await geocoder.geocode("Via Augusta 15")
        finally:
            await geocoder.close()
        assert len(httpx_mock.get_requests()) == 1

    async def test_transport_error_fails(self, httpx_mock):
        httpx_mock.add_exception(httpx.ConnectError("connection refused"), url=SEARCH_URL)
        geocoder = NominatimGeocoder(_config())
        try:
            with pytest.raises(GeocodingError, match="transport error"):
                await geocoder.geocode("Via Augusta 15")
        finally:
            await geocoder.close()

    async def test_invalid_json_fails(self, httpx_mock):
        httpx_mock.add_response(url=SEARCH_URL, text="<html>busy</html>")
        geocoder = NominatimGeocoder(_config())
        try:
            with pytest.raises(GeocodingError, match="invalid JSON"):
                await geocoder.geocode("Via Augusta 15")
        finally:
            await geocoder.close()

    async def test_non_list_payload_fails(self, httpx_mock):
        httpx_mock.add_response(url=SEARCH_URL, json={"error": "Unable to geocode"})
        geocoder = NominatimGeocoder(_config())
        try:
            with pytest.raises(GeocodingError, match="unexpected response format"):
                await geocoder.geocode("Via Augusta 15")
        finally:
            await geocoder.close()

    async def test_missing_coordinates_fail(self, httpx_mock):
        httpx_mock.add_response(url=SEARCH_URL, json=[{"lat": "abc"}])
        geocoder = NominatimGeocoder(_config())
        try:
            with pytest.raises(GeocodingError, match="no usable coordinates"):
                await geocoder.geocode("Via Augusta 15")
        finally:
            await geocoder.close()

    async def test_blank_location_not_sent(self):
        geocoder = NominatimGeocoder(_config())
        try:
            with pytest.raises(GeocodingError):
                await geocoder.geocode("   ")
        finally:
            await geocoder.close()


# ---------------------------------------------------------------------------
# Mock provider tests
# ---------------------------------------------------------------------------


class TestMockGeocoder:
    async def test_default_fixtures(self):
        geocoder = MockGeocoder()
        coords = await geocoder.geocode("Example Street 123")
        assert coords.latitude == pytest.approx(41.3874)

    async def test_case_insensitive(self):
        geocoder = MockGeocoder()
        coords = await geocoder.geocode("CARRER DE MALLORCA 401, BARCELONA")
        assert coords.longitude == pytest.approx(2.1744)

    async def test_partial_match(self):
        geocoder = MockGeocoder()
        coords = await geocoder.geocode("Rambla del Poblenou 120")
        assert coords.latitude == pytest.approx(41.4027)

    async def test_unknown_fails(self):
        geocoder = MockGeocoder()
        with pytest.raises(GeocodingError):
            await geocoder.geocode("999 Nowhere Ln")

    async def test_records_queries(self):
        geocoder = MockGeocoder(fixtures={"A St 1": Coordinates(latitude=1, longitude=2)})
        await geocoder.geocode("A St 1")
        with pytest.raises(GeocodingError):
            await geocoder.geocode("B St 2")
        assert geocoder.queries == ["A St 1", "B St 2"]
