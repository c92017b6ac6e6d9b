"""Shared test fixtures and helpers."""

from __future__ import annotations

from typing import Any

import pytest

from proptrack.core.types import PropertyStatus
from proptrack.geocoding.models import Coordinates
from proptrack.geocoding.service import MockGeocoder
from proptrack.listings.models import PropertyDraft
from proptrack.listings.store import PropertyStore

CSV_HEADER = (
    "name,price_per_month,location,rooms,bathrooms,square_meters,"
    "service_charge,cleaning_fee,commission_charge,url"
)

GEO_FIXTURES = {
    "Carrer de Mallorca 401": Coordinates(latitude=41.4036, longitude=2.1744),
    "Passeig de Gracia 92": Coordinates(latitude=41.3953, longitude=2.1619),
    "Rambla del Poblenou 120": Coordinates(latitude=41.4027, longitude=2.2019),
    "Carrer de Sants 79": Coordinates(latitude=41.3750, longitude=2.1360),
    "Via Augusta 15": Coordinates(latitude=41.3985, longitude=2.1520),
}


def csv_row(
    name: str = "Sunny Flat",
    price: str = "1200",
    location: str = "Carrer de Mallorca 401",
    rooms: str = "2",
    bathrooms: str = "1",
    square_meters: str = "",
    service_charge: str = "",
    cleaning_fee: str = "",
    commission_charge: str = "",
    url: str = "https://example.com/flat",
) -> str:
    return ",".join([
        name, price, location, rooms, bathrooms, square_meters,
        service_charge, cleaning_fee, commission_charge, url,
    ])


def make_csv(*rows: str) -> str:
    return "\n".join([CSV_HEADER, *rows]) + "\n"


def make_draft(**overrides: Any) -> PropertyDraft:
    data: dict[str, Any] = {
        "name": "Sunny Flat",
        "location": "Carrer de Mallorca 401",
        "url": "https://example.com/flat",
        "price_per_month": 1200.0,
        "rooms": 2,
        "bathrooms": 1,
        "status": PropertyStatus.AVAILABLE,
        "latitude": 41.4036,
        "longitude": 2.1744,
    }
    data.update(overrides)
    return PropertyDraft(**data)


class RecordingStore(PropertyStore):
    """In-memory store that records every bulk insert."""

    def __init__(self) -> None:
        super().__init__()
        self.insert_calls: list[list[PropertyDraft]] = []

    def insert_many(self, drafts):
        self.insert_calls.append(list(drafts))
        return super().insert_many(drafts)


@pytest.fixture
def geocoder() -> MockGeocoder:
    return MockGeocoder(fixtures=GEO_FIXTURES)


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore()
