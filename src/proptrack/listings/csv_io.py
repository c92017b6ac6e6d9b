"""CSV rendering for the import template and the listings export."""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable

from proptrack.listings.models import Property

TEMPLATE_HEADERS: list[str] = [
    "name",
    "price_per_month",
    "location",
    "rooms",
    "bathrooms",
    "square_meters",
    "service_charge",
    "cleaning_fee",
    "commission_charge",
    "url",
]

TEMPLATE_EXAMPLE: list[str] = [
    "Beautiful Apartment",
    "1500",
    "Example Street 123",
    "2",
    "1",
    "75",
    "100",
    "50",
    "75",
    "https://example.com/listing",
]

EXPORT_HEADERS: list[str] = [
    "ID",
    "Name",
    "Price per Month",
    "Location",
    "Rooms",
    "Bathrooms",
    "Square Meters",
    "Status",
    "Service Charge",
    "Cleaning Fee",
    "Commission Charge",
    "Is Approximated",
    "URL",
]


def _fmt(value: float | None) -> str:
    if value is None:
        return ""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def _write(rows: Iterable[list[str]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerows(rows)
    return buffer.getvalue()


def render_template() -> str:
    """Header line plus one example row, in import column order."""
    return _write([TEMPLATE_HEADERS, TEMPLATE_EXAMPLE])


def render_export(properties: Iterable[Property]) -> str:
    rows: list[list[str]] = [EXPORT_HEADERS]
    for p in properties:
        rows.append([
            str(p.id),
            p.name,
            _fmt(p.price_per_month),
            p.location,
            _fmt(p.rooms),
            _fmt(p.bathrooms),
            _fmt(p.square_meters),
            p.status.value,
            _fmt(p.service_charge),
            _fmt(p.cleaning_fee),
            _fmt(p.commission_charge),
            "true" if p.is_approximated else "false",
            p.url,
        ])
    return _write(rows)
