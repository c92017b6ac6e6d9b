"""Field validation shared by single-record create and CSV batch import."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from proptrack.listings.models import RowError

REQUIRED_STRING_FIELDS: tuple[str, ...] = ("name", "location", "url")
REQUIRED_NUMBER_FIELDS: tuple[str, ...] = ("price_per_month", "rooms", "bathrooms")
OPTIONAL_NUMBER_FIELDS: tuple[str, ...] = (
    "square_meters",
    "service_charge",
    "cleaning_fee",
    "commission_charge",
)


def parse_number(value: Any) -> float | None:
    """Parse a raw cell or JSON value into a finite float.

    Returns None for anything that is not a number, including blank
    strings, booleans, ``nan`` and ``inf``.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text or "_" in text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_fields(data: Mapping[str, Any]) -> list[str]:
    """Check one record and return every violated rule, in rule order."""
    errors: list[str] = []

    for field in REQUIRED_STRING_FIELDS:
        value = data.get(field)
        if not isinstance(value, str) or not value.strip():
            errors.append(f"{field} is required and must be a string")

    for field in REQUIRED_NUMBER_FIELDS:
        if parse_number(data.get(field)) is None:
            errors.append(f"{field} must be a valid number")

    for field in OPTIONAL_NUMBER_FIELDS:
        value = data.get(field)
        if is_blank(value):
            continue
        if parse_number(value) is None:
            errors.append(f"{field} must be a valid number if provided")

    return errors


def validate_row(row: Mapping[str, Any], row_index: int) -> RowError | None:
    """Validate one parsed CSV row. ``row_index`` is 1-based."""
    errors = validate_fields(row)
    if errors:
        return RowError(row=row_index, errors=errors)
    return None
