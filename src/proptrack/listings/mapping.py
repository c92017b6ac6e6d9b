"""GeoJSON map feed for listings."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from proptrack.listings.models import Property

# Approximated listings are drawn as a circle of this radius.
APPROXIMATE_RADIUS_M = 200


def to_feature(prop: Property, approximate_radius_m: int = APPROXIMATE_RADIUS_M) -> dict[str, Any]:
    properties: dict[str, Any] = {
        "id": prop.id,
        "name": prop.name,
        "location": prop.location,
        "price_per_month": prop.price_per_month,
        "rooms": prop.rooms,
        "status": prop.status.value,
        "is_favorite": prop.is_favorite,
        "url": prop.url,
    }
    if prop.is_approximated:
        properties["marker"] = "area"
        properties["radius_m"] = approximate_radius_m
    else:
        properties["marker"] = "pin"
    return {
        "type": "Feature",
        # GeoJSON order is [longitude, latitude]
        "geometry": {"type": "Point", "coordinates": [prop.longitude, prop.latitude]},
        "properties": properties,
    }


def to_feature_collection(
    properties: Iterable[Property],
    approximate_radius_m: int = APPROXIMATE_RADIUS_M,
) -> dict[str, Any]:
    return {
        "type": "FeatureCollection",
        "features": [to_feature(p, approximate_radius_m) for p in properties],
    }
