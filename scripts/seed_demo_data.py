#!/usr/bin/env python3
"""Seed demo listings into a running PropTrack backend.

Usage:
    # Start the backend with the mock geocoder so no external calls are made:
    PROPTRACK_GEOCODER_PROVIDER=mock uvicorn proptrack.web.app:create_app --factory --port 8080

    # Seed demo data:
    python3 scripts/seed_demo_data.py

    # Seed against a different host:
    python3 scripts/seed_demo_data.py --base-url http://localhost:9000

Listings go through the public batch import endpoint, so every row is
validated and geocoded exactly as a real upload would be. A few listings
are then marked as favorites or moved along the status pipeline.
"""

from __future__ import annotations

import argparse
import sys
from datetime import datetime, timezone

import httpx

DEFAULT_BASE_URL = "http://localhost:8080"

DEMO_CSV = """name,price_per_month,location,rooms,bathrooms,square_meters,service_charge,cleaning_fee,commission_charge,url
Eixample Corner Flat,1650,"Carrer de Mallorca 401, Barcelona",3,2,95,120,60,,https://example.com/listings/eixample-corner
Gracia Studio,980,"Passeig de Gràcia 92, Barcelona",1,1,38,,,,https://example.com/listings/gracia-studio
Consell de Cent Loft,1400,"Carrer del Consell de Cent 340, Barcelona",2,1,70,90,,150,https://example.com/listings/cdc-loft
Poblenou Duplex,2100,"Rambla del Poblenou 120, Barcelona",4,2,130,150,80,200,https://example.com/listings/poblenou-duplex
"""

# (row position in DEMO_CSV, patch body)
DEMO_UPDATES = [
    (0, {"is_favorite": True, "status": "contacted"}),
    (2, {"status": "talking", "service_charge": 95}),
    (3, {"is_favorite": True}),
]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def section(title: str) -> None:
    print(f"\n{'='*60}")
    print(f"  {title}")
    print(f"{'='*60}")


def check_backend(client: httpx.Client) -> dict:
    try:
        resp = client.get("/api/health")
    except httpx.ConnectError:
        print(f"\nERROR: Cannot connect to {client.base_url}")
        print("Start the backend first:")
        print("  uvicorn proptrack.web.app:create_app --factory --port 8080")
        sys.exit(1)
    if resp.status_code != 200:
        print(f"\nERROR: Backend health check returned {resp.status_code}")
        sys.exit(1)
    return resp.json()


def upload_listings(client: httpx.Client) -> list[dict]:
    section("Batch Import")
    resp = client.post(
        "/api/properties/batch",
        files={"file": ("demo.csv", DEMO_CSV.encode("utf-8"), "text/csv")},
    )
    body = resp.json()
    if resp.status_code == 400 and "errors" in body:
        for err in body["errors"]:
            print(f"  Row {err['row']}: {'; '.join(err['errors'])}")
        sys.exit(1)
    if resp.status_code != 201:
        print(f"  FAILED -> {resp.status_code}: {resp.text[:200]}")
        sys.exit(1)
    print(f"  {body['message']}")
    return body["properties"]


def apply_updates(client: httpx.Client, properties: list[dict]) -> None:
    section("Status & Favorites")
    for position, patch in DEMO_UPDATES:
        if position >= len(properties):
            continue
        prop = properties[position]
        resp = client.patch(f"/api/properties/{prop['id']}", json=patch)
        if resp.status_code != 200:
            print(f"  FAILED PATCH {prop['id']} -> {resp.status_code}")
            continue
        print(f"  {prop['name']}: {patch}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed PropTrack demo listings.")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL)
    args = parser.parse_args()

    print(f"Target: {args.base_url}")
    print(f"Time:   {datetime.now(timezone.utc).isoformat()}")

    with httpx.Client(base_url=args.base_url, timeout=60.0) as client:
        health = check_backend(client)
        print(f"Backend: {health.get('status', 'unknown')} (v{health.get('version', '?')})")

        properties = upload_listings(client)
        apply_updates(client, properties)

        section("Done")
        listed = client.get("/api/properties").json()
        print(f"  {len(listed)} listings now tracked")


if __name__ == "__main__":
    main()
