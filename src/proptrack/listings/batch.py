"""CSV batch import: parse, validate, geocode, then insert all-or-nothing.

Rows are processed in file order. Geocoding requests are bounded by
``concurrency``; with the default of 1 no row's lookup starts before the
previous row's has finished, which keeps us inside the free geocoding
service's rate limit.
"""

from __future__ import annotations

import asyncio
import csv
import io
import logging
from dataclasses import dataclass, field

from proptrack.core.types import PropertyStatus
from proptrack.geocoding.models import GeocodingError
from proptrack.geocoding.service import Geocoder
from proptrack.listings.models import Property, PropertyDraft, RowError
from proptrack.listings.validation import parse_number, validate_row
from proptrack.repositories import resolve
from proptrack.repositories.protocols import PropertyRepository

logger = logging.getLogger(__name__)

INVALID_COLUMNS = "Invalid number of columns"
GEOCODE_FAILED = "Failed to geocode location"


class ImportFormatError(ValueError):
    """The uploaded file cannot be read as CSV."""


class EmptyImportError(ImportFormatError):
    """The uploaded file has no header row."""


@dataclass
class ImportResult:
    """Outcome of one import: either errors or the inserted listings."""

    errors: list[RowError] = field(default_factory=list)
    properties: list[Property] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def parse_csv(text: str) -> tuple[list[str], list[tuple[int, list[str]]]]:
    """Split CSV text into trimmed headers and numbered data rows.

    Data rows are numbered from 1 in file order. Blank lines are dropped
    but still consume a number, so row numbers match the file.
    """
    try:
        records = list(csv.reader(io.StringIO(text)))
    except csv.Error as exc:
        raise ImportFormatError(f"Malformed CSV: {exc}") from exc
    if not records or not any(cell.strip() for cell in records[0]):
        raise EmptyImportError("CSV file has no header row")

    headers = [h.strip() for h in records[0]]
    rows: list[tuple[int, list[str]]] = []
    for index, record in enumerate(records[1:], start=1):
        if not record or not any(cell.strip() for cell in record):
            continue
        rows.append((index, record))
    return headers, rows


def build_draft(fields: dict[str, str], latitude: float, longitude: float) -> PropertyDraft:
    """Turn a validated row into a pending listing with import defaults."""
    return PropertyDraft(
        name=fields["name"],
        location=fields["location"],
        url=fields["url"],
        price_per_month=parse_number(fields["price_per_month"]),
        rooms=parse_number(fields["rooms"]),
        bathrooms=parse_number(fields["bathrooms"]),
        square_meters=parse_number(fields.get("square_meters")),
        service_charge=parse_number(fields.get("service_charge")),
        cleaning_fee=parse_number(fields.get("cleaning_fee")),
        commission_charge=parse_number(fields.get("commission_charge")),
        status=PropertyStatus.AVAILABLE,
        latitude=latitude,
        longitude=longitude,
        is_favorite=False,
        is_approximated=False,
    )


class BatchImporter:
    """Runs the import pipeline against a geocoder and a repository."""

    def __init__(
        self,
        geocoder: Geocoder,
        repository: PropertyRepository,
        concurrency: int = 1,
    ) -> None:
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self._geocoder = geocoder
        self._repository = repository
        self._concurrency = concurrency

    async def run(self, text: str) -> ImportResult:
        headers, rows = parse_csv(text)

        # row number -> error or draft, filled in file order
        outcomes: dict[int, RowError | PropertyDraft] = {}
        pending: list[tuple[int, dict[str, str]]] = []

        for index, values in rows:
            if len(values) != len(headers):
                outcomes[index] = RowError(row=index, errors=[INVALID_COLUMNS])
                continue
            fields = {h: v.strip() for h, v in zip(headers, values)}
            error = validate_row(fields, index)
            if error is not None:
                outcomes[index] = error
                continue
            pending.append((index, fields))

        semaphore = asyncio.Semaphore(self._concurrency)

        async def geocode_row(index: int, fields: dict[str, str]) -> None:
            async with semaphore:
                try:
                    coords = await self._geocoder.geocode(fields["location"])
                except GeocodingError as exc:
                    logger.warning("Row %d: %s", index, exc)
                    outcomes[index] = RowError(row=index, errors=[GEOCODE_FAILED])
                    return
            outcomes[index] = build_draft(fields, coords.latitude, coords.longitude)

        if self._concurrency == 1:
            for index, fields in pending:
                await geocode_row(index, fields)
        else:
            tasks = [asyncio.create_task(geocode_row(i, f)) for i, f in pending]
            try:
                await asyncio.gather(*tasks)
            except BaseException:
                # One lookup blew up; stop the rest before re-raising.
                for task in tasks:
                    task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
                raise

        ordered = [outcomes[i] for i in sorted(outcomes)]
        errors = [o for o in ordered if isinstance(o, RowError)]
        if errors:
            logger.info("Import rejected: %d of %d rows failed", len(errors), len(ordered))
            return ImportResult(errors=errors)

        drafts = [o for o in ordered if isinstance(o, PropertyDraft)]
        if not drafts:
            return ImportResult()

        inserted = await resolve(self._repository.insert_many(drafts))
        logger.info("Imported %d properties", len(inserted))
        return ImportResult(properties=inserted)
