"""FastAPI router for listing CRUD, CSV import/export, and the map feed."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, File, HTTPException, Query, Request, UploadFile
from fastapi.responses import JSONResponse, Response

from proptrack.core.types import PropertyStatus, StatusOption, status_options
from proptrack.geocoding.models import GeocodingError
from proptrack.listings.batch import BatchImporter, ImportFormatError
from proptrack.listings.csv_io import render_export, render_template
from proptrack.listings.filtering import (
    SORT_OPTIONS,
    FilterState,
    SortDirection,
    SortField,
    SortOption,
    apply_filters,
)
from proptrack.listings.mapping import to_feature_collection
from proptrack.listings.models import Property, PropertyCreate, PropertyDraft, PropertyUpdate
from proptrack.listings.validation import validate_fields
from proptrack.repositories import resolve
from proptrack.web.middleware import internal_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/properties", tags=["properties"])


# ---------------------------------------------------------------------------
# Helpers to get services from app state
# ---------------------------------------------------------------------------


def _get_repository(request: Request):
    repo = getattr(request.app.state, "property_repository", None)
    if repo is None:
        raise HTTPException(status_code=503, detail="Property repository not available")
    return repo


def _get_geocoder(request: Request):
    geocoder = getattr(request.app.state, "geocoder", None)
    if geocoder is None:
        raise HTTPException(status_code=503, detail="Geocoder not available")
    return geocoder


def _csv_response(content: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


# ---------------------------------------------------------------------------
# Read-only listing views
# ---------------------------------------------------------------------------


@router.get("", response_model=list[Property])
async def list_properties(
    request: Request,
    favorites: bool = Query(False, description="Only favorite listings"),
    status: list[PropertyStatus] | None = Query(None, description="Keep these statuses"),
    rooms: float | None = Query(None, description="Exact room count"),
    sort: SortField | None = Query(None, description="Sort key"),
    direction: SortDirection = Query(SortDirection.ASC, description="Sort direction"),
) -> Any:
    """List listings, newest first, with optional filters and one sort key."""
    state = FilterState(
        show_favorites=favorites,
        statuses=status or [],
        rooms=rooms,
        sort=SortOption(field=sort, direction=direction) if sort else None,
    )

    repo = _get_repository(request)
    try:
        properties = await resolve(repo.list_properties())
    except Exception as exc:
        return internal_error(request, "fetching properties", exc)

    if state.is_default:
        return properties
    return apply_filters(properties, state)


@router.get("/template")
async def download_template() -> Response:
    """CSV header line plus one example row for batch import."""
    return _csv_response(render_template(), "property-template.csv")


@router.get("/export")
async def export_properties(request: Request) -> Response:
    repo = _get_repository(request)
    try:
        properties = await resolve(repo.list_properties())
    except Exception as exc:
        return internal_error(request, "exporting properties", exc)
    return _csv_response(render_export(properties), "properties.csv")


@router.get("/statuses", response_model=list[StatusOption])
async def list_statuses() -> list[StatusOption]:
    return status_options()


@router.get("/sort-options", response_model=list[SortOption])
async def list_sort_options() -> list[SortOption]:
    return SORT_OPTIONS


@router.get("/map")
async def map_features(request: Request) -> Any:
    """GeoJSON FeatureCollection of every listing."""
    repo = _get_repository(request)
    try:
        properties = await resolve(repo.list_properties())
    except Exception as exc:
        return internal_error(request, "building map features", exc)
    return to_feature_collection(properties)


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------


@router.post("", response_model=Property, status_code=201)
async def create_property(payload: PropertyCreate, request: Request) -> Any:
    """Create one listing. The location is geocoded once; failure aborts."""
    fields = payload.to_fields()
    errors = validate_fields(fields)
    if errors:
        return JSONResponse(status_code=400, content={"errors": errors})

    repo = _get_repository(request)
    geocoder = _get_geocoder(request)
    try:
        coords = await geocoder.geocode(payload.location)
        draft = PropertyDraft(
            **fields,
            latitude=coords.latitude,
            longitude=coords.longitude,
        )
        return await resolve(repo.add_property(draft))
    except GeocodingError as exc:
        return internal_error(request, "geocoding new property", exc)
    except Exception as exc:
        return internal_error(request, "creating property", exc)


@router.patch("/{property_id}", response_model=Property)
async def update_property(
    property_id: int, payload: PropertyUpdate, request: Request
) -> Any:
    """Apply only the fields present in the body. Coordinates never change."""
    repo = _get_repository(request)
    changes = payload.changes()
    try:
        if changes:
            updated = await resolve(repo.update_property(property_id, changes))
        else:
            updated = await resolve(repo.get_property(property_id))
    except Exception as exc:
        return internal_error(request, "updating property", exc)

    if updated is None:
        raise HTTPException(status_code=404, detail="Property not found")
    return updated


@router.post("/batch")
async def batch_import(request: Request, file: UploadFile | None = File(None)) -> Any:
    """Import listings from an uploaded CSV, all or nothing."""
    if file is None:
        return JSONResponse(status_code=400, content={"error": "No file provided"})

    settings = request.app.state.settings
    limit = settings.importer.max_upload_bytes
    raw = await file.read(limit + 1)
    if len(raw) > limit:
        return JSONResponse(status_code=400, content={"error": "File is too large"})
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        return JSONResponse(status_code=400, content={"error": "File must be UTF-8 encoded text"})

    importer = BatchImporter(
        geocoder=_get_geocoder(request),
        repository=_get_repository(request),
        concurrency=settings.importer.geocode_concurrency,
    )
    try:
        result = await importer.run(text)
    except ImportFormatError as exc:
        return JSONResponse(status_code=400, content={"error": str(exc)})
    except Exception as exc:
        return internal_error(request, "processing batch upload", exc)

    if not result.ok:
        return JSONResponse(
            status_code=400,
            content={"errors": [e.model_dump() for e in result.errors]},
        )

    return JSONResponse(
        status_code=201,
        content={
            "message": f"Successfully imported {len(result.properties)} properties",
            "properties": [p.model_dump(mode="json") for p in result.properties],
        },
    )
