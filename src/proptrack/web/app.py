"""FastAPI application for PropTrack.

Provides the listings REST API (CRUD, CSV import/export, map feed) and a
health check. The browser UI is served separately.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from proptrack import __version__
from proptrack.core.config import Settings
from proptrack.core.types import HealthStatus
from proptrack.geocoding.service import Geocoder, create_geocoder
from proptrack.listings.store import PropertyStore
from proptrack.repositories.protocols import PropertyRepository
from proptrack.web.middleware import RequestIDMiddleware
from proptrack.web.properties_router import router as properties_router

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    geocoder: Geocoder | None = None,
    repository: PropertyRepository | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Uses the factory pattern so tests can create isolated app instances
    with fake dependencies.

    Args:
        settings: Application settings. Defaults to Settings().
        geocoder: Optional pre-built geocoder. Defaults to the configured provider.
        repository: Optional pre-built repository. Defaults to SQL when
            ``settings.db.database_url`` is set, else the in-memory store.

    Returns:
        A configured FastAPI instance.
    """
    if settings is None:
        settings = Settings()

    logging.getLogger("proptrack").setLevel(settings.log_level.upper())

    db_manager = None
    if repository is None:
        if settings.db.database_url:
            from proptrack.db.engine import DatabaseManager
            from proptrack.repositories.postgres.properties import PostgresPropertyRepository

            db_manager = DatabaseManager.from_config(settings.db)
            repository = PostgresPropertyRepository(db_manager)
        else:
            repository = PropertyStore()

    if geocoder is None:
        geocoder = create_geocoder(settings.geocoder)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await geocoder.close()
        if db_manager is not None:
            await db_manager.close()

    app = FastAPI(
        title="PropTrack",
        description="Track, import, and map real-estate listings",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware)

    app.state.settings = settings
    app.state.property_repository = repository
    app.state.geocoder = geocoder
    if db_manager is not None:
        app.state.db_manager = db_manager

    app.include_router(properties_router)

    @app.get("/api/health", response_model=HealthStatus)
    async def health_check() -> HealthStatus:
        """Health check endpoint."""
        return HealthStatus(status="healthy", service="proptrack", version=__version__)

    logger.info(
        "PropTrack app created (repository=%s, geocoder=%s)",
        type(repository).__name__,
        type(geocoder).__name__,
    )
    return app
