"""Application configuration loaded from environment variables."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class DBConfig(BaseSettings):
    """Database configuration.

    An empty ``database_url`` selects the in-memory property store.
    """

    model_config = {"env_prefix": "PROPTRACK_DB_"}

    database_url: str = ""
    echo: bool = False
    pool_size: int = 5


class GeocoderConfig(BaseSettings):
    """Geocoding provider configuration."""

    model_config = {"env_prefix": "PROPTRACK_GEOCODER_"}

    provider: str = "nominatim"
    base_url: str = "https://nominatim.openstreetmap.org"
    user_agent: str = "proptrack/0.1 (property tracker)"
    email: str = ""
    country_codes: str = ""
    timeout_seconds: float = 10.0


class ImportConfig(BaseSettings):
    """CSV batch import configuration."""

    model_config = {"env_prefix": "PROPTRACK_IMPORT_"}

    # Nominatim's usage policy allows a single request at a time.
    geocode_concurrency: int = Field(default=1, ge=1)
    max_upload_bytes: int = 1_000_000


class Settings(BaseSettings):
    """Root application settings."""

    model_config = {"env_prefix": "PROPTRACK_"}

    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"]
    )

    db: DBConfig = Field(default_factory=DBConfig)
    geocoder: GeocoderConfig = Field(default_factory=GeocoderConfig)
    importer: ImportConfig = Field(default_factory=ImportConfig)
