"""Listing models: stored properties, create/update payloads, and import errors."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import (
    AnyHttpUrl,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from proptrack.core.types import PropertyStatus

# Fields a client may change after creation.
MUTABLE_FIELDS: tuple[str, ...] = (
    "status",
    "service_charge",
    "cleaning_fee",
    "commission_charge",
    "is_favorite",
)

_HTTP_URL = TypeAdapter(AnyHttpUrl)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PropertyDraft(BaseModel):
    """A fully populated listing that has not been persisted yet."""

    name: str
    location: str
    url: str
    price_per_month: float
    rooms: float
    bathrooms: float
    square_meters: float | None = None
    status: PropertyStatus = PropertyStatus.AVAILABLE
    service_charge: float | None = None
    cleaning_fee: float | None = None
    commission_charge: float | None = None
    latitude: float
    longitude: float
    is_favorite: bool = False
    is_approximated: bool = False


class Property(PropertyDraft):
    """A persisted listing. ``id`` is assigned once by the repository."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime = Field(default_factory=_utcnow)


class PropertyCreate(BaseModel):
    """Request body for creating a single listing.

    Ranges mirror the add-listing form so the server does not rely on
    client-side checks alone.
    """

    name: str = Field(min_length=3, max_length=100)
    price_per_month: float = Field(ge=1, le=100_000)
    location: str = Field(min_length=2)
    rooms: float = Field(ge=1, le=20)
    bathrooms: float = Field(ge=1, le=10)
    square_meters: float | None = Field(default=None, ge=1, le=1000)
    url: str
    is_approximated: bool = False

    @field_validator("url")
    @classmethod
    def _http_url(cls, value: str) -> str:
        # Checked as an http(s) URL but stored exactly as sent.
        try:
            _HTTP_URL.validate_python(value)
        except ValidationError as exc:
            raise ValueError("url must be a valid http(s) URL") from exc
        return value

    def to_fields(self) -> dict[str, object]:
        return self.model_dump()


class PropertyUpdate(BaseModel):
    """Sparse update body. Only keys the client actually sent are applied."""

    status: PropertyStatus | None = None
    service_charge: float | None = Field(default=None, ge=0, le=1000)
    cleaning_fee: float | None = Field(default=None, ge=0, le=1000)
    commission_charge: float | None = Field(default=None, ge=0, le=1000)
    is_favorite: bool | None = None

    @field_validator("status", "is_favorite", mode="before")
    @classmethod
    def _not_null(cls, value: object) -> object:
        if value is None:
            raise ValueError("may not be null")
        return value

    def changes(self) -> dict[str, object]:
        """Return the explicitly supplied fields, ready for the repository."""
        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if key in MUTABLE_FIELDS
        }


class RowError(BaseModel):
    """Every problem found in one data row of an import file."""

    row: int
    errors: list[str]
