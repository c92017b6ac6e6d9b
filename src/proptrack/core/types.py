"""Core type definitions shared across PropTrack modules."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel


class PropertyStatus(StrEnum):
    """Lifecycle status of a listing.

    ``DELETED`` is a status, not a row removal.
    """

    AVAILABLE = "available"
    CONTACTED = "contacted"
    TALKING = "talking"
    RESERVED = "reserved"
    DELETED = "deleted"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class StatusOption(BaseModel):
    """A status value paired with its display label."""

    value: PropertyStatus
    label: str


def status_options() -> list[StatusOption]:
    return [StatusOption(value=s, label=s.label) for s in PropertyStatus]


class HealthStatus(BaseModel):
    """Health check response."""

    status: str
    service: str
    version: str = "0.1.0"
