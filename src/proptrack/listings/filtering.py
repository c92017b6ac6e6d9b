"""Filter and sort a listing collection without touching storage."""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum

from pydantic import BaseModel, Field

from proptrack.core.types import PropertyStatus
from proptrack.listings.models import Property


class SortField(StrEnum):
    PRICE = "price_per_month"
    STATUS = "status"
    ROOMS = "rooms"


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"


class SortOption(BaseModel):
    field: SortField
    direction: SortDirection = SortDirection.ASC
    label: str = ""


SORT_OPTIONS: list[SortOption] = [
    SortOption(field=SortField.PRICE, direction=SortDirection.DESC, label="Price (High to Low)"),
    SortOption(field=SortField.PRICE, direction=SortDirection.ASC, label="Price (Low to High)"),
    SortOption(field=SortField.STATUS, direction=SortDirection.ASC, label="Status (A-Z)"),
    SortOption(field=SortField.ROOMS, direction=SortDirection.DESC, label="Rooms (Most to Least)"),
    SortOption(field=SortField.ROOMS, direction=SortDirection.ASC, label="Rooms (Least to Most)"),
]


class FilterState(BaseModel):
    """The active filter and sort selection."""

    show_favorites: bool = False
    statuses: list[PropertyStatus] = Field(default_factory=list)
    rooms: float | None = None
    sort: SortOption | None = None

    @property
    def is_default(self) -> bool:
        return (
            not self.show_favorites
            and not self.statuses
            and self.rooms is None
            and self.sort is None
        )


def _sort_key(field: SortField):
    if field is SortField.STATUS:
        return lambda p: p.status.value
    return lambda p: getattr(p, field.value)


def apply_filters(properties: Iterable[Property], state: FilterState) -> list[Property]:
    """Apply favorites, status, and rooms filters in that order, then sort.

    The sort is stable, so equal keys keep their incoming order.
    """
    result = list(properties)

    if state.show_favorites:
        result = [p for p in result if p.is_favorite]

    if state.statuses:
        wanted = set(state.statuses)
        result = [p for p in result if p.status in wanted]

    if state.rooms is not None:
        result = [p for p in result if p.rooms == state.rooms]

    if state.sort is not None:
        result.sort(
            key=_sort_key(state.sort.field),
            reverse=state.sort.direction is SortDirection.DESC,
        )

    return result
