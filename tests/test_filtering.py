"""Tests for the listing filter/sort engine."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from proptrack.core.types import PropertyStatus
from proptrack.listings.filtering import (
    SORT_OPTIONS,
    FilterState,
    SortDirection,
    SortField,
    SortOption,
    apply_filters,
)
from proptrack.listings.models import Property

from conftest import make_draft


def _prop(pid: int, **overrides) -> Property:
    draft = make_draft(**overrides)
    return Property(id=pid, created_at=datetime(2026, 1, pid, tzinfo=timezone.utc), **draft.model_dump())


@pytest.fixture
def listings() -> list[Property]:
    return [
        _prop(1, name="A", price_per_month=1500, rooms=2, status=PropertyStatus.AVAILABLE, is_favorite=True),
        _prop(2, name="B", price_per_month=900, rooms=1, status=PropertyStatus.RESERVED),
        _prop(3, name="C", price_per_month=2100, rooms=3, status=PropertyStatus.CONTACTED, is_favorite=True),
        _prop(4, name="D", price_per_month=1200, rooms=2, status=PropertyStatus.TALKING),
        _prop(5, name="E", price_per_month=1500, rooms=2, status=PropertyStatus.DELETED),
    ]


def _names(props: list[Property]) -> list[str]:
    return [p.name for p in props]


class TestFilters:
    def test_default_state_is_identity(self, listings):
        state = FilterState()
        assert state.is_default
        assert _names(apply_filters(listings, state)) == ["A", "B", "C", "D", "E"]

    def test_favorites_only(self, listings):
        assert _names(apply_filters(listings, FilterState(show_favorites=True))) == ["A", "C"]

    def test_status_membership(self, listings):
        state = FilterState(statuses=[PropertyStatus.RESERVED, PropertyStatus.TALKING])
        assert _names(apply_filters(listings, state)) == ["B", "D"]

    def test_exact_rooms(self, listings):
        assert _names(apply_filters(listings, FilterState(rooms=2))) == ["A", "D", "E"]

    def test_filters_combine(self, listings):
        state = FilterState(
            show_favorites=True,
            statuses=[PropertyStatus.AVAILABLE, PropertyStatus.CONTACTED],
            rooms=2,
        )
        assert _names(apply_filters(listings, state)) == ["A"]

    def test_no_match(self, listings):
        assert apply_filters(listings, FilterState(rooms=7)) == []

    def test_input_not_mutated(self, listings):
        before = _names(listings)
        apply_filters(listings, FilterState(sort=SortOption(field=SortField.PRICE)))
        assert _names(listings) == before

    def test_status_strings_coerced(self, listings):
        state = FilterState(statuses=["reserved"])
        assert _names(apply_filters(listings, state)) == ["B"]


class TestSort:
    def test_price_descending(self, listings):
        state = FilterState(sort=SortOption(field=SortField.PRICE, direction=SortDirection.DESC))
        assert _names(apply_filters(listings, state)) == ["C", "A", "E", "D", "B"]

    def test_price_ascending_is_stable(self, listings):
        state = FilterState(sort=SortOption(field=SortField.PRICE, direction=SortDirection.ASC))
        assert _names(apply_filters(listings, state)) == ["B", "D", "A", "E", "C"]

    def test_status_alphabetical(self, listings):
        state = FilterState(sort=SortOption(field=SortField.STATUS))
        assert [p.status.value for p in apply_filters(listings, state)] == [
            "available", "contacted", "deleted", "reserved", "talking",
        ]

    def test_rooms_descending(self, listings):
        state = FilterState(sort=SortOption(field=SortField.ROOMS, direction=SortDirection.DESC))
        assert _names(apply_filters(listings, state)) == ["C", "A", "D", "E", "B"]

    def test_sort_after_filter(self, listings):
        state = FilterState(
            rooms=2,
            sort=SortOption(field=SortField.PRICE, direction=SortDirection.ASC),
        )
        assert _names(apply_filters(listings, state)) == ["D", "A", "E"]

    def test_sort_options_labels(self):
        labels = [o.label for o in SORT_OPTIONS]
        assert "Price (High to Low)" in labels
        assert "Status (A-Z)" in labels
        assert len(SORT_OPTIONS) == 5
