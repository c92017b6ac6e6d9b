"""Protocol definition for listing persistence.

The in-memory store returns plain values and the SQL repository returns
coroutines; both satisfy the same interface through ``resolve()``.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from proptrack.listings.models import Property, PropertyDraft


@runtime_checkable
class PropertyRepository(Protocol):
    """Protocol for listing storage."""

    def list_properties(self) -> list[Property]: ...

    def get_property(self, property_id: int) -> Property | None: ...

    def add_property(self, draft: PropertyDraft) -> Property: ...

    def insert_many(self, drafts: list[PropertyDraft]) -> list[Property]: ...

    def update_property(
        self, property_id: int, changes: dict[str, Any]
    ) -> Property | None: ...
