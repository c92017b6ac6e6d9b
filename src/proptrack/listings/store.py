"""In-memory store for listings."""

from __future__ import annotations

import itertools
from datetime import datetime, timezone
from typing import Any

from proptrack.listings.models import MUTABLE_FIELDS, Property, PropertyDraft


class PropertyStore:
    """In-memory dict store for listings, suitable for single-instance use.

    Ids start at 1 and are never reused.
    """

    def __init__(self) -> None:
        self._properties: dict[int, Property] = {}
        self._ids = itertools.count(1)

    def list_properties(self) -> list[Property]:
        """All listings, newest first."""
        return sorted(
            self._properties.values(),
            key=lambda p: (p.created_at, p.id),
            reverse=True,
        )

    def get_property(self, property_id: int) -> Property | None:
        return self._properties.get(property_id)

    def add_property(self, draft: PropertyDraft) -> Property:
        return self.insert_many([draft])[0]

    def insert_many(self, drafts: list[PropertyDraft]) -> list[Property]:
        now = datetime.now(timezone.utc)
        created = [
            Property(id=next(self._ids), created_at=now, **draft.model_dump())
            for draft in drafts
        ]
        for prop in created:
            self._properties[prop.id] = prop
        return created

    def update_property(
        self, property_id: int, changes: dict[str, Any]
    ) -> Property | None:
        current = self._properties.get(property_id)
        if current is None:
            return None
        allowed = {k: v for k, v in changes.items() if k in MUTABLE_FIELDS}
        updated = current.model_copy(update=allowed)
        self._properties[property_id] = updated
        return updated

    @property
    def count(self) -> int:
        return len(self._properties)
