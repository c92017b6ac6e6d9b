"""PostgreSQL listing repository."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select

from proptrack.core.types import PropertyStatus
from proptrack.db.engine import DatabaseManager
from proptrack.db.models import PropertyRow
from proptrack.listings.models import MUTABLE_FIELDS, Property, PropertyDraft


class PostgresPropertyRepository:
    """Postgres-backed listing storage."""

    def __init__(self, db: DatabaseManager) -> None:
        self._db = db

    async def list_properties(self) -> list[Property]:
        async with self._db.session() as db:
            result = await db.execute(
                select(PropertyRow).order_by(
                    PropertyRow.created_at.desc(), PropertyRow.id.desc()
                )
            )
            return [self._row_to_property(r) for r in result.scalars().all()]

    async def get_property(self, property_id: int) -> Property | None:
        async with self._db.session() as db:
            row = await db.get(PropertyRow, property_id)
            if row is None:
                return None
            return self._row_to_property(row)

    async def add_property(self, draft: PropertyDraft) -> Property:
        created = await self.insert_many([draft])
        return created[0]

    async def insert_many(self, drafts: list[PropertyDraft]) -> list[Property]:
        """Insert every draft in one transaction; all or nothing."""
        async with self._db.session() as db:
            rows = [self._draft_to_row(d) for d in drafts]
            db.add_all(rows)
            await db.commit()
            return [self._row_to_property(r) for r in rows]

    async def update_property(
        self, property_id: int, changes: dict[str, Any]
    ) -> Property | None:
        async with self._db.session() as db:
            row = await db.get(PropertyRow, property_id)
            if row is None:
                return None
            for key, value in changes.items():
                if key not in MUTABLE_FIELDS:
                    continue
                if key == "status":
                    value = PropertyStatus(value).value
                setattr(row, key, value)
            await db.commit()
            return self._row_to_property(row)

    @staticmethod
    def _draft_to_row(draft: PropertyDraft) -> PropertyRow:
        data = draft.model_dump()
        data["status"] = draft.status.value
        return PropertyRow(**data)

    @staticmethod
    def _row_to_property(row: PropertyRow) -> Property:
        return Property(
            id=row.id,
            name=row.name,
            location=row.location,
            url=row.url,
            price_per_month=row.price_per_month,
            rooms=row.rooms,
            bathrooms=row.bathrooms,
            square_meters=row.square_meters,
            status=PropertyStatus(row.status),
            service_charge=row.service_charge,
            cleaning_fee=row.cleaning_fee,
            commission_charge=row.commission_charge,
            latitude=row.latitude,
            longitude=row.longitude,
            is_favorite=row.is_favorite,
            is_approximated=row.is_approximated,
            created_at=row.created_at,
        )
