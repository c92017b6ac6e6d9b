"""Database layer for PropTrack: SQLAlchemy 2.0 async."""

from __future__ import annotations

from proptrack.db.base import Base
from proptrack.db.engine import DatabaseManager

__all__ = ["Base", "DatabaseManager"]
