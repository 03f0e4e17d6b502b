"""SQLAlchemy adapter for reading source rows."""

from __future__ import annotations

from .source import SqlAlchemySource

__all__ = ["SqlAlchemySource"]
