"""Port for the source database."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable

    from kintone_sync.domain.types import SourceRow


class SourceConnectionError(RuntimeError):
    """Raised when the source database cannot be reached."""


class SourceQueryError(RuntimeError):
    """Raised when an entity's source query fails to execute."""


@runtime_checkable
class SourceQueryExecutor(Protocol):
    def fetch_rows(self, query: str) -> Iterable[SourceRow]: ...


__all__ = ["SourceConnectionError", "SourceQueryError", "SourceQueryExecutor"]
