"""Public interface for the Kintone adapter."""

from __future__ import annotations

from .client import KintoneClient, build_lookup_query, quote_query_value
from .schema import ErrorResponse, RecordsResponse

__all__ = [
    "ErrorResponse",
    "KintoneClient",
    "RecordsResponse",
    "build_lookup_query",
    "quote_query_value",
]
