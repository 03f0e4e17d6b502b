"""Ports for the external collaborators of the reconciliation core."""

from __future__ import annotations

from .remote import (
    LookupResponse,
    RemotePayloadError,
    RemoteRecordService,
    RemoteTransportError,
    WriteResponse,
)
from .source import SourceConnectionError, SourceQueryError, SourceQueryExecutor

__all__ = [
    "LookupResponse",
    "RemotePayloadError",
    "RemoteRecordService",
    "RemoteTransportError",
    "SourceConnectionError",
    "SourceQueryError",
    "SourceQueryExecutor",
    "WriteResponse",
]
