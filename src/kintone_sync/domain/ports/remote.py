"""Port for the remote record-management service."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from kintone_sync.domain.types import ErrorDetail, RemoteLookupResult

type LookupResponse = tuple[int, RemoteLookupResult | ErrorDetail]
type WriteResponse = tuple[int, ErrorDetail | None]


class RemoteTransportError(RuntimeError):
    """Raised when a remote call fails before an HTTP status is received."""


class RemotePayloadError(RemoteTransportError):
    """Raised when a record body cannot be encoded as JSON; nothing is sent."""


@runtime_checkable
class RemoteRecordService(Protocol):
    """Reads and writes records of a remote container.

    Implementations return raw status codes and leave success/failure
    interpretation to the caller.
    """

    def lookup(
        self,
        container_id: str,
        credential: str,
        business_id: str,
        *,
        key_field: str = "Id",
    ) -> LookupResponse: ...

    def create(self, credential: str, payload: Mapping[str, Any]) -> WriteResponse: ...

    def update(self, credential: str, payload: Mapping[str, Any]) -> WriteResponse: ...


__all__ = [
    "LookupResponse",
    "RemotePayloadError",
    "RemoteRecordService",
    "RemoteTransportError",
    "WriteResponse",
]
