"""HTTP client for the Kintone record API."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Any, Final

import httpx
from pydantic import ValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from kintone_sync.domain.ports.remote import RemotePayloadError, RemoteTransportError
from kintone_sync.domain.types import BUSINESS_ID_FIELD, ErrorDetail, RemoteLookupResult

from .schema import ErrorResponse, RecordsResponse

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from types import TracebackType

    from kintone_sync.config.kintone import KintoneConfig
    from kintone_sync.domain.ports.remote import LookupResponse, WriteResponse

log = getLogger(__name__)

RECORDS_PATH: Final[str] = "/k/v1/records.json"
RECORD_PATH: Final[str] = "/k/v1/record.json"
TOKEN_HEADER: Final[str] = "X-Cybozu-API-Token"


def quote_query_value(value: str) -> str:
    """Render ``value`` as a double-quoted string literal of the Kintone query language."""

    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def build_lookup_query(key_field: str, business_id: str) -> str:
    return f"{key_field} = {quote_query_value(business_id)}"


def _default_client_factory(config: KintoneConfig) -> httpx.Client:
    return httpx.Client(base_url=config.base_url, timeout=config.timeout_seconds)


def _parse_error(response: httpx.Response) -> ErrorDetail:
    try:
        error = ErrorResponse.model_validate(response.json())
    except (ValueError, ValidationError):
        return ErrorDetail(message=response.text.strip() or None)
    return ErrorDetail(message=error.message, code=error.code)


@dataclass(slots=True)
class KintoneClient:
    """Synchronous Kintone client; one HTTP connection pool per run.

    Every call carries the per-app API token, so one client serves all
    configured entities of a domain.
    """

    config: KintoneConfig
    client_factory: Callable[[KintoneConfig], httpx.Client] = field(
        default=_default_client_factory
    )
    _client: httpx.Client | None = field(default=None, init=False, repr=False)

    def __enter__(self) -> KintoneClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    @property
    def http(self) -> httpx.Client:
        if self._client is None:
            self._client = self.client_factory(self.config)
        return self._client

    def lookup(
        self,
        container_id: str,
        credential: str,
        business_id: str,
        *,
        key_field: str = BUSINESS_ID_FIELD,
    ) -> LookupResponse:
        params = {"app": container_id, "query": build_lookup_query(key_field, business_id)}
        response = self._send("GET", RECORDS_PATH, credential, params=params)
        if response.status_code != httpx.codes.OK:
            return response.status_code, _parse_error(response)

        try:
            payload = RecordsResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            log.error("Unexpected Kintone lookup payload for app %s: %s", container_id, exc)
            return response.status_code, ErrorDetail(message="Unexpected Kintone response payload")

        records = payload.records
        return response.status_code, RemoteLookupResult(
            found=bool(records),
            remote_record=records[0] if records else None,
            match_count=len(records),
        )

    def create(self, credential: str, payload: Mapping[str, Any]) -> WriteResponse:
        return self._write("POST", credential, payload)

    def update(self, credential: str, payload: Mapping[str, Any]) -> WriteResponse:
        return self._write("PUT", credential, payload)

    def _write(self, method: str, credential: str, payload: Mapping[str, Any]) -> WriteResponse:
        try:
            body = to_jsonable_python(payload)
        except (PydanticSerializationError, UnicodeDecodeError) as exc:
            raise RemotePayloadError(f"Record body cannot be encoded: {exc}") from exc
        response = self._send(method, RECORD_PATH, credential, json=body)
        if response.status_code == httpx.codes.OK:
            return response.status_code, None
        return response.status_code, _parse_error(response)

    def _send(
        self,
        method: str,
        path: str,
        credential: str,
        *,
        params: Mapping[str, str] | None = None,
        json: object | None = None,
    ) -> httpx.Response:
        headers = {TOKEN_HEADER: credential}
        try:
            return self.http.request(method, path, params=params, json=json, headers=headers)
        except httpx.HTTPError as exc:
            raise RemoteTransportError(f"{method} {path} failed: {exc!r}") from exc
