"""Create-or-update reconciliation of one destination record.

The engine looks the business identifier up first and only writes when the
lookup succeeded: a failed read is never taken to mean "absent, so create".
When several remote records match, the row is still treated as existing and
updated through the update key; choosing among duplicates is left to the
remote service, which rejects an ambiguous key.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Any, Final

from .ports.remote import RemoteTransportError
from .types import (
    BUSINESS_ID_FIELD,
    Action,
    ErrorDetail,
    OperationOutcome,
    RemoteLookupResult,
    UpdateKey,
    record_payload,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .ports.remote import RemoteRecordService
    from .types import FieldValue

log = getLogger(__name__)

HTTP_OK: Final[int] = 200


def build_create_payload(
    container_id: str,
    record: Mapping[str, FieldValue],
) -> dict[str, Any]:
    return {"app": container_id, "record": record_payload(record)}


def build_update_payload(
    container_id: str,
    record: Mapping[str, FieldValue],
    update_key: UpdateKey,
) -> dict[str, Any]:
    """Return an update body; the key field travels only as ``updateKey``."""

    body = {name: value for name, value in record.items() if name != update_key.field}
    return {
        "app": container_id,
        "updateKey": update_key.to_payload(),
        "record": record_payload(body),
    }


def _error_text(status_code: int, error: ErrorDetail | None) -> str:
    if error is not None and error.message:
        return error.message
    return f"HTTP {status_code}"


class UpsertEngine:
    """Decide between create and update for each row and apply the write."""

    def __init__(self, service: RemoteRecordService, *, key_field: str = BUSINESS_ID_FIELD) -> None:
        self._service = service
        self._key_field = key_field

    def reconcile(
        self,
        business_id: str,
        record: Mapping[str, FieldValue],
        container_id: str,
        credential: str,
        *,
        key_field: str | None = None,
    ) -> OperationOutcome:
        key = key_field or self._key_field
        try:
            status_code, result = self._service.lookup(
                container_id, credential, business_id, key_field=key
            )
        except RemoteTransportError as exc:
            return OperationOutcome(
                business_id=business_id,
                action=Action.SKIP,
                success=False,
                detail=f"Lookup failed: {exc} Id={business_id}",
            )

        if status_code != HTTP_OK or not isinstance(result, RemoteLookupResult):
            error = result if isinstance(result, ErrorDetail) else None
            return OperationOutcome(
                business_id=business_id,
                action=Action.SKIP,
                success=False,
                detail=f"Error in checking request (HTTP code: {status_code}): "
                f"{_error_text(status_code, error)} Id={business_id}",
                status_code=status_code,
            )

        if result.found:
            if result.match_count > 1:
                log.warning(
                    "%s remote records match %s=%s in app %s; updating by key",
                    result.match_count,
                    key,
                    business_id,
                    container_id,
                )
            action = Action.UPDATE
            payload = build_update_payload(container_id, record, UpdateKey(key, business_id))
            write = self._service.update
        else:
            action = Action.CREATE
            payload = build_create_payload(container_id, record)
            write = self._service.create

        try:
            status_code, error = write(credential, payload)
        except RemoteTransportError as exc:
            return OperationOutcome(
                business_id=business_id,
                action=action,
                success=False,
                detail=f"{exc} Id={business_id}",
            )

        if status_code == HTTP_OK:
            return OperationOutcome(
                business_id=business_id,
                action=action,
                success=True,
                detail=business_id,
                status_code=status_code,
            )
        return OperationOutcome(
            business_id=business_id,
            action=action,
            success=False,
            detail=(
                f"(HTTP code: {status_code}): {_error_text(status_code, error)} Id={business_id}"
            ),
            status_code=status_code,
        )
