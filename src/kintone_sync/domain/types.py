"""Value types shared by the reconciliation core."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from kintone_sync.config.errors import ConfigurationError

BUSINESS_ID_FIELD = "Id"

type SourceRow = Mapping[str, Any]
type Coercer = Callable[[Any], Any]
type CoercionRules = Mapping[str, Coercer]


@dataclass(frozen=True, slots=True)
class FieldValue:
    """Tagged field value; ``None`` is an explicit null, not an absent field."""

    value: Any = None

    def to_payload(self) -> dict[str, Any]:
        return {"value": self.value}


type DestinationRecord = dict[str, FieldValue]


def record_payload(record: Mapping[str, FieldValue]) -> dict[str, dict[str, Any]]:
    return {name: value.to_payload() for name, value in record.items()}


@dataclass(frozen=True, slots=True)
class EntityMapping:
    """One synchronisable table: source query, column pairing and target app.

    ``source_columns`` and ``destination_fields`` are parallel sequences. The
    row column named ``id_field`` carries the business identifier; the Kintone
    field of the same name is the update key.
    """

    name: str
    source_table: str
    source_columns: tuple[str, ...]
    source_query: str
    destination_fields: tuple[str, ...]
    app_id: str
    api_token: str = field(repr=False)
    coercion_rules: CoercionRules | None = field(default=None, compare=False)
    id_field: str = BUSINESS_ID_FIELD

    def __post_init__(self) -> None:
        if not self.source_columns:
            raise ConfigurationError(f"Entity {self.name} has no source columns")
        if len(self.source_columns) != len(self.destination_fields):
            raise ConfigurationError(
                f"Entity {self.name} maps {len(self.source_columns)} source columns "
                f"to {len(self.destination_fields)} destination fields"
            )
        duplicates = sorted(
            {name for name in self.destination_fields if self.destination_fields.count(name) > 1}
        )
        if duplicates:
            raise ConfigurationError(
                f"Entity {self.name} maps several columns to: {', '.join(duplicates)}"
            )
        for attribute in ("source_query", "app_id", "api_token"):
            if not str(getattr(self, attribute)).strip():
                raise ConfigurationError(f"Entity {self.name} has a blank {attribute}")

    @property
    def field_pairs(self) -> tuple[tuple[str, str], ...]:
        return tuple(zip(self.source_columns, self.destination_fields, strict=True))


@dataclass(frozen=True, slots=True)
class UpdateKey:
    field: str
    value: str

    def to_payload(self) -> dict[str, str]:
        return {"field": self.field, "value": self.value}


@dataclass(frozen=True, slots=True)
class RemoteLookupResult:
    found: bool
    remote_record: Mapping[str, Any] | None = None
    match_count: int = 0


@dataclass(frozen=True, slots=True)
class ErrorDetail:
    """Error body returned by the remote service for a non-success status."""

    message: str | None = None
    code: str | None = None


class Action(StrEnum):
    CREATE = "create"
    UPDATE = "update"
    SKIP = "skip"
    NO_RECORDS = "no_records"


@dataclass(frozen=True, slots=True)
class OperationOutcome:
    """Result of reconciling one row (or the empty-result marker of an entity)."""

    business_id: str | None
    action: Action
    success: bool
    detail: str
    entity: str | None = None
    status_code: int | None = None
