"""Build destination records from source rows."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .coercion import coerce
from .types import DestinationRecord, FieldValue

if TYPE_CHECKING:
    from .types import CoercionRules, EntityMapping, SourceRow


class RecordMappingError(KeyError):
    """Raised when a row lacks a column its entity mapping requires."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


def build_record(
    row: SourceRow,
    mapping: EntityMapping,
    rules: CoercionRules | None = None,
) -> DestinationRecord:
    """Map every configured (source column, destination field) pair of ``row``."""

    effective_rules = rules if rules is not None else mapping.coercion_rules
    missing = [column for column in mapping.source_columns if column not in row]
    if missing:
        raise RecordMappingError(
            f"Row for table {mapping.source_table} lacks columns: {', '.join(missing)}"
        )

    record: DestinationRecord = {}
    for source_column, destination_field in mapping.field_pairs:
        value = coerce(source_column, row[source_column], effective_rules)
        record[destination_field] = FieldValue(value)
    return record
