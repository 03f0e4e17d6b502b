"""Drive configured entities through mapping and upsert, one row at a time."""

from __future__ import annotations

from dataclasses import dataclass, replace
from logging import getLogger
from typing import TYPE_CHECKING

from .mapping import RecordMappingError, build_record
from .ports.source import SourceQueryError
from .types import Action, OperationOutcome

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from .ports.source import SourceQueryExecutor
    from .types import CoercionRules, EntityMapping, SourceRow
    from .upsert import UpsertEngine

log = getLogger(__name__)


def run_batch(
    entity_mappings: Iterable[EntityMapping],
    *,
    source: SourceQueryExecutor,
    engine: UpsertEngine,
    rules: CoercionRules | None = None,
) -> Iterator[OperationOutcome]:
    """Yield one outcome per source row, entity by entity in configured order.

    An entity whose query returns nothing yields a single ``NO_RECORDS`` marker.
    Row and query failures become failed outcomes; they never stop later rows
    or entities.
    """

    for mapping in entity_mappings:
        yield from _run_entity(mapping, source=source, engine=engine, rules=rules)


def _run_entity(
    mapping: EntityMapping,
    *,
    source: SourceQueryExecutor,
    engine: UpsertEngine,
    rules: CoercionRules | None,
) -> Iterator[OperationOutcome]:
    log.info(mapping.source_query)
    try:
        rows = list(source.fetch_rows(mapping.source_query))
    except SourceQueryError as exc:
        yield OperationOutcome(
            business_id=None,
            action=Action.SKIP,
            success=False,
            detail=f"Query failed: {exc}",
            entity=mapping.source_table,
        )
        return

    if not rows:
        yield OperationOutcome(
            business_id=None,
            action=Action.NO_RECORDS,
            success=True,
            detail=f"No matching records found in MySQL for table {mapping.source_table}.",
            entity=mapping.source_table,
        )
        return

    for row in rows:
        outcome = _process_row(row, mapping, engine=engine, rules=rules)
        yield replace(outcome, entity=mapping.source_table)


def _process_row(
    row: SourceRow,
    mapping: EntityMapping,
    *,
    engine: UpsertEngine,
    rules: CoercionRules | None,
) -> OperationOutcome:
    raw_id = row.get(mapping.id_field)
    if raw_id is None or not str(raw_id).strip():
        return OperationOutcome(
            business_id=None,
            action=Action.SKIP,
            success=False,
            detail=f"Row has no {mapping.id_field} value",
        )
    business_id = str(raw_id)

    try:
        record = build_record(row, mapping, rules)
    except RecordMappingError as exc:
        return OperationOutcome(
            business_id=business_id,
            action=Action.SKIP,
            success=False,
            detail=f"{exc} Id={business_id}",
        )

    return engine.reconcile(
        business_id,
        record,
        mapping.app_id,
        mapping.api_token,
        key_field=mapping.id_field,
    )


def format_outcome(outcome: OperationOutcome) -> str:
    table = outcome.entity or "?"
    if outcome.action is Action.NO_RECORDS:
        return outcome.detail
    if outcome.success:
        verb = "Registered" if outcome.action is Action.CREATE else "Updated"
        return f"Success for table {table}: {verb} Id={outcome.business_id}"
    if outcome.action is Action.SKIP:
        return f"Skipped row for table {table}: {outcome.detail}"
    return f"Error for table {table} {outcome.detail}"


@dataclass(slots=True)
class BatchSummary:
    """Running tally of the outcomes of one run."""

    created: int = 0
    updated: int = 0
    skipped: int = 0
    failed: int = 0
    empty_entities: int = 0

    def add(self, outcome: OperationOutcome) -> None:
        if outcome.action is Action.NO_RECORDS:
            self.empty_entities += 1
        elif outcome.action is Action.SKIP:
            self.skipped += 1
        elif not outcome.success:
            self.failed += 1
        elif outcome.action is Action.CREATE:
            self.created += 1
        else:
            self.updated += 1

    @property
    def total(self) -> int:
        return self.created + self.updated + self.skipped + self.failed
