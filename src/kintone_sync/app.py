"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from contextlib import AbstractContextManager
from logging import getLogger
from typing import TYPE_CHECKING

from kintone_sync.adapters.kintone import KintoneClient
from kintone_sync.adapters.sqlalchemy import SqlAlchemySource
from kintone_sync.config import get_database_config, get_kintone_config
from kintone_sync.config.entities import get_entity_mappings
from kintone_sync.domain.batch import BatchSummary, format_outcome, run_batch
from kintone_sync.domain.ports import RemoteRecordService, SourceQueryExecutor
from kintone_sync.domain.upsert import UpsertEngine

if TYPE_CHECKING:
    from collections.abc import Sequence

    from kintone_sync.domain.types import EntityMapping, OperationOutcome

SourceFactory = Callable[[], AbstractContextManager[SourceQueryExecutor]]
RemoteFactory = Callable[[], AbstractContextManager[RemoteRecordService]]

log = getLogger(__name__)


def _default_source_factory() -> SourceFactory:
    database = get_database_config()
    log.info("Using source database %s", database.render())
    return lambda: SqlAlchemySource(database_uri=database.uri)


def _default_remote_factory() -> RemoteFactory:
    kintone = get_kintone_config()
    return lambda: KintoneClient(config=kintone)


def log_outcome(outcome: OperationOutcome) -> None:
    message = format_outcome(outcome)
    if outcome.success:
        log.info(message)
    else:
        log.warning(message)


def sync_entities(
    *,
    entity_names: Sequence[str] | None = None,
    entity_mappings: Sequence[EntityMapping] | None = None,
    source_factory: SourceFactory | None = None,
    remote_factory: RemoteFactory | None = None,
) -> BatchSummary:
    """Synchronise every configured entity and return the tally of outcomes.

    Configuration is read and validated in full before the source database is
    contacted. Failing to connect raises ``SourceConnectionError``; per-row
    problems are logged and counted instead.
    """

    mappings = (
        tuple(entity_mappings)
        if entity_mappings is not None
        else get_entity_mappings(entity_names)
    )
    effective_source = source_factory or _default_source_factory()
    effective_remote = remote_factory or _default_remote_factory()

    log.info("Starting sync: entities=%s", ", ".join(mapping.name for mapping in mappings))
    summary = BatchSummary()
    with effective_source() as source, effective_remote() as remote:
        engine = UpsertEngine(remote)
        for outcome in run_batch(mappings, source=source, engine=engine):
            log_outcome(outcome)
            summary.add(outcome)

    log.info(
        "Finished sync: created=%s, updated=%s, skipped=%s, failed=%s, empty_entities=%s",
        summary.created,
        summary.updated,
        summary.skipped,
        summary.failed,
        summary.empty_entities,
    )
    return summary
