"""Source rows read through a single SQLAlchemy connection held for the run."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Any, Literal

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError

from kintone_sync.domain.ports.source import SourceConnectionError, SourceQueryError

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import URL, Connection, Engine

log = getLogger(__name__)


class SqlAlchemySource:
    """Executes operator-supplied queries and returns rows keyed by column name.

    The connection is opened on ``__enter__`` and always released on exit.
    Engines created here are disposed on exit as well; an injected engine is
    left to its owner.
    """

    def __init__(
        self,
        *,
        engine: Engine | None = None,
        database_uri: str | URL | None = None,
    ) -> None:
        if engine is None and database_uri is None:
            raise ValueError("Either engine or database_uri is required")
        self._owns_engine = engine is None
        self._engine_arg = engine
        self._database_uri = database_uri
        self._engine: Engine | None = None
        self._connection: Connection | None = None

    def __enter__(self) -> SqlAlchemySource:
        try:
            if self._engine_arg is not None:
                self._engine = self._engine_arg
            else:
                self._engine = create_engine(self._database_uri)  # type: ignore[arg-type]
            self._connection = self._engine.connect()
        except SQLAlchemyError as exc:
            self._dispose_engine()
            raise SourceConnectionError(f"Database connection failed: {exc}") from exc
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        try:
            if self._connection is not None:
                self._connection.close()
        finally:
            self._connection = None
            self._dispose_engine()
        return False

    def _dispose_engine(self) -> None:
        if self._owns_engine and self._engine is not None:
            self._engine.dispose()
        self._engine = None

    @property
    def connection(self) -> Connection:
        if self._connection is None:
            raise RuntimeError("SqlAlchemySource used outside of its context manager")
        return self._connection

    def fetch_rows(self, query: str) -> list[dict[str, Any]]:
        try:
            result = self.connection.execute(text(query))
            rows = [dict(row) for row in result.mappings()]
        except SQLAlchemyError as exc:
            self._recover()
            raise SourceQueryError(str(exc)) from exc
        self._end_transaction()
        return rows

    def _end_transaction(self) -> None:
        # connections autobegin; end the read transaction after each query
        if self.connection.in_transaction():
            self.connection.commit()

    def _recover(self) -> None:
        try:
            if self.connection.in_transaction():
                self.connection.rollback()
        except SQLAlchemyError:
            log.exception("Rollback after failed query did not succeed")
