"""Load entity mappings from ``APPS`` and the ``<NAME>_*`` keys of each entity."""

from __future__ import annotations

from typing import TYPE_CHECKING

from kintone_sync.domain.coercion import build_coercion_rules
from kintone_sync.domain.types import EntityMapping

from .env import optional_env_var, require_env_var, require_env_vars, split_list
from .errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from kintone_sync.domain.types import Coercer

ENTITY_KEY_SUFFIXES = (
    "MYSQL_TABLE",
    "MYSQL_FIELDS",
    "MYSQL_QUERY",
    "KINTONE_FIELDS",
    "KINTONE_APP_ID",
    "KINTONE_API_TOKEN",
)


def entity_key(entity: str, suffix: str) -> str:
    return f"{entity}_{suffix}"


def get_entity_names() -> tuple[str, ...]:
    names = split_list(require_env_var("APPS"))
    if not names:
        raise ConfigurationError("APPS does not name any entity")
    return names


def get_entity_mappings(selected: Sequence[str] | None = None) -> tuple[EntityMapping, ...]:
    """Parse and validate every configured entity before any row is processed.

    ``selected`` restricts the result to a subset of ``APPS``; the configured
    order is kept. All missing keys across the entities are reported at once.
    """

    names = get_entity_names()
    if selected:
        unknown = sorted(set(selected) - set(names))
        if unknown:
            raise ConfigurationError(f"Entities not listed in APPS: {', '.join(unknown)}")
        names = tuple(name for name in names if name in set(selected))

    values = require_env_vars(
        [entity_key(name, suffix) for name in names for suffix in ENTITY_KEY_SUFFIXES]
    )
    return tuple(_build_mapping(name, values) for name in names)


def _build_mapping(name: str, values: dict[str, str]) -> EntityMapping:
    def value(suffix: str) -> str:
        return values[entity_key(name, suffix)].strip()

    return EntityMapping(
        name=name,
        source_table=value("MYSQL_TABLE"),
        source_columns=split_list(value("MYSQL_FIELDS")),
        source_query=value("MYSQL_QUERY"),
        destination_fields=split_list(value("KINTONE_FIELDS")),
        app_id=value("KINTONE_APP_ID"),
        api_token=value("KINTONE_API_TOKEN"),
        coercion_rules=_coercion_rules(name),
    )


def _coercion_rules(name: str) -> dict[str, Coercer] | None:
    date_fields = optional_env_var(entity_key(name, "DATE_FIELDS"))
    yes_no_fields = optional_env_var(entity_key(name, "YES_NO_FIELDS"))
    if date_fields is None and yes_no_fields is None:
        return None
    return build_coercion_rules(
        date_fields=split_list(date_fields or ""),
        yes_no_fields=split_list(yes_no_fields or ""),
    )
