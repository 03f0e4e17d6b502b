"""Field coercion rules applied to raw source values before they are written.

Coercions never raise: input that cannot be normalised becomes ``None``.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import TYPE_CHECKING, Any, Final

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from .types import Coercer, CoercionRules

_DATE_PATTERN: Final = re.compile(r"\d{4}-\d{2}-\d{2}")


def passthrough(raw: Any) -> Any:
    return raw


def _as_text(raw: Any) -> Any:
    """Decode binary column values as UTF-8; undecodable bytes become ``None``."""

    if isinstance(raw, bytes | bytearray):
        try:
            return bytes(raw).decode("utf-8")
        except UnicodeDecodeError:
            return None
    return raw


def coerce_date(raw: Any) -> str | None:
    """Return ``raw`` if it is a real calendar date in ``YYYY-MM-DD`` form."""

    if isinstance(raw, date) and not isinstance(raw, datetime):
        return raw.isoformat()
    raw = _as_text(raw)
    if not isinstance(raw, str) or not _DATE_PATTERN.fullmatch(raw):
        return None
    try:
        date.fromisoformat(raw)
    except ValueError:
        return None
    return raw


def coerce_yes_no(raw: Any) -> str | None:
    raw = _as_text(raw)
    if raw is None:
        return None
    token = str(raw).strip().upper()
    if token == "YES":
        return "Yes"
    if token == "NO":
        return "No"
    return None


COERCERS: Final[Mapping[str, Coercer]] = {
    "date": coerce_date,
    "yes_no": coerce_yes_no,
    "passthrough": passthrough,
}

DEFAULT_COERCION_RULES: Final[CoercionRules] = {
    "LiveDate": coerce_date,
    "IsClec": coerce_yes_no,
}


def build_coercion_rules(
    *,
    date_fields: Iterable[str] = (),
    yes_no_fields: Iterable[str] = (),
) -> dict[str, Coercer]:
    """Build a field-name keyed rule table from lists of typed source columns."""

    rules: dict[str, Coercer] = {}
    for name in date_fields:
        rules[name] = COERCERS["date"]
    for name in yes_no_fields:
        rules[name] = COERCERS["yes_no"]
    return rules


def coerce(field_name: str, raw: Any, rules: CoercionRules | None = None) -> Any:
    """Normalise ``raw`` using the rule registered for ``field_name`` (if any)."""

    table = DEFAULT_COERCION_RULES if rules is None else rules
    coercer = table.get(field_name, passthrough)
    return coercer(raw)
