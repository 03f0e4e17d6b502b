"""Environment variable loaders for configuration."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from .errors import MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence


def require_env_vars(names: Sequence[str]) -> dict[str, str]:
    """Read a group of keys (an entity's `<NAME>_*` block, the `MYSQL_*` set).

    Values are returned as written. Every unset or blank key is reported in a
    single `MissingConfigurationError` so an operator fixes them in one pass.
    """

    found = {name: os.environ.get(name, "") for name in names}
    blank = sorted(name for name, value in found.items() if not value.strip())
    if blank:
        raise MissingConfigurationError(f"Missing configuration for: {', '.join(blank)}")
    return found


def require_env_var(name: str) -> str:
    """Return a required environment variable by name."""

    return require_env_vars([name])[name]


def optional_env_var(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def split_list(value: str) -> tuple[str, ...]:
    """Split a comma-separated value, dropping blanks around and between items."""

    return tuple(item.strip() for item in value.split(",") if item.strip())
