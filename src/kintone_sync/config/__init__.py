"""Application configuration helpers."""

from __future__ import annotations

from .database import DatabaseConfig, get_database_config
from .env import optional_env_var, require_env_var, require_env_vars, split_list
from .errors import ConfigurationError, MissingConfigurationError
from .kintone import KintoneConfig, get_kintone_config
from .logging import configure_logging

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "KintoneConfig",
    "MissingConfigurationError",
    "configure_logging",
    "get_database_config",
    "get_kintone_config",
    "optional_env_var",
    "require_env_var",
    "require_env_vars",
    "split_list",
]
