"""Errors raised while reading the sync configuration."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """An entity, Kintone or database setting is present but unusable."""


class MissingConfigurationError(ConfigurationError):
    """``APPS``, an entity's ``<NAME>_*`` keys or a connection key is unset or blank.

    The message names every missing key so one run reports them all.
    """
