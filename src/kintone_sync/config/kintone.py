"""Kintone REST API configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_var
from .errors import ConfigurationError

KINTONE_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class KintoneConfig:
    """Holds the Kintone domain and HTTP client settings shared by all apps."""

    domain: str
    timeout_seconds: float = KINTONE_TIMEOUT_SECONDS

    @property
    def base_url(self) -> str:
        domain = self.domain.rstrip("/")
        if domain.startswith(("http://", "https://")):
            return domain
        return f"https://{domain}"


def get_kintone_config() -> KintoneConfig:
    domain = require_env_var("KINTONE_DOMAIN")
    raw_timeout = optional_env_var("KINTONE_TIMEOUT_SECONDS")
    if raw_timeout is None:
        return KintoneConfig(domain=domain)
    try:
        timeout = float(raw_timeout)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid KINTONE_TIMEOUT_SECONDS: {raw_timeout}") from exc
    if timeout <= 0:
        raise ConfigurationError("KINTONE_TIMEOUT_SECONDS must be positive")
    return KintoneConfig(domain=domain, timeout_seconds=timeout)
