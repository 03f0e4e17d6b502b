"""Source database configuration helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import ArgumentError

from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError

MYSQL_DRIVERNAME: Final[str] = "mysql+pymysql"
_MYSQL_KEYS: Final[tuple[str, ...]] = (
    "MYSQL_SERVERNAME",
    "MYSQL_USERNAME",
    "MYSQL_PASSWORD",
    "MYSQL_DBNAME",
)


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str | URL

    def render(self) -> str:
        """Return the URI with any password masked, for log output."""

        try:
            url = self.uri if isinstance(self.uri, URL) else make_url(self.uri)
        except ArgumentError:
            return "<unparsable DATABASE_URI>"
        return url.render_as_string(hide_password=True)


def get_database_config() -> DatabaseConfig:
    env_uri = optional_env_var("DATABASE_URI")
    if env_uri:
        return DatabaseConfig(uri=env_uri)

    values = require_env_vars(_MYSQL_KEYS)
    port: int | None = None
    raw_port = optional_env_var("MYSQL_PORT")
    if raw_port is not None:
        try:
            port = int(raw_port)
        except ValueError as exc:
            raise ConfigurationError(f"Invalid MYSQL_PORT: {raw_port}") from exc

    url = URL.create(
        MYSQL_DRIVERNAME,
        username=values["MYSQL_USERNAME"],
        password=values["MYSQL_PASSWORD"],
        host=values["MYSQL_SERVERNAME"],
        port=port,
        database=values["MYSQL_DBNAME"],
        query={"charset": "utf8mb4"},
    )
    return DatabaseConfig(uri=url)
