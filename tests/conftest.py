from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.pool import StaticPool

from tests.support.remote import FakeRemoteService

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine

CUSTOMER_ROWS = (
    {"Id": 42, "LiveDate": "2024-02-29", "IsClec": "yes", "Name": "Acme"},
    {"Id": 43, "LiveDate": "2024-02-30", "IsClec": " NO ", "Name": "Globex"},
)

ENTITY_ENV_KEYS = (
    "APPS",
    "KINTONE_DOMAIN",
    "KINTONE_TIMEOUT_SECONDS",
    "DATABASE_URI",
    "MYSQL_SERVERNAME",
    "MYSQL_USERNAME",
    "MYSQL_PASSWORD",
    "MYSQL_DBNAME",
    "MYSQL_PORT",
)


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    with engine.begin() as connection:
        connection.execute(
            text(
                "CREATE TABLE customers ("
                "Id INTEGER PRIMARY KEY, LiveDate TEXT, IsClec TEXT, Name TEXT)"
            )
        )
        connection.execute(text("CREATE TABLE vendors (Id INTEGER PRIMARY KEY, Name TEXT)"))
        connection.execute(
            text(
                "INSERT INTO customers (Id, LiveDate, IsClec, Name) "
                "VALUES (:Id, :LiveDate, :IsClec, :Name)"
            ),
            list(CUSTOMER_ROWS),
        )
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def remote() -> FakeRemoteService:
    return FakeRemoteService()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove sync configuration inherited from the developer's shell."""

    for key in ENTITY_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.fixture
def entity_env(clean_env: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    clean_env.setenv("APPS", "CUSTOMERS,VENDORS")
    clean_env.setenv("CUSTOMERS_MYSQL_TABLE", "customers")
    clean_env.setenv("CUSTOMERS_MYSQL_FIELDS", "Id,LiveDate,IsClec,Name")
    clean_env.setenv(
        "CUSTOMERS_MYSQL_QUERY", "SELECT Id, LiveDate, IsClec, Name FROM customers ORDER BY Id"
    )
    clean_env.setenv("CUSTOMERS_KINTONE_FIELDS", "Id,LiveDate_field,IsClec_field,Name_field")
    clean_env.setenv("CUSTOMERS_KINTONE_APP_ID", "101")
    clean_env.setenv("CUSTOMERS_KINTONE_API_TOKEN", "token-101")
    clean_env.setenv("VENDORS_MYSQL_TABLE", "vendors")
    clean_env.setenv("VENDORS_MYSQL_FIELDS", "Id, Name")
    clean_env.setenv("VENDORS_MYSQL_QUERY", "SELECT Id, Name FROM vendors")
    clean_env.setenv("VENDORS_KINTONE_FIELDS", "Id, vendor_name")
    clean_env.setenv("VENDORS_KINTONE_APP_ID", "202")
    clean_env.setenv("VENDORS_KINTONE_API_TOKEN", "token-202")
    clean_env.setenv("KINTONE_DOMAIN", "example.cybozu.com")
    return clean_env
