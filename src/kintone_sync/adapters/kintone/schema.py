"""Pydantic models describing the Kintone REST API payloads."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class KintoneBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class RecordsResponse(KintoneBaseModel):
    records: list[dict[str, Any]] = Field(default_factory=list)
    total_count: str | None = Field(default=None, alias="totalCount")


class ErrorResponse(KintoneBaseModel):
    message: str | None = None
    code: str | None = None
    id: str | None = None
    errors: dict[str, Any] | None = None
