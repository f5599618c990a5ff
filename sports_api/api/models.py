"""Pydantic models for the api-sports response envelope."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class Paging(BaseModel):
    current: int = 1
    total: int = 1


class ApiResponse(BaseModel):
    """Uniform wrapper every endpoint returns; only `response` gets cached."""

    get: str = ""
    parameters: dict[str, Any] | list[Any] = Field(default_factory=dict)
    errors: list[str] | dict[str, str] = Field(default_factory=list)
    results: int = 0
    paging: Paging | None = None
    response: Any = Field(default_factory=list)

    def error_messages(self) -> list[str]:
        if isinstance(self.errors, dict):
            return [str(v) for v in self.errors.values()]
        return [str(e) for e in self.errors]
