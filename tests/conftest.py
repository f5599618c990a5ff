"""Shared test fixtures."""

from __future__ import annotations

import time

import pytest

from sports_api.config import Settings
from sports_api.services.storage import MemoryStorage


class FakeClock:
    """Stands in for time.time(); advance in whole milliseconds."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms / 1000


class AsyncMemoryStorage:
    """Storage adapter whose methods are coroutines."""

    def __init__(self) -> None:
        self.items: dict[str, str] = {}

    async def get_item(self, name: str) -> str | None:
        return self.items.get(name)

    async def set_item(self, name: str, value: str) -> None:
        self.items[name] = value

    async def remove_item(self, name: str) -> None:
        self.items.pop(name, None)


@pytest.fixture
def clock(monkeypatch) -> FakeClock:
    fake = FakeClock()
    monkeypatch.setattr(time, "time", fake)
    return fake


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def async_storage() -> AsyncMemoryStorage:
    return AsyncMemoryStorage()


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(api_key="test_key", persist_cache=False, cache_dir=tmp_path)


@pytest.fixture
def teams_payload() -> list[dict]:
    return [
        {"id": 1, "name": "Yankees", "logo": None, "national": False},
        {"id": 2, "name": "Red Sox", "logo": None, "national": False},
    ]


@pytest.fixture
def envelope():
    """Factory for raw api-sports response bodies."""

    def _make(response, *, get: str = "teams", errors=None, parameters=None) -> dict:
        return {
            "get": get,
            "parameters": parameters or {},
            "errors": errors if errors is not None else [],
            "results": len(response) if isinstance(response, list) else 1,
            "response": response,
        }

    return _make
