"""Storage adapters the cache store persists through."""

from __future__ import annotations

import logging
from collections.abc import Awaitable
from pathlib import Path
from typing import Protocol

log = logging.getLogger(__name__)


class StorageAdapter(Protocol):
    """Opaque durable string blob store. Any method may return an awaitable."""

    def get_item(self, name: str) -> str | None | Awaitable[str | None]: ...

    def set_item(self, name: str, value: str) -> None | Awaitable[None]: ...

    def remove_item(self, name: str) -> None | Awaitable[None]: ...


class MemoryStorage:
    """Dict-backed storage; survives store instances, not processes."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.items: dict[str, str] = dict(initial or {})

    def get_item(self, name: str) -> str | None:
        return self.items.get(name)

    def set_item(self, name: str, value: str) -> None:
        self.items[name] = value

    def remove_item(self, name: str) -> None:
        self.items.pop(name, None)


class FileStorage:
    """One JSON file per store name under a directory."""

    def __init__(self, directory: Path | str) -> None:
        self.directory = Path(directory)

    def _path(self, name: str) -> Path:
        return self.directory / f"{name}.json"

    def get_item(self, name: str) -> str | None:
        path = self._path(name)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, name: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(name)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(value, encoding="utf-8")
        tmp.replace(path)
        log.debug("Wrote %d bytes to %s", len(value), path)

    def remove_item(self, name: str) -> None:
        self._path(name).unlink(missing_ok=True)
