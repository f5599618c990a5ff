"""Per-sport response cache with one table per resource kind.

Single-value kinds (countries, timezones, seasons) hold one entry. Keyed
kinds hold a table of entries addressed by cache key. Validity is worked out
at read time from the entry timestamp and the current TTL; nothing is
evicted in the background.

When a storage adapter is given, the whole state is written back after
every mutation as a JSON blob:

    {"state": {"countries": {...} | null,
               "teams": [["teams:league=1", {...}], ...],
               "cache_ttl": 300000},
     "version": 0}

Keyed tables are stored as lists of [key, entry] pairs.
"""

from __future__ import annotations

import asyncio
import copy
import inspect
import json
import logging
from collections.abc import Awaitable, Coroutine, Iterable, Mapping
from typing import Any

from sports_api.errors import UnknownResourceKind
from sports_api.services.cache import (
    DEFAULT_CACHE_TTL,
    CacheEntry,
    create_cache_entry,
    generate_cache_key,
    is_cache_valid,
    remaining_ttl,
)
from sports_api.services.storage import StorageAdapter

log = logging.getLogger(__name__)

BLOB_VERSION = 0


class CacheStore:
    """Get/set access to cached API payloads, keyed by resource kind."""

    def __init__(
        self,
        name: str,
        *,
        single_kinds: Iterable[str] = (),
        keyed_kinds: Iterable[str] = (),
        storage: StorageAdapter | None = None,
        ttl: int = DEFAULT_CACHE_TTL,
    ) -> None:
        self.name = name
        self.single_kinds = tuple(single_kinds)
        self.keyed_kinds = tuple(keyed_kinds)
        overlap = set(self.single_kinds) & set(self.keyed_kinds)
        if overlap:
            raise ValueError(f"Kinds cannot be both single and keyed: {sorted(overlap)}")
        self._ttl = ttl
        self._singles: dict[str, CacheEntry | None] = {k: None for k in self.single_kinds}
        self._tables: dict[str, dict[str, CacheEntry]] = {k: {} for k in self.keyed_kinds}
        self._storage = storage
        self._pending: set[asyncio.Task] = set()
        if storage is not None:
            self._hydrate()

    @property
    def kinds(self) -> tuple[str, ...]:
        return self.single_kinds + self.keyed_kinds

    @property
    def cache_ttl(self) -> int:
        return self._ttl

    def is_keyed(self, kind: str) -> bool:
        if kind in self._tables:
            return True
        if kind in self._singles:
            return False
        raise UnknownResourceKind(kind)

    def _check(self, kind: str, key: str | None) -> None:
        if self.is_keyed(kind):
            if key is None:
                raise ValueError(f"{kind!r} is keyed; a cache key is required")
        elif key is not None:
            raise ValueError(f"{kind!r} holds a single value and takes no cache key")

    # ── Reads ──

    def entry(self, kind: str, key: str | None = None) -> CacheEntry | None:
        """Raw entry for (kind, key), whether or not it has expired."""
        self._check(kind, key)
        if key is None:
            return self._singles[kind]
        return self._tables[kind].get(key)

    def table(self, kind: str) -> dict[str, CacheEntry]:
        if not self.is_keyed(kind):
            raise ValueError(f"{kind!r} holds a single value, not a table")
        return dict(self._tables[kind])

    def get(self, kind: str, key: str | None = None, ttl: int | None = None) -> Any | None:
        """Copy of the cached payload, or None when missing or older than the TTL.

        Callers may mutate the result freely; the stored entry is unaffected.
        """
        cached = self.entry(kind, key)
        if cached is None or not self.is_valid(cached.timestamp, ttl):
            return None
        return copy.deepcopy(cached.data)

    def is_valid(self, timestamp: int, ttl: int | None = None) -> bool:
        return is_cache_valid(timestamp, self._ttl if ttl is None else ttl)

    def remaining_ttl(self, kind: str, key: str | None = None) -> int:
        cached = self.entry(kind, key)
        if cached is None:
            return 0
        return remaining_ttl(cached.timestamp, self._ttl)

    def generate_key(self, kind: str, params: Mapping[str, Any] | None = None) -> str:
        self.is_keyed(kind)
        return generate_cache_key(kind, params)

    # ── Writes ──

    def set(self, kind: str, data: Any, key: str | None = None) -> None:
        """Insert or replace the entry for (kind, key) with a fresh timestamp."""
        self._check(kind, key)
        data = copy.deepcopy(data)
        if key is None:
            self._singles[kind] = create_cache_entry(kind, data)
        else:
            self._tables[kind][key] = create_cache_entry(key, data)
        self._persist()

    def set_ttl(self, ttl: int) -> None:
        # Entries keep their timestamps, so a longer TTL revives stale ones.
        self._ttl = ttl
        self._persist()

    def clear(self) -> None:
        """Empty every table. The TTL is left as is."""
        self._singles = {k: None for k in self.single_kinds}
        self._tables = {k: {} for k in self.keyed_kinds}
        self._persist()

    # ── Persistence ──

    def dumps(self) -> str:
        state: dict[str, Any] = {}
        for kind, cached in self._singles.items():
            state[kind] = cached.model_dump(mode="json") if cached is not None else None
        for kind, entries in self._tables.items():
            state[kind] = [[key, e.model_dump(mode="json")] for key, e in entries.items()]
        state["cache_ttl"] = self._ttl
        return json.dumps({"state": state, "version": BLOB_VERSION})

    def _decode(self, raw: str) -> tuple[dict, dict, int]:
        state = json.loads(raw)["state"]
        if not isinstance(state, dict):
            raise TypeError("state is not an object")

        singles: dict[str, CacheEntry | None] = {}
        for kind in self.single_kinds:
            value = state.get(kind)
            singles[kind] = None if value is None else CacheEntry.model_validate(value)

        tables: dict[str, dict[str, CacheEntry]] = {}
        for kind in self.keyed_kinds:
            pairs = state.get(kind) or []
            if not isinstance(pairs, list):
                raise TypeError(f"{kind} is not a list of pairs")
            tables[kind] = {str(key): CacheEntry.model_validate(value) for key, value in pairs}

        ttl = state.get("cache_ttl", self._ttl)
        if not isinstance(ttl, int) or isinstance(ttl, bool) or ttl <= 0:
            ttl = self._ttl
        return singles, tables, ttl

    def _load(self, raw: str | None) -> None:
        if not raw:
            return
        try:
            singles, tables, ttl = self._decode(raw)
        except (ValueError, TypeError, KeyError, AttributeError) as exc:
            log.warning("Ignoring unreadable cache blob %r: %s", self.name, exc)
            return
        self._singles, self._tables, self._ttl = singles, tables, ttl
        log.debug(
            "Hydrated %r: %d keyed entries",
            self.name, sum(len(t) for t in tables.values()),
        )

    def _hydrate(self) -> None:
        try:
            raw = self._storage.get_item(self.name)
        except Exception:
            log.warning("Failed to read cache %r, starting empty", self.name, exc_info=True)
            return
        if inspect.isawaitable(raw):
            self._dispatch(self._load_when_ready(raw))
        else:
            self._load(raw)

    async def _load_when_ready(self, pending: Awaitable[str | None]) -> None:
        try:
            raw = await pending
        except Exception:
            log.warning("Failed to read cache %r, starting empty", self.name, exc_info=True)
            return
        self._load(raw)

    async def rehydrate(self) -> None:
        """Reload state from storage, awaiting async adapters."""
        if self._storage is None:
            return
        try:
            raw = self._storage.get_item(self.name)
            if inspect.isawaitable(raw):
                raw = await raw
        except Exception:
            log.warning("Failed to read cache %r", self.name, exc_info=True)
            return
        self._load(raw)

    def _persist(self) -> None:
        if self._storage is None:
            return
        try:
            result = self._storage.set_item(self.name, self.dumps())
        except Exception:
            log.warning("Failed to persist cache %r", self.name, exc_info=True)
            return
        if inspect.isawaitable(result):
            self._dispatch(self._finish_write(result))

    async def _finish_write(self, pending: Awaitable[None]) -> None:
        try:
            await pending
        except Exception:
            log.warning("Failed to persist cache %r", self.name, exc_info=True)

    def remove_persisted(self) -> None:
        """Drop the persisted blob. In-memory tables are untouched."""
        if self._storage is None:
            return
        try:
            result = self._storage.remove_item(self.name)
        except Exception:
            log.warning("Failed to remove cache %r", self.name, exc_info=True)
            return
        if inspect.isawaitable(result):
            self._dispatch(self._finish_write(result))

    def _dispatch(self, coro: Coroutine[Any, Any, None]) -> None:
        """Run adapter I/O without making the caller wait on it."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(coro)
            return
        task = loop.create_task(coro)
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def flush(self) -> None:
        """Wait for any in-flight storage reads and writes."""
        while self._pending:
            await asyncio.gather(*list(self._pending))
