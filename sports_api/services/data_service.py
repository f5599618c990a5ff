"""Cache-first fetches: consult the store, else call the API and populate it."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from sports_api.api.client import ApiSportsClient
from sports_api.api.sports import SportSpec, create_store, get_sport
from sports_api.config import Settings
from sports_api.errors import ApiError
from sports_api.services.storage import FileStorage, StorageAdapter
from sports_api.services.store import CacheStore

log = logging.getLogger(__name__)


class DataService:
    """Orchestrates API fetches and caching for one sport."""

    def __init__(
        self,
        settings: Settings,
        sport: str | SportSpec,
        client: ApiSportsClient | None = None,
        store: CacheStore | None = None,
        storage: StorageAdapter | None = None,
    ) -> None:
        self.settings = settings
        self.sport = get_sport(sport) if isinstance(sport, str) else sport
        self.client = client or ApiSportsClient(
            self.sport,
            settings.api_key,
            use_rapid_api=settings.use_rapid_api,
            rapidapi_host=settings.rapidapi_host,
            timeout=settings.request_timeout,
        )
        if store is None:
            if storage is None and settings.persist_cache:
                storage = FileStorage(settings.cache_dir)
            store = create_store(self.sport, storage, ttl=settings.cache_ttl)
        self.store = store

    async def close(self) -> None:
        await self.client.close()
        await self.store.flush()

    def cache_key(self, kind: str, params: Mapping[str, Any] | None = None) -> str | None:
        """Slot for (kind, params); None for single-value kinds."""
        if not self.store.is_keyed(kind):
            return None
        return self.store.generate_key(kind, params)

    async def fetch(
        self,
        kind: str,
        params: Mapping[str, Any] | None = None,
        *,
        force: bool = False,
    ) -> Any | None:
        """Return the cached payload, fetching and caching it on a miss.

        A failed fetch falls back to whatever valid entry is still cached,
        or None when there is none. The cache is never cleared by a failure.
        """
        key = self.cache_key(kind, params)
        if not force:
            cached = self.store.get(kind, key)
            if cached is not None:
                log.debug("Cache hit %s/%s", self.sport.name, key or kind)
                return cached

        try:
            envelope = await self.client.fetch(kind, params)
        except (httpx.HTTPError, ApiError):
            log.exception("Failed to fetch %s for %s", kind, self.sport.name)
            return self.store.get(kind, key)

        self.store.set(kind, envelope.response, key)
        return envelope.response

    def clear_cache(self) -> None:
        self.store.clear()
