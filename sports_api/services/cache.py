"""Cache entries, TTL checks and cache-key derivation."""

from __future__ import annotations

import json
import time
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict

DEFAULT_CACHE_TTL = 5 * 60 * 1000  # ms


def now_ms() -> int:
    return int(time.time() * 1000)


class CacheEntry(BaseModel):
    """A payload and the epoch-ms time it was captured."""

    model_config = ConfigDict(frozen=True)

    data: Any
    timestamp: int
    key: str


def create_cache_entry(key: str, data: Any) -> CacheEntry:
    return CacheEntry(data=data, timestamp=now_ms(), key=key)


def is_cache_valid(timestamp: int, ttl: int = DEFAULT_CACHE_TTL) -> bool:
    return now_ms() - timestamp < ttl


def remaining_ttl(timestamp: int, ttl: int = DEFAULT_CACHE_TTL) -> int:
    """Milliseconds until expiry, 0 if already expired."""
    return max(0, ttl - (now_ms() - timestamp))


def _json_default(value: Any) -> Any:
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=_canonical)
    return str(value)


def _canonical(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (set, frozenset)):
        return ",".join(sorted(_canonical(v) for v in value))
    if isinstance(value, (list, tuple)):
        return ",".join(_canonical(v) for v in value)
    if isinstance(value, Mapping):
        return json.dumps(value, sort_keys=True, separators=(",", ":"), default=_json_default)
    return str(value)


def generate_cache_key(prefix: str, params: Mapping[str, Any] | None = None) -> str:
    """Build a deterministic key from a prefix and request params.

    Params are sorted by name and None values dropped, so insertion order
    never matters. With nothing left the bare prefix is returned:

        generate_cache_key("leagues")                       -> "leagues"
        generate_cache_key("games", {"season": 2024, "league": 1})
                                                            -> "games:league=1&season=2024"
    """
    if not params:
        return prefix
    pairs = "&".join(
        f"{name}={_canonical(params[name])}"
        for name in sorted(params)
        if params[name] is not None
    )
    return f"{prefix}:{pairs}" if pairs else prefix
