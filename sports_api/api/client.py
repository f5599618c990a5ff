"""Async httpx wrapper with api-sports auth and envelope unwrapping."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import ValidationError

from sports_api.api.models import ApiResponse
from sports_api.api.sports import SportSpec, get_sport
from sports_api.errors import ApiError

log = logging.getLogger(__name__)

DEFAULT_HEADERS = {"Content-Type": "application/json"}


def build_query_params(params: Mapping[str, Any] | None) -> dict[str, str]:
    """Drop None values and render the rest the way the API expects."""
    query: dict[str, str] = {}
    for name, value in (params or {}).items():
        if value is None:
            continue
        if isinstance(value, bool):
            query[name] = "true" if value else "false"
        elif isinstance(value, (set, frozenset)):
            query[name] = ",".join(sorted(str(v) for v in value))
        elif isinstance(value, (list, tuple)):
            query[name] = ",".join(str(v) for v in value)
        else:
            query[name] = str(value)
    return query


class ApiSportsClient:
    """Async HTTP client for one api-sports.io API."""

    def __init__(
        self,
        sport: str | SportSpec,
        api_key: str,
        *,
        use_rapid_api: bool = False,
        rapidapi_host: str | None = None,
        base_url: str | None = None,
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.sport = get_sport(sport) if isinstance(sport, str) else sport
        if use_rapid_api:
            headers = {
                **DEFAULT_HEADERS,
                "x-rapidapi-host": rapidapi_host or self.sport.rapidapi_host,
                "x-rapidapi-key": api_key,
            }
        else:
            headers = {**DEFAULT_HEADERS, "x-apisports-key": api_key}
        kwargs: dict[str, Any] = {
            "base_url": base_url or self.sport.base_url,
            "headers": headers,
            "timeout": timeout,
        }
        if transport is not None:
            kwargs["transport"] = transport
        self._client = httpx.AsyncClient(**kwargs)

    async def close(self) -> None:
        await self._client.aclose()

    async def request(self, path: str, params: Mapping[str, Any] | None = None) -> ApiResponse:
        """GET a path and return the validated envelope."""
        response = await self._client.get(path, params=build_query_params(params))
        response.raise_for_status()
        try:
            body = response.json() if response.content else None
        except ValueError as exc:
            raise ApiError(f"Malformed API-{self.sport.title} response: {exc}") from exc
        if body is None:
            raise ApiError(f"No data received from API-{self.sport.title}")
        try:
            envelope = ApiResponse.model_validate(body)
        except ValidationError as exc:
            raise ApiError(f"Malformed API-{self.sport.title} response: {exc}") from exc

        messages = envelope.error_messages()
        if messages:
            raise ApiError(f"API-{self.sport.title} error: {', '.join(messages)}")
        log.debug("GET %s -> %d results", path, envelope.results)
        return envelope

    async def fetch(self, kind: str, params: Mapping[str, Any] | None = None) -> ApiResponse:
        """Fetch a resource kind by name, e.g. fetch("teams", {"league": 1})."""
        return await self.request(self.sport.resource(kind).path, params)
