"""Tests for the command-line entry point."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from sports_api import main
from sports_api.api.models import ApiResponse
from sports_api.services.storage import MemoryStorage


def test_parse_params():
    assert main.parse_params(["league=1", "season=2024"]) == {"league": "1", "season": "2024"}
    assert main.parse_params(["search=a=b"]) == {"search": "a=b"}


@pytest.mark.parametrize("bad", ["league", "=1"])
def test_parse_params_rejects_malformed(bad):
    with pytest.raises(ValueError):
        main.parse_params([bad])


def test_parser_rejects_unknown_sport():
    with pytest.raises(SystemExit):
        main.build_parser().parse_args(["--sport", "cricket", "teams"])


def test_flat_records_detection():
    assert main._is_flat_records([{"id": 1, "name": "X"}])
    assert not main._is_flat_records([{"team": {"id": 1}}])
    assert not main._is_flat_records(["UTC"])
    assert not main._is_flat_records([])


async def test_run_fetches_and_renders(settings, monkeypatch, capsys):
    client = AsyncMock()
    client.fetch.return_value = ApiResponse(response=[{"id": 1, "name": "Yankees"}])

    real_service = main.DataService

    def fake_service(s, sport):
        return real_service(s, sport, client=client, storage=MemoryStorage())

    monkeypatch.setattr(main, "DataService", fake_service)
    args = main.build_parser().parse_args(["--sport", "baseball", "teams", "league=1", "--ttl", "1000"])

    code = await main.run(settings, args)

    assert code == 0
    client.fetch.assert_awaited_once_with("teams", {"league": "1"})
    assert "Yankees" in capsys.readouterr().out


async def test_run_unknown_kind(settings, monkeypatch):
    client = AsyncMock()
    real_service = main.DataService
    monkeypatch.setattr(main, "DataService", lambda s, sport: real_service(s, sport, client=client))
    args = main.build_parser().parse_args(["-s", "mma", "standings"])

    assert await main.run(settings, args) == 2
    client.fetch.assert_not_awaited()


async def test_run_uses_default_sport(settings, monkeypatch):
    client = AsyncMock()
    client.fetch.return_value = ApiResponse(response=["UTC"])
    seen = []
    real_service = main.DataService

    def fake_service(s, sport):
        seen.append(sport)
        return real_service(s, sport, client=client)

    monkeypatch.setattr(main, "DataService", fake_service)
    settings = settings.model_copy(update={"default_sport": "hockey"})
    args = main.build_parser().parse_args(["timezones"])

    assert args.sport is None
    assert await main.run(settings, args) == 0
    assert seen == ["hockey"]


async def test_run_unknown_default_sport(settings):
    settings = settings.model_copy(update={"default_sport": "cricket"})
    args = main.build_parser().parse_args(["teams"])
    assert await main.run(settings, args) == 2
