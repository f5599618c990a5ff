"""Tests for the sport registry."""

import pytest

from sports_api.api.sports import SPORTS, create_store, get_sport
from sports_api.errors import UnknownResourceKind, UnknownSportError


def test_all_sports_registered():
    assert set(SPORTS) == {
        "baseball", "basketball", "handball", "hockey", "rugby",
        "volleyball", "nfl", "formula1", "mma", "football",
    }


@pytest.mark.parametrize("name", sorted(SPORTS))
def test_every_sport_has_general_kinds(name):
    spec = get_sport(name)
    assert "timezones" in spec.single_kinds
    assert "seasons" in spec.single_kinds
    assert spec.keyed_kinds


def test_hosts():
    assert get_sport("baseball").base_url == "https://v1.baseball.api-sports.io"
    assert get_sport("baseball").rapidapi_host == "api-baseball.p.rapidapi.com"
    assert get_sport("nfl").base_url == "https://v1.american-football.api-sports.io"
    assert get_sport("football").rapidapi_host == "api-football-v1.p.rapidapi.com"


def test_formula1_has_no_countries():
    assert "countries" not in get_sport("formula1").resources


def test_unknown_sport():
    with pytest.raises(UnknownSportError):
        get_sport("cricket")


def test_unknown_resource():
    with pytest.raises(UnknownResourceKind):
        get_sport("mma").resource("standings")


def test_create_store_uses_sport_kinds():
    store = create_store("handball", ttl=1_000)
    assert store.name == "api-handball-cache"
    assert store.cache_ttl == 1_000
    assert set(store.keyed_kinds) == {"leagues", "teams", "standings", "games", "h2h", "odds"}
    assert set(store.single_kinds) == {"timezones", "countries", "seasons"}


def test_f1_cache_name():
    assert create_store("formula1").name == "api-f1-cache"
