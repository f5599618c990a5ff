"""Registry of supported APIs: hosts, cache names and resource kinds."""

from __future__ import annotations

from dataclasses import dataclass, field

from sports_api.errors import UnknownResourceKind, UnknownSportError
from sports_api.services.cache import DEFAULT_CACHE_TTL
from sports_api.services.storage import StorageAdapter
from sports_api.services.store import CacheStore


@dataclass(frozen=True)
class ResourceSpec:
    path: str
    keyed: bool = True


@dataclass(frozen=True)
class SportSpec:
    name: str
    title: str
    base_url: str
    rapidapi_host: str
    cache_name: str
    resources: dict[str, ResourceSpec] = field(default_factory=dict)

    def resource(self, kind: str) -> ResourceSpec:
        try:
            return self.resources[kind]
        except KeyError:
            raise UnknownResourceKind(f"{self.name} has no resource {kind!r}") from None

    @property
    def single_kinds(self) -> tuple[str, ...]:
        return tuple(k for k, r in self.resources.items() if not r.keyed)

    @property
    def keyed_kinds(self) -> tuple[str, ...]:
        return tuple(k for k, r in self.resources.items() if r.keyed)


def _general(seasons_path: str = "/seasons", countries: bool = True) -> dict[str, ResourceSpec]:
    res = {"timezones": ResourceSpec("/timezone", keyed=False)}
    if countries:
        res["countries"] = ResourceSpec("/countries", keyed=False)
    res["seasons"] = ResourceSpec(seasons_path, keyed=False)
    return res


def _api_sports(name: str, title: str, version: str = "v1", **resources: ResourceSpec) -> SportSpec:
    host = name.replace("_", "-")
    return SportSpec(
        name=name,
        title=title,
        base_url=f"https://{version}.{host}.api-sports.io",
        rapidapi_host=f"api-{host}.p.rapidapi.com",
        cache_name=f"api-{name}-cache",
        resources={**_general(), **resources},
    )


BASEBALL = _api_sports(
    "baseball", "Baseball",
    leagues=ResourceSpec("/leagues"),
    teams=ResourceSpec("/teams"),
    team_statistics=ResourceSpec("/teams/statistics"),
    games=ResourceSpec("/games"),
    standings=ResourceSpec("/standings"),
)

BASKETBALL = _api_sports(
    "basketball", "Basketball",
    leagues=ResourceSpec("/leagues"),
    teams=ResourceSpec("/teams"),
    team_statistics=ResourceSpec("/statistics"),
    games=ResourceSpec("/games"),
    standings=ResourceSpec("/standings"),
)

HANDBALL = _api_sports(
    "handball", "Handball",
    leagues=ResourceSpec("/leagues"),
    teams=ResourceSpec("/teams"),
    standings=ResourceSpec("/standings"),
    games=ResourceSpec("/games"),
    h2h=ResourceSpec("/games/h2h"),
    odds=ResourceSpec("/odds"),
)

HOCKEY = _api_sports(
    "hockey", "Hockey",
    leagues=ResourceSpec("/leagues"),
    teams=ResourceSpec("/teams"),
    team_statistics=ResourceSpec("/teams/statistics"),
    games=ResourceSpec("/games"),
    game_statistics=ResourceSpec("/games/statistics"),
    standings=ResourceSpec("/standings"),
)

RUGBY = _api_sports(
    "rugby", "Rugby",
    leagues=ResourceSpec("/leagues"),
    teams=ResourceSpec("/teams"),
    team_statistics=ResourceSpec("/teams/statistics"),
    games=ResourceSpec("/games"),
    standings=ResourceSpec("/standings"),
)

VOLLEYBALL = _api_sports(
    "volleyball", "Volleyball",
    leagues=ResourceSpec("/leagues"),
    teams=ResourceSpec("/teams"),
    standings=ResourceSpec("/standings"),
    games=ResourceSpec("/games"),
    h2h=ResourceSpec("/games/h2h"),
)

NFL = SportSpec(
    name="nfl",
    title="NFL",
    base_url="https://v1.american-football.api-sports.io",
    rapidapi_host="api-american-football.p.rapidapi.com",
    cache_name="api-nfl-cache",
    resources={
        **_general(),
        "leagues": ResourceSpec("/leagues"),
        "teams": ResourceSpec("/teams"),
        "team_statistics": ResourceSpec("/teams/statistics"),
        "games": ResourceSpec("/games"),
        "standings": ResourceSpec("/standings"),
    },
)

FORMULA1 = SportSpec(
    name="formula1",
    title="Formula-1",
    base_url="https://v1.formula-1.api-sports.io",
    rapidapi_host="api-formula-1.p.rapidapi.com",
    cache_name="api-f1-cache",
    resources={
        **_general(countries=False),
        "circuits": ResourceSpec("/circuits"),
        "competitions": ResourceSpec("/competitions"),
        "teams": ResourceSpec("/teams"),
        "drivers": ResourceSpec("/drivers"),
        "races": ResourceSpec("/races"),
        "driver_rankings": ResourceSpec("/rankings/drivers"),
        "team_rankings": ResourceSpec("/rankings/teams"),
        "pit_stops": ResourceSpec("/pitstops"),
    },
)

MMA = _api_sports(
    "mma", "MMA",
    categories=ResourceSpec("/categories"),
    fighters=ResourceSpec("/fighters"),
    fights=ResourceSpec("/fights"),
)

FOOTBALL = SportSpec(
    name="football",
    title="Football",
    base_url="https://v3.football.api-sports.io",
    rapidapi_host="api-football-v1.p.rapidapi.com",
    cache_name="api-football-cache",
    resources={
        **_general(seasons_path="/leagues/seasons"),
        "leagues": ResourceSpec("/leagues"),
        "teams": ResourceSpec("/teams"),
        "team_statistics": ResourceSpec("/teams/statistics"),
        "venues": ResourceSpec("/venues"),
        "fixtures": ResourceSpec("/fixtures"),
        "fixture_statistics": ResourceSpec("/fixtures/statistics"),
        "fixture_events": ResourceSpec("/fixtures/events"),
        "fixture_lineups": ResourceSpec("/fixtures/lineups"),
        "fixture_players": ResourceSpec("/fixtures/players"),
        "standings": ResourceSpec("/standings"),
        "players": ResourceSpec("/players"),
        "squads": ResourceSpec("/players/squads"),
        "transfers": ResourceSpec("/transfers"),
        "coaches": ResourceSpec("/coachs"),
        "trophies": ResourceSpec("/trophies"),
        "sidelined": ResourceSpec("/sidelined"),
    },
)

SPORTS: dict[str, SportSpec] = {
    s.name: s
    for s in (
        BASEBALL, BASKETBALL, HANDBALL, HOCKEY, RUGBY,
        VOLLEYBALL, NFL, FORMULA1, MMA, FOOTBALL,
    )
}


def get_sport(name: str) -> SportSpec:
    try:
        return SPORTS[name]
    except KeyError:
        raise UnknownSportError(name) from None


def create_store(
    sport: str | SportSpec,
    storage: StorageAdapter | None = None,
    ttl: int = DEFAULT_CACHE_TTL,
) -> CacheStore:
    """Build the cache store for one sport, hydrated from storage if given."""
    spec = get_sport(sport) if isinstance(sport, str) else sport
    return CacheStore(
        spec.cache_name,
        single_kinds=spec.single_kinds,
        keyed_kinds=spec.keyed_kinds,
        storage=storage,
        ttl=ttl,
    )
