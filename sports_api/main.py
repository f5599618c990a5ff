"""Entry point: fetch one resource through the cache and print it."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Any

from rich.console import Console
from rich.json import JSON
from rich.logging import RichHandler
from rich.table import Table

from sports_api.api.sports import SPORTS
from sports_api.config import Settings, load_settings
from sports_api.errors import UnknownResourceKind, UnknownSportError
from sports_api.services.data_service import DataService

log = logging.getLogger(__name__)

console = Console()


def parse_params(pairs: list[str]) -> dict[str, str]:
    params: dict[str, str] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise ValueError(f"Expected name=value, got {pair!r}")
        params[name] = value
    return params


def _is_flat_records(data: Any) -> bool:
    return (
        isinstance(data, list)
        and bool(data)
        and all(isinstance(row, dict) for row in data)
        and all(not isinstance(v, (dict, list)) for row in data for v in row.values())
    )


def render(data: Any, title: str) -> None:
    if data is None:
        console.print("[bold red]No data available.[/bold red]")
        return
    if not _is_flat_records(data):
        console.print(JSON.from_data(data))
        return
    columns = list(dict.fromkeys(k for row in data for k in row))
    table = Table(title=title)
    for col in columns:
        table.add_column(col)
    for row in data:
        table.add_row(*("" if row.get(c) is None else str(row.get(c)) for c in columns))
    console.print(table)


async def run(settings: Settings, args: argparse.Namespace) -> int:
    sport = args.sport or settings.default_sport
    try:
        service = DataService(settings, sport)
    except UnknownSportError as exc:
        console.print(f"[bold red]Unknown sport {exc}[/bold red]")
        return 2
    if args.ttl is not None:
        service.store.set_ttl(args.ttl)
    try:
        params = parse_params(args.params)
        data = await service.fetch(args.kind, params, force=args.refresh)
    except (UnknownResourceKind, ValueError) as exc:
        console.print(f"[bold red]{exc}[/bold red]")
        return 2
    finally:
        await service.close()
    render(data, f"{service.sport.title} {args.kind}")
    return 0 if data is not None else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sports-api",
        description="Query api-sports.io through a local response cache.",
    )
    parser.add_argument(
        "-s", "--sport", choices=sorted(SPORTS),
        help="sport to query (default: default_sport from settings)",
    )
    parser.add_argument("kind", help="resource kind, e.g. leagues, teams, games")
    parser.add_argument("params", nargs="*", help="query parameters as name=value")
    parser.add_argument("--refresh", action="store_true", help="bypass the cache")
    parser.add_argument("--ttl", type=int, help="cache TTL in milliseconds")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True))],
    )

    settings = load_settings()
    if not settings.api_key:
        console.print(
            "[bold red]No API key configured.[/bold red]\n"
            "Add your key to .env: API_SPORTS_KEY=your_key_here"
        )
        sys.exit(1)

    sys.exit(asyncio.run(run(settings, args)))


if __name__ == "__main__":
    main()
