import argparse
import asyncio
import json
import logging

from planetlib import config
from planetlib.client import CollectionClient
from planetlib.store import PlanetStore

logger = logging.getLogger(__name__)


def format_population(population):
    if isinstance(population, int):
        return f"{population:,}"
    return str(population)


def render_table(planets):
    """Plain-text rendering of the filtered view, one planet per line."""
    lines = []
    header = f"{'Planet':<20} {'Population':>16} {'Diameter':>10} {'Climate':<12} {'Films':>5}  Residents"
    lines.append(header)
    lines.append("-" * len(header))
    for planet in planets:
        diameter = "?" if planet.diameter is None else str(planet.diameter)
        lines.append(
            f"{planet.name:<20} {format_population(planet.population):>16} {diameter:>10} "
            f"{planet.primary_climate:<12} {planet.film_count:>5}  {', '.join(planet.residents)}"
        )
    return "\n".join(lines)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Crawl the planet catalog and print a filtered view.")
    parser.add_argument(
        "--base-url",
        type=str,
        default=config.BASE_URL,
        help="URL of the first catalog page.",
    )
    parser.add_argument(
        "--search",
        type=str,
        default="",
        help="Case-insensitive match against planet names and resident names.",
    )
    parser.add_argument(
        "--terrain",
        type=str,
        default="",
        help="Only keep planets whose terrain contains this text.",
    )
    parser.add_argument(
        "--list-terrains",
        action="store_true",
        help="Print the unique terrain labels instead of planets.",
    )
    parser.add_argument("--json", action="store_true", help="Emit JSON instead of a text table.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


async def run(args, client=None):
    store = PlanetStore(client=client or CollectionClient(), base_url=args.base_url)
    try:
        await store.refresh()
    finally:
        store.client.close()
    if store.error:
        logger.error("[!] Unable to load planets: %s", store.error)
        return 1
    store.set_search_term(args.search)
    store.set_terrain_filter(args.terrain)

    if args.list_terrains:
        terrains = store.unique_terrains
        print(json.dumps(terrains, indent=2) if args.json else "\n".join(terrains))
        return 0

    planets = store.filtered_planets
    if args.json:
        print(json.dumps([planet.to_dict() for planet in planets], indent=2, ensure_ascii=False))
    else:
        print(render_table(planets))
        logger.info("[+] Showing %s of %s planets.", len(planets), len(store.planets))
    return 0


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=config.LOG_FORMAT,
        datefmt=config.LOG_DATE_FORMAT,
    )
    return asyncio.run(run(args))


if __name__ == "__main__":
    raise SystemExit(main())
