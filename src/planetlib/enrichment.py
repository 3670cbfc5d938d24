import logging
import sys

from tqdm.asyncio import tqdm_asyncio

from .utils import format_edited, parse_diameter, parse_population

logger = logging.getLogger(__name__)


def normalize_planet(planet):
    """Normalize the scalar fields of a raw planet in place."""
    planet.population = parse_population(planet.population)
    planet.diameter = parse_diameter(planet.diameter)
    planet.edited = format_edited(planet.edited)
    return planet


async def enrich_planet(planet, resolver):
    normalize_planet(planet)
    planet.residents = await resolver.resolve(planet.residents)
    return planet


async def enrich_planets(planets, resolver):
    """Normalize every planet and resolve its residents.

    Returns only after every planet's resolution has finished (join-all);
    planets are mutated in place.
    """
    if not planets:
        return planets
    await tqdm_asyncio.gather(
        *(enrich_planet(planet, resolver) for planet in planets),
        desc="Resolving residents",
        unit="planet",
        disable=not sys.stderr.isatty(),
    )
    logger.info(
        "[+] Enriched %s planets (%s residents resolved, %s unresolved).",
        len(planets),
        resolver.stats["resolved"],
        resolver.stats["failed"],
    )
    return planets
