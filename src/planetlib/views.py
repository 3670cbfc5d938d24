from . import config


def population_sort_key(planet):
    """Key ranking "unknown" population below every known value, zero included."""
    if planet.population == config.UNKNOWN_POPULATION or not isinstance(planet.population, int):
        return (0, 0)
    return (1, planet.population)


def sort_planets(planets):
    """Return planets ordered by population descending (stable)."""
    return sorted(planets, key=population_sort_key, reverse=True)


def unique_terrains(planets):
    """Sorted set of every terrain label across the collection."""
    terrains = set()
    for planet in planets:
        terrains.update(planet.terrains)
    return sorted(terrains)


def _matches_terrain(planet, terrain_filter):
    if not terrain_filter:
        return True
    return terrain_filter.lower() in planet.terrain.lower()


def _matches_search(planet, search_term):
    if not search_term:
        return True
    needle = search_term.lower()
    if needle in planet.name.lower():
        return True
    return any(needle in resident.lower() for resident in planet.residents)


def filter_planets(planets, search_term="", terrain_filter=""):
    return [
        planet
        for planet in planets
        if _matches_terrain(planet, terrain_filter) and _matches_search(planet, search_term)
    ]
