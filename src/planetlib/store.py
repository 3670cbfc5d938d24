import asyncio
import logging

from . import config
from .client import CollectionClient, FetchError
from .crawler import crawl
from .enrichment import enrich_planets
from .models import Planet
from .resolver import ResidentResolver
from .tracker import CompletionTracker
from .views import filter_planets, sort_planets, unique_terrains

logger = logging.getLogger(__name__)


def build_planets(records):
    """Turn crawled records into planets, keeping the first record per name."""
    planets = []
    seen_names = set()
    for record in records:
        name = record["name"]
        if name in seen_names:
            logger.warning("[!] Duplicate planet %r in crawl. Keeping the first copy.", name)
            continue
        seen_names.add(name)
        planets.append(Planet.from_record(record))
    return planets


class PlanetStore:
    """State shared with the renderer: collection, filters, loading and error.

    The collection is only ever replaced wholesale, after a refresh has
    crawled, enriched and sorted a complete new one.
    """

    def __init__(self, client=None, base_url=None):
        self.client = client if client is not None else CollectionClient()
        self.base_url = base_url or config.BASE_URL
        self.tracker = CompletionTracker()
        self.planets = []
        self.error = None
        self.search_term = ""
        self.terrain_filter = ""
        self.last_resolver = None
        self._refresh_task = None

    @property
    def is_loading(self):
        return self.tracker.is_loading

    @property
    def filtered_planets(self):
        return filter_planets(self.planets, self.search_term, self.terrain_filter)

    @property
    def unique_terrains(self):
        return unique_terrains(self.planets)

    def set_search_term(self, term):
        self.search_term = term or ""

    def set_terrain_filter(self, terrain):
        self.terrain_filter = terrain or ""

    async def refresh(self):
        """Recrawl the catalog; a call made while one is running joins it."""
        if self._refresh_task is not None and not self._refresh_task.done():
            logger.info("[*] Refresh already in flight; waiting for it instead of starting another.")
            return await asyncio.shield(self._refresh_task)
        self.tracker.begin()
        self._refresh_task = asyncio.ensure_future(self.tracker.track(self._refresh()))
        return await self._refresh_task

    async def _refresh(self):
        self.error = None
        self.search_term = ""
        self.terrain_filter = ""
        try:
            records = await crawl(self.client, self.base_url)
        except FetchError as exc:
            logger.error("[!] Crawl failed: %s", exc)
            self.error = str(exc)
            return self.planets
        planets = build_planets(records)
        self.last_resolver = ResidentResolver(self.client)
        await enrich_planets(planets, self.last_resolver)
        self.planets = sort_planets(planets)
        logger.info("[+] Catalog ready: %s planets.", len(self.planets))
        return self.planets
