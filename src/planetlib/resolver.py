import asyncio
import logging

from . import config
from .payloads import validate_resident

logger = logging.getLogger(__name__)


class ResolutionError(Exception):
    """A single resident reference could not be turned into a display name."""

    def __init__(self, url, reason):
        super().__init__(f"Unable to resolve {url}: {reason}")
        self.url = url
        self.reason = reason


class ResidentResolver:
    """Resident URL -> display name resolution for one refresh.

    Lookups of the same URL share one in-flight task. Failures never
    propagate; they resolve to the unknown-resident placeholder.
    """

    def __init__(self, client):
        self.client = client
        self._inflight = {}
        self.failed_ids = set()
        self.stats = {
            "requests": 0,
            "resolved": 0,
            "failed": 0,
            "shared": 0,
        }

    async def resolve(self, urls):
        """Resolve every URL concurrently; the result keeps the input order."""
        if not urls:
            return [config.NO_RESIDENTS_PLACEHOLDER]
        tasks = [self._task_for(url) for url in urls]
        return list(await asyncio.gather(*tasks))

    def _task_for(self, url):
        task = self._inflight.get(url)
        if task is None:
            task = asyncio.ensure_future(self._resolve_one(url))
            self._inflight[url] = task
        else:
            self.stats["shared"] += 1
        return task

    async def _resolve_one(self, url):
        self.stats["requests"] += 1
        try:
            name = await self._fetch_name(url)
        except ResolutionError as exc:
            self.stats["failed"] += 1
            if url not in self.failed_ids:
                logger.debug("[!] %s", exc)
                self.failed_ids.add(url)
            return config.UNKNOWN_RESIDENT_PLACEHOLDER
        self.stats["resolved"] += 1
        return name

    async def _fetch_name(self, url):
        try:
            payload = await self.client.fetch_json(url)
            return validate_resident(payload)
        except Exception as exc:
            raise ResolutionError(url, exc) from exc
