import asyncio
import logging

import requests

from . import config
from .models import Page
from .payloads import PayloadValidationError, parse_json_body, validate_page

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Non-success response, transport failure or unusable page body."""

    def __init__(self, message, url=None, status_code=None):
        super().__init__(message)
        self.message = message
        self.url = url
        self.status_code = status_code

    def __str__(self):
        return self.message


class CollectionClient:
    """Single-request client for the remote catalog.

    Blocking ``requests`` calls run in the default executor so callers can
    fan out on one event loop; a semaphore caps how many are in flight.
    """

    def __init__(
        self,
        session=None,
        headers=config.HEADERS,
        timeout=config.API_TIMEOUT,
        max_in_flight=config.MAX_IN_FLIGHT,
    ):
        self.session = session if session is not None else requests.Session()
        self.session.headers.update(headers)
        self.timeout = timeout
        self._semaphore = asyncio.Semaphore(max_in_flight)
        self.stats = {
            "requests": 0,
            "network_errors": 0,
            "http_errors": 0,
            "http_status_counts": {200: 0, 404: 0, 500: 0, "other": 0},
        }

    def _record_status(self, status_code):
        if status_code in self.stats["http_status_counts"]:
            self.stats["http_status_counts"][status_code] += 1
        else:
            self.stats["http_status_counts"]["other"] += 1

    async def fetch_json(self, url):
        """GET ``url`` and return the decoded JSON body.

        Raises FetchError on transport failure or a non-2xx status and
        PayloadValidationError when the body is not JSON.
        """
        async with self._semaphore:
            self.stats["requests"] += 1
            try:
                response = await asyncio.to_thread(self.session.get, url, timeout=self.timeout)
            except requests.RequestException as exc:
                self.stats["network_errors"] += 1
                raise FetchError(f"Request failed: {exc}", url=url)
        status = response.status_code
        self._record_status(status)
        if not 200 <= status < 300:
            self.stats["http_errors"] += 1
            reason = getattr(response, "reason", None) or ""
            raise FetchError(f"HTTP {status} {reason}".strip(), url=url, status_code=status)
        return parse_json_body(response.text)

    async def fetch_page(self, url):
        """Fetch one catalog page and return it as a Page."""
        try:
            payload = validate_page(await self.fetch_json(url))
        except PayloadValidationError as exc:
            raise FetchError(f"Malformed page at {url}: {exc}", url=url)
        return Page.from_payload(payload)

    def close(self):
        self.session.close()
