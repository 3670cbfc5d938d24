import logging
import sys

from tqdm import tqdm

from .client import FetchError

logger = logging.getLogger(__name__)


async def crawl(client, start_url):
    """Follow ``next`` links from ``start_url`` and return every record in page order.

    Pages are requested one at a time since each URL is only known once the
    previous page arrives. Any FetchError aborts the whole crawl.
    """
    records = []
    visited = set()
    next_url = start_url
    pages = 0
    progress = tqdm(desc="Crawling catalog", unit="planet", disable=not sys.stderr.isatty())
    try:
        while next_url:
            if next_url in visited:
                raise FetchError(f"Pagination loop detected at {next_url}", url=next_url)
            visited.add(next_url)
            page = await client.fetch_page(next_url)
            pages += 1
            records.extend(page.results)
            if page.count is not None and progress.total is None:
                progress.total = page.count
            progress.update(len(page.results))
            logger.debug("Page %s: %s records from %s", pages, len(page.results), next_url)
            next_url = page.next
    finally:
        progress.close()
    logger.info("[*] Crawl complete: %s records across %s pages.", len(records), pages)
    return records
