"""
Per-link title enrichment for crawl results.
"""

from typing import Callable, Iterable, List, Optional

from scraper.core import logger
from scraper.models import LinkResult


def enrich_titles(urls: Iterable[str], lookup: Callable[[str], Optional[str]]) -> List[LinkResult]:
    """
    FLOW: Walks the frontier in order -> asks `lookup` for each URL's title ->
    records None for any URL whose lookup raises -> returns one LinkResult per URL, same order.
    A failing lookup never aborts the batch.
    """
    results = []
    for url in urls:
        try:
            title = lookup(url)
        except Exception as e:
            logger.warning(f"[ENRICH] Title lookup failed for {url}: {e}")
            title = None
        else:
            title = title or ""
        results.append(LinkResult(url=url, title=title))
    return results
