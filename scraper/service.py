"""
Scrape and crawl operations.
Each call owns exactly one driver session; the driver releases it on every exit path.
"""

from functools import partial

from scraper.core import ServiceConfig, logger
from scraper.enrichment import enrich_titles
from scraper.frontier import build_frontier
from scraper.js_engine import SessionDriver
from scraper.models import CrawlRequest, ScrapeRequest
from scraper.url_utils import same_site


class ScrapeService:
    """
    Orchestrates the session driver, frontier builder and title enrichment.
    Driver errors propagate to the caller; per-link enrichment errors do not.
    """

    def __init__(self, driver: SessionDriver, config: ServiceConfig):
        self._driver = driver
        self._config = config

    def scrape(self, request: ScrapeRequest) -> dict:
        logger.info(f"[SCRAPE] {request.url} (wait_ms={request.wait_ms})")
        with self._driver.session(proxy=request.proxy) as session:
            snapshot = session.render(request.url, request.wait_ms)

        return {
            "success": True,
            "url": request.url,
            "title": snapshot.title,
            "text": snapshot.text,
            "html": snapshot.html,
            "cookies": snapshot.cookies,
        }

    def crawl(self, request: CrawlRequest) -> dict:
        logger.info(f"[CRAWL] {request.url} (limit={request.limit}, same_site={request.same_site})")
        accept = partial(same_site, origin=request.url) if request.same_site else None

        with self._driver.session(proxy=request.proxy) as session:
            base, candidates = session.collect_links(request.url)
            frontier = build_frontier(candidates, base, request.limit, accept=accept)
            logger.info(f"[CRAWL] {len(candidates)} links found, {len(frontier)} queued for titles")
            results = enrich_titles(frontier, session.fetch_title)

        return {
            "success": True,
            "origin": request.url,
            "results": [r.to_dict() for r in results],
        }
