from scraper.frontier import build_frontier
from scraper.enrichment import enrich_titles
from scraper.models import ScrapeRequest, CrawlRequest, PageSnapshot, LinkResult
from scraper.js_engine import (
    SessionDriver,
    PlaywrightDriver,
    BrowserSession,
    RenderError,
    RenderTimeoutError,
    RenderExecutionError
)
from scraper.service import ScrapeService
