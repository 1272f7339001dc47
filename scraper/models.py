from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class ScrapeRequest:
    """
    Input for a single-page scrape.
    Constructed per inbound call and discarded once the response is produced.
    """
    url: str
    proxy: Optional[str] = None
    wait_ms: int = 1200


@dataclass(frozen=True)
class CrawlRequest:
    """
    Input for a shallow link crawl.
    `limit` bounds the frontier; `same_site` restricts it to the origin's registrable domain.
    """
    url: str
    proxy: Optional[str] = None
    limit: int = 20
    same_site: bool = False


@dataclass(frozen=True)
class PageSnapshot:
    """Rendered state of one page, as returned by the session driver."""
    url: str
    title: str
    text: str
    html: str
    cookies: List[Dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class LinkResult:
    """One enriched frontier entry. `title` is None when the lookup failed."""
    url: str
    title: Optional[str]

    def to_dict(self):
        return {"url": self.url, "title": self.title}
