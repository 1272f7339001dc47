"""
Crawl frontier construction.
Turns the raw hyperlinks of one page into the ordered, deduplicated, bounded
list of absolute URLs visited next.
"""

from typing import Callable, Iterable, List, Optional

from scraper.core import logger
from scraper.url_utils import resolve_url


def build_frontier(
    candidates: Iterable[str],
    base: str,
    limit: int,
    accept: Optional[Callable[[str], bool]] = None,
) -> List[str]:
    """
    Resolve each candidate against base and keep first-seen order.

    - Malformed candidates are dropped silently.
    - Duplicates (by exact resolved string) are skipped.
    - At most `limit` URLs are returned; production stops once it is reached.
    - `accept`, when given, filters resolved URLs before they count toward the limit.
    """
    frontier: List[str] = []
    if limit <= 0:
        return frontier

    seen = set()
    dropped = 0
    for candidate in candidates:
        url = resolve_url(candidate, base)
        if url is None:
            dropped += 1
            continue
        if url in seen:
            continue
        if accept is not None and not accept(url):
            continue
        seen.add(url)
        frontier.append(url)
        if len(frontier) >= limit:
            break

    logger.debug(f"[FRONTIER] base={base} accepted={len(frontier)} dropped_malformed={dropped}")
    return frontier
