# crawler.py — same-origin breadth-first page discovery
from __future__ import annotations

import concurrent.futures
import logging
import time
from typing import List, Optional
from urllib.parse import urldefrag, urljoin, urlparse

import requests

import fetcher, metadata, robots, sitemap
from errors import CrawlAborted, FetchError, FetchFailed
from models import (SITEMAP, CrawlResult, CrawlState, FetchOutcome,
                    PageMetadata, QueueEntry)
from urlsafety import check_url

logger = logging.getLogger(__name__)

# ─────────────────────────── tunables ────────────────────────────
DEFAULT_MAX_PAGES = 100
MIN_PAGES, MAX_PAGES = 10, 1000
DEFAULT_MAX_DEPTH = 3
MIN_DEPTH, MAX_DEPTH = 1, 10
CRAWL_WORKERS     = 4
BLOCKED_EXTENSIONS = (".pdf", ".zip", ".exe", ".jpg", ".png", ".gif")
BLOCKED_PATH_PARTS = ("/cdn-cgi/", "/static/", "/assets/")
# ──────────────────────────────────────────────────────────────────

def _clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, int(value)))

def is_crawlable(url: str, seed_host: str) -> bool:
    """Same hostname, not a binary download, not a static-asset path."""
    try:
        p = urlparse(url)
    except ValueError:
        return False
    if not p.hostname or p.hostname != seed_host:
        return False
    path = p.path.lower()
    if path.endswith(BLOCKED_EXTENSIONS):
        return False
    return not any(part in path for part in BLOCKED_PATH_PARTS)

def _resolve_links(base_url: str, hrefs: List[str]) -> List[str]:
    links = []
    for href in hrefs:
        try:
            links.append(urldefrag(urljoin(base_url, href.strip()))[0])
        except ValueError:
            continue
    return links

# ───────────────────────── BFS internals ──────────────────────────
def _seed_from_sitemap(state: CrawlState, session, max_pages: int) -> None:
    urls = sitemap.discover_sitemap_urls(
        state.seed_url, lambda u: is_crawlable(u, state.seed_host), session=session)
    if urls:
        state.discovery_method = SITEMAP
    for url in urls:
        if len(state.discovered) >= max_pages:
            break
        if url in state.discovered:
            continue
        state.discovered[url] = PageMetadata(url=url)
        state.seen.add(url)
        state.queue.append(QueueEntry(url, 0))

def _next_batch(state: CrawlState, max_depth: int, size: int) -> List[QueueEntry]:
    batch: List[QueueEntry] = []
    while state.queue and len(batch) < size:
        entry = state.queue.popleft()
        if entry.url in state.visited or entry.depth > max_depth:
            continue
        state.visited.add(entry.url)
        batch.append(entry)
    return batch

def _fetch_entry(entry: QueueEntry, session) -> FetchOutcome:
    try:
        return FetchOutcome(entry, listing=metadata.read_page(entry.url, session=session))
    except FetchError as exc:
        return FetchOutcome(entry, error=exc)
    except Exception as exc:
        # a page that breaks link extraction contributes nothing, like a dead one
        logger.warning("unreadable page %s", entry.url, exc_info=True)
        return FetchOutcome(entry, error=FetchFailed(entry.url, None, f"unreadable page: {exc}"))

def _merge(state: CrawlState, outcome: FetchOutcome, max_pages: int) -> None:
    """Single writer for `discovered`; also the page-budget gate."""
    if not outcome.ok:
        logger.debug("skip %s: %s", outcome.entry.url, outcome.error)
        return
    url, depth = outcome.entry
    state.discovered[url] = outcome.listing.metadata
    for link in _resolve_links(url, outcome.listing.links):
        if len(state.discovered) >= max_pages:
            break
        if link in state.seen or not is_crawlable(link, state.seed_host):
            continue
        state.seen.add(link)
        if link not in state.discovered:
            state.discovered[link] = PageMetadata(url=link)
        state.queue.append(QueueEntry(link, depth + 1))

def _drain(state: CrawlState, max_pages: int, max_depth: int, session,
           workers: int, deadline: Optional[float], started: float) -> None:
    """
    Fetch batches until the queue or budget runs out. `deadline` is checked
    between batches, so a crawl may overrun it by one batch's fetch timeout.
    """
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as pool:
        while state.queue and len(state.discovered) < max_pages:
            if deadline is not None and time.monotonic() - started >= deadline:
                logger.info("crawl deadline of %ss reached; returning %d pages",
                            deadline, len(state.discovered))
                return
            batch = _next_batch(state, max_depth, workers)
            # map() yields in submission order, so merging stays deterministic
            for outcome in pool.map(lambda e: _fetch_entry(e, session), batch):
                if len(state.discovered) >= max_pages:
                    break
                _merge(state, outcome, max_pages)

# ───────────────────────── public API ─────────────────────────────
def crawl_website_pages(start_url: str,
                        max_pages: int = DEFAULT_MAX_PAGES,
                        max_depth: int = DEFAULT_MAX_DEPTH,
                        *,
                        session: requests.Session | None = None,
                        workers: int = CRAWL_WORKERS,
                        deadline: float | None = None) -> CrawlResult:
    """
    Breadth-first crawl of `start_url`'s host, sitemap entries first.
    Never raises: anything unexpected comes back as `CrawlResult.error`.
    """
    max_pages = _clamp(max_pages, MIN_PAGES, MAX_PAGES)
    max_depth = _clamp(max_depth, MIN_DEPTH, MAX_DEPTH)
    own_session = session is None
    started = time.monotonic()
    try:
        seed_host = urlparse(start_url).hostname
        if not seed_host:
            raise CrawlAborted(f"seed URL has no hostname: {start_url!r}")
        if own_session:
            session = fetcher.new_session()
        state = CrawlState.start(start_url, seed_host)
        _seed_from_sitemap(state, session, max_pages)
        _drain(state, max_pages, max_depth, session, max(1, workers), deadline, started)
        result = state.result()
        logger.info("crawl of %s found %d pages via %s",
                    start_url, result.total_found, result.discovery_method)
        return result
    except CrawlAborted as exc:
        logger.warning("crawl of %s aborted: %s", start_url, exc.reason)
        return CrawlResult(pages=[], total_found=0, error=exc.reason)
    except Exception as exc:
        logger.exception("crawl of %s failed", start_url)
        return CrawlResult(pages=[], total_found=0, error=f"Crawl failed: {exc}")
    finally:
        if own_session and session is not None:
            session.close()

def discover_pages(start_url: str,
                   max_pages: int = DEFAULT_MAX_PAGES,
                   max_depth: int = DEFAULT_MAX_DEPTH,
                   **kwargs) -> CrawlResult:
    """
    Pre-flight checked crawl: bad seeds raise UrlValidationError, a
    robots.txt deny comes back as `CrawlResult.error`.
    """
    check_url(start_url)
    if not robots.check_robots_allowed(start_url, session=kwargs.get("session")):
        return CrawlResult(pages=[], total_found=0,
                           error="robots.txt disallows crawling this site")
    return crawl_website_pages(start_url, max_pages, max_depth, **kwargs)
