# models.py — data carried between pipeline stages
from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional, Set

from errors import FetchError

SITEMAP = "sitemap"
CRAWL = "crawl"


@dataclass(frozen=True)
class PageMetadata:
    url: str
    title: Optional[str] = None
    description: Optional[str] = None
    estimated_size_bytes: Optional[int] = None


@dataclass
class CrawlResult:
    pages: List[PageMetadata]
    total_found: int
    discovery_method: str = CRAWL          # "sitemap" | "crawl"
    error: Optional[str] = None


class QueueEntry(NamedTuple):
    url: str
    depth: int


class PageListing(NamedTuple):
    """Metadata plus the raw hrefs found on one fetched page."""
    metadata: PageMetadata
    links: List[str]


class FetchOutcome(NamedTuple):
    entry: QueueEntry
    listing: Optional[PageListing] = None
    error: Optional[FetchError] = None

    @property
    def ok(self) -> bool:
        return self.listing is not None


@dataclass
class CrawlState:
    """Per-crawl bookkeeping. Never shared between two crawl calls."""
    seed_url: str
    seed_host: str
    visited: Set[str] = field(default_factory=set)
    seen: Set[str] = field(default_factory=set)
    discovered: Dict[str, PageMetadata] = field(default_factory=dict)
    queue: "deque[QueueEntry]" = field(default_factory=deque)
    discovery_method: str = CRAWL

    @classmethod
    def start(cls, seed_url: str, seed_host: str) -> "CrawlState":
        state = cls(seed_url=seed_url, seed_host=seed_host)
        state.seen.add(seed_url)
        state.queue.append(QueueEntry(seed_url, 0))
        return state

    def result(self) -> CrawlResult:
        pages = list(self.discovered.values())
        return CrawlResult(pages=pages, total_found=len(pages),
                           discovery_method=self.discovery_method)


@dataclass
class ContentMetadata:
    url: str
    domain: str
    title: Optional[str] = None
    description: Optional[str] = None
    content_size: int = 0
    is_dynamic_content: bool = False


@dataclass
class WebsiteParseResult:
    text: str
    metadata: ContentMetadata


@dataclass
class DocumentChunk:
    text: str
    chunk_index: int
    chunk_total: int
    original_size: int
