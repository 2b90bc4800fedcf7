# ingest.py — selected pages → chunks → knowledge store
"""
Glue between extraction and the external collaborators.

`embed(text) -> list[float]` is the embedding service; `store` is anything
with ``add(text, embedding, source_type=..., source_metadata=...) -> id``
(see `rag.KnowledgeBase`).
"""
from __future__ import annotations

import concurrent.futures
import logging
import time
from typing import Callable, Dict, List, NamedTuple, Optional, Sequence, Tuple
from urllib.parse import urlparse

import requests

import chunker, extractor, fetcher, robots
from errors import EmptyContent, RobotsDisallowed
from models import DocumentChunk, WebsiteParseResult
from urlsafety import check_url, validate_url

logger = logging.getLogger(__name__)

# ─────────────────────────── tunables ────────────────────────────
MAX_BATCH_URLS    = 50
BATCH_CONCURRENCY = 3
SOURCE_TYPE       = "website"
# ──────────────────────────────────────────────────────────────────

Embedder = Callable[[str], List[float]]


class PreparedPage(NamedTuple):
    url: str
    parse_result: WebsiteParseResult
    chunks: List[DocumentChunk]
    embeddings: List[Optional[List[float]]]


class IngestReport(NamedTuple):
    url: str
    document_ids: List[str]
    parse_result: WebsiteParseResult

    @property
    def chunks_added(self) -> int:
        return len(self.document_ids)


class BatchReport(NamedTuple):
    document_ids: List[str]
    errors: List[Tuple[str, str]]
    succeeded: int
    failed: int

    @property
    def success(self) -> bool:
        return bool(self.document_ids)


def _now_ms() -> int:
    return int(time.time() * 1000)

def _origin(url: str) -> str:
    p = urlparse(url)
    return f"{p.scheme}://{p.netloc}"

def prepare_page(url: str,
                 embed: Optional[Embedder] = None,
                 *,
                 session: requests.Session | None = None,
                 check_robots: bool = True,
                 timeout: float = fetcher.CONTENT_TIMEOUT) -> PreparedPage:
    """Everything up to (not including) the store write. Raises IngestError."""
    check_url(url)
    if check_robots and not robots.check_robots_allowed(url, session=session):
        raise RobotsDisallowed(url)

    result = extractor.extract_content(url, timeout=timeout, session=session)
    if result.metadata.content_size == 0:
        raise EmptyContent(url)

    size = chunker.recommend_chunk_size(result.text)
    chunks = chunker.chunk_document(result.text, size)
    embeddings = [embed(c.text) if embed else None for c in chunks]
    return PreparedPage(url, result, chunks, embeddings)

def store_page(page: PreparedPage, store, processing_timestamp: int | None = None) -> List[str]:
    ts = processing_timestamp if processing_timestamp is not None else _now_ms()
    meta = page.parse_result.metadata
    ids = []
    for chunk, embedding in zip(page.chunks, page.embeddings):
        source_metadata = {
            "url": page.url,
            "domain": meta.domain,
            "scrape_timestamp": ts,
            "is_dynamic_content": meta.is_dynamic_content,
            "original_size_chars": chunk.original_size,
            "chunk_index": chunk.chunk_index,
            "chunk_total": chunk.chunk_total,
            "processing_timestamp": ts,
        }
        ids.append(store.add(chunk.text, embedding,
                             source_type=SOURCE_TYPE, source_metadata=source_metadata))
    return ids

def ingest_page(url: str, store, embed: Optional[Embedder] = None, **kwargs) -> IngestReport:
    page = prepare_page(url, embed, **kwargs)
    ids = store_page(page, store)
    logger.info("ingested %s: %d chunks", url, len(ids))
    return IngestReport(url, ids, page.parse_result)

def ingest_pages(urls: Sequence[str],
                 store,
                 embed: Optional[Embedder] = None,
                 *,
                 session: requests.Session | None = None,
                 timeout: float = fetcher.CONTENT_TIMEOUT) -> BatchReport:
    """
    Ingest a caller-selected batch. One bad page never sinks the batch:
    failures are collected per URL and reported alongside the successes.
    """
    if not urls:
        raise ValueError("No URLs provided")
    if len(urls) > MAX_BATCH_URLS:
        raise ValueError(f"Maximum {MAX_BATCH_URLS} URLs allowed per batch")

    ts = _now_ms()
    allowed_by_origin: Dict[str, bool] = {}

    def _prepare(url: str) -> PreparedPage:
        check_url(url)
        if not allowed_by_origin[_origin(url)]:
            raise RobotsDisallowed(url)
        return prepare_page(url, embed, session=session, check_robots=False,
                            timeout=timeout)

    # robots.txt once per origin; invalid URLs fail later in _prepare
    for url in urls:
        if not validate_url(url).valid:
            continue
        origin = _origin(url)
        if origin not in allowed_by_origin:
            allowed_by_origin[origin] = robots.check_robots_allowed(origin, session=session)

    ids: List[str] = []
    errors: List[Tuple[str, str]] = []
    with concurrent.futures.ThreadPoolExecutor(max_workers=BATCH_CONCURRENCY) as pool:
        for i in range(0, len(urls), BATCH_CONCURRENCY):
            window = list(urls[i:i + BATCH_CONCURRENCY])
            futures = [pool.submit(_prepare, u) for u in window]
            for url, fut in zip(window, futures):
                try:
                    ids.extend(store_page(fut.result(), store, ts))
                except Exception as exc:
                    logger.warning("ingest of %s failed: %s", url, exc)
                    errors.append((url, str(exc) or exc.__class__.__name__))

    succeeded = len(urls) - len(errors)
    logger.info("batch ingest: %d succeeded, %d failed", succeeded, len(errors))
    return BatchReport(ids, errors, succeeded, len(errors))
