# utils.py — console views for CLI output
from __future__ import annotations
from typing import List

from models import CrawlResult, DocumentChunk, PageMetadata

# ─────────────────────────── constants ────────────────────────────
PREVIEW_CHARS = 160
# ──────────────────────────────────────────────────────────────────

def _size(n: int | None) -> str:
    if n is None:
        return "?"
    return f"{n / 1024:.1f} KB" if n >= 1024 else f"{n} B"

# ─────────────────────── pretty-print crawl pages ─────────────────
def format_pages(pages: List[PageMetadata]) -> str:
    """Human-friendly listing of discovered pages."""
    if not pages:
        return "No pages found."
    return "\n".join(
        f"{i+1}. {p.title or '(no title)'}  [{_size(p.estimated_size_bytes)}]\n"
        f"   {p.url}"
        + (f"\n   {p.description}" if p.description else "")
        for i, p in enumerate(pages)
    )

def format_crawl_summary(result: CrawlResult, shown: int) -> str:
    line = f"{result.total_found} pages via {result.discovery_method}"
    if shown != result.total_found:
        line += f" ({shown} likely content)"
    return line

# ───────────────────────── chunk previews ─────────────────────────
def preview(text: str, limit: int = PREVIEW_CHARS) -> str:
    flat = " ".join(text.split())
    return flat if len(flat) <= limit else flat[:limit] + "…"

def format_chunks(chunks: List[DocumentChunk]) -> str:
    return "\n\n".join(
        f"[{c.chunk_index + 1}/{c.chunk_total}] {len(c.text)} chars "
        f"(of {c.original_size})\n   {preview(c.text)}"
        for c in chunks
    )
