# classifier.py — URL-shape heuristic: is this page worth extracting?
"""
Rules run top to bottom and the first one that fires wins:

1. root path                                → no
2. listing / junk path fragments            → no
3. sort= / filter= in the query string      → no
4. product / item / blog / article paths    → yes
5. a /2023/, /2024/ or /2025/ segment       → yes
6. otherwise: yes iff more than one path segment
"""
from __future__ import annotations

from typing import Iterable, List
from urllib.parse import urlparse

from models import PageMetadata

JUNK_FRAGMENTS    = ("/tag/", "/category/", "/search/", "/label/", "/archive/", "/page/")
JUNK_QUERY_KEYS   = ("sort=", "filter=")
CONTENT_FRAGMENTS = ("/product/", "/item/", "/blog/", "/article/")
YEAR_SEGMENTS     = ("/2023/", "/2024/", "/2025/")


def is_likely_content_page(url: str) -> bool:
    try:
        parsed = urlparse(url)
    except (ValueError, TypeError):
        return False

    path = parsed.path or "/"
    if path == "/":
        return False
    if any(f in path for f in JUNK_FRAGMENTS):
        return False
    if any(k in parsed.query for k in JUNK_QUERY_KEYS):
        return False
    if any(f in path for f in CONTENT_FRAGMENTS):
        return True
    if any(y in path for y in YEAR_SEGMENTS):
        return True
    return len([seg for seg in path.split("/") if seg]) > 1


def filter_content_pages(pages: Iterable[PageMetadata]) -> List[PageMetadata]:
    return [p for p in pages if is_likely_content_page(p.url)]
