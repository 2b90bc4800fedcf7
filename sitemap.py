# sitemap.py — best-effort /sitemap.xml seeding
from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import Callable, List
from urllib.parse import urlparse

import requests

import fetcher

logger = logging.getLogger(__name__)


def sitemap_url_for(url: str) -> str:
    p = urlparse(url)
    return f"{p.scheme}://{p.netloc}/sitemap.xml"


def _local(tag) -> str:
    return tag.split("}")[-1] if isinstance(tag, str) else ""


def parse_sitemap_locs(content: str) -> List[str]:
    """
    Page <loc> texts in document order; namespace-agnostic. Locs inside
    sitemap-index <sitemap> entries name other sitemaps, not pages, and are
    skipped.
    """
    root = ET.fromstring(content.strip())
    locs = []
    for parent in root.iter():
        if _local(parent.tag) == "sitemap":
            continue
        for el in parent:
            if _local(el.tag) == "loc" and el.text and el.text.strip():
                locs.append(el.text.strip())
    return locs


def discover_sitemap_urls(origin: str,
                          accept: Callable[[str], bool],
                          session: requests.Session | None = None,
                          timeout: float = fetcher.METADATA_TIMEOUT) -> List[str]:
    """
    Candidate URLs from `{origin}/sitemap.xml` that pass `accept`.
    Never raises; any failure yields []. Sitemap-index children are not
    followed.
    """
    url = sitemap_url_for(origin)
    content = fetcher.fetch_text(url, timeout=timeout, session=session)
    if not content:
        return []
    try:
        locs = parse_sitemap_locs(content)
    except ET.ParseError as exc:
        logger.debug("unparseable sitemap at %s: %s", url, exc)
        return []

    out, dupes = [], set()
    for loc in locs:
        if loc in dupes or not accept(loc):
            continue
        dupes.add(loc)
        out.append(loc)
    logger.info("sitemap %s: %d of %d entries usable", url, len(out), len(locs))
    return out
