# metadata.py — lightweight per-page listing for discovery
from __future__ import annotations

from typing import List

import requests

import fetcher, parser
from errors import FetchFailed
from models import PageListing, PageMetadata


def _hrefs(soup) -> List[str]:
    return [a["href"] for a in soup.find_all("a", href=True)]

def listing_from_html(url: str, html: str) -> PageListing:
    """Title / description / HTML length, plus raw hrefs. No text conversion."""
    soup = parser.make_soup(html)
    meta = PageMetadata(
        url=url,
        title=parser.page_title(soup),
        description=parser.page_description(soup),
        estimated_size_bytes=len(html),
    )
    return PageListing(meta, _hrefs(soup))

def read_page(url: str,
              session: requests.Session | None = None,
              timeout: float = fetcher.METADATA_TIMEOUT) -> PageListing:
    resp = fetcher.fetch_page(url, timeout=timeout, session=session)
    if not fetcher.is_html(resp):
        raise FetchFailed(url, resp.status_code,
                          f"not HTML ({resp.headers.get('content-type', '')})")
    return listing_from_html(url, resp.text)

def fetch_page_metadata(url: str,
                        session: requests.Session | None = None,
                        timeout: float = fetcher.METADATA_TIMEOUT) -> PageMetadata:
    return read_page(url, session=session, timeout=timeout).metadata
