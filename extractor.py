# extractor.py — full content extraction for one selected page
from __future__ import annotations

import logging
from urllib.parse import urlparse

import requests

import fetcher, parser
from models import ContentMetadata, WebsiteParseResult

logger = logging.getLogger(__name__)


def format_document(title: str, url: str, body: str) -> str:
    return f"# Website: {title}\n\n**URL:** {url}\n\n---\n\n{body}"

def parse_content(url: str, html: str) -> WebsiteParseResult:
    """Offline half of `extract_content`: HTML already in hand."""
    domain = urlparse(url).hostname or ""
    soup = parser.clean_tree(parser.make_soup(html))
    title = parser.page_title(soup)
    description = parser.page_description(soup)
    body = parser.body_text(soup)

    return WebsiteParseResult(
        text=format_document(title or domain, url, body),
        metadata=ContentMetadata(
            url=url,
            domain=domain,
            title=title,
            description=description,
            content_size=len(body),
            # static fetch only; script-rendered pages are not detected
            is_dynamic_content=False,
        ),
    )

def extract_content(page_url: str,
                    timeout: float = fetcher.CONTENT_TIMEOUT,
                    session: requests.Session | None = None) -> WebsiteParseResult:
    """
    Fetch `page_url` and turn it into a formatted text document.
    FetchTimeout / FetchFailed propagate so the caller can report this page.
    """
    resp = fetcher.fetch_page(page_url, timeout=timeout, session=session)
    result = parse_content(page_url, resp.text)
    logger.info("extracted %s: %d chars", page_url, result.metadata.content_size)
    return result
