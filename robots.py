# robots.py — coarse, whole-site robots.txt policy
"""
Only one rule matters here: a bare ``Disallow: /`` inside the wildcard
``User-agent: *`` group denies the whole crawl. Path-level rules are not
applied. A missing or unreachable robots.txt means "allowed".
"""
from __future__ import annotations

import logging
from urllib.parse import urlparse

import requests

import fetcher

logger = logging.getLogger(__name__)


def robots_url_for(origin_or_url: str) -> str:
    raw = origin_or_url.strip()
    if not raw.startswith("http"):
        raw = f"https://{raw}"
    p = urlparse(raw)
    return f"{p.scheme}://{p.netloc}/robots.txt"


def parse_robots_allows(content: str) -> bool:
    in_wildcard = False
    for raw in content.splitlines():
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue
        key, _, value = line.partition(":")
        key = key.strip().lower()
        if key == "user-agent":
            in_wildcard = value.strip() == "*"
        elif key == "disallow" and in_wildcard and value.strip() == "/":
            return False
    return True


def check_robots_allowed(origin_or_url: str,
                         session: requests.Session | None = None,
                         timeout: float = fetcher.METADATA_TIMEOUT) -> bool:
    try:
        url = robots_url_for(origin_or_url)
    except ValueError:
        return True
    content = fetcher.fetch_text(url, timeout=timeout, session=session)
    if content is None:
        logger.debug("no usable robots.txt at %s, default-allow", url)
        return True
    allowed = parse_robots_allows(content)
    if not allowed:
        logger.info("robots.txt at %s disallows crawling", url)
    return allowed
