# errors.py — ingestion error taxonomy
from __future__ import annotations


class IngestError(Exception):
    """Base class for everything the ingestion pipeline raises on purpose."""


# ───────────────────── pre-flight validation ─────────────────────
class UrlValidationError(IngestError):
    pass


class InvalidUrl(UrlValidationError):
    def __init__(self, detail: str = "could not parse URL") -> None:
        super().__init__(f"Invalid URL format: {detail}")


class UnsupportedProtocol(UrlValidationError):
    def __init__(self, scheme: str = "") -> None:
        super().__init__("URL must use HTTP or HTTPS protocol")
        self.scheme = scheme


class PrivateNetworkBlocked(UrlValidationError):
    def __init__(self, hostname: str = "") -> None:
        super().__init__("Cannot scrape local or internal network URLs")
        self.hostname = hostname


# ───────────────────────── network ───────────────────────────────
class FetchError(IngestError):
    def __init__(self, url: str, message: str) -> None:
        super().__init__(message)
        self.url = url


class FetchTimeout(FetchError):
    def __init__(self, url: str, timeout: float) -> None:
        super().__init__(url, f"Timed out after {timeout:g}s fetching {url}")
        self.timeout = timeout


class FetchFailed(FetchError):
    """Non-2xx answer, or no answer at all (``status`` is None then)."""

    def __init__(self, url: str, status: int | None = None, reason: str = "") -> None:
        if status is not None:
            msg = f"HTTP {status}" + (f": {reason}" if reason else "")
        else:
            msg = f"Request failed: {reason or 'connection error'}"
        super().__init__(url, msg)
        self.status = status
        self.reason = reason


# ───────────────────────── crawl / ingest ────────────────────────
class CrawlAborted(IngestError):
    """Only ever surfaces as ``CrawlResult.error``; never escapes the crawler."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class RobotsDisallowed(IngestError):
    def __init__(self, url: str) -> None:
        super().__init__(
            "Website robots.txt disallows scraping. Please contact the site owner."
        )
        self.url = url


class EmptyContent(IngestError):
    def __init__(self, url: str) -> None:
        super().__init__("Website contains no extractable content")
        self.url = url
