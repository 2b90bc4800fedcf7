#fetcher.py
from __future__ import annotations
import logging, os, time
import requests

from errors import FetchFailed, FetchTimeout

logger = logging.getLogger(__name__)

# ─────────────────────────── tunables ────────────────────────────
METADATA_TIMEOUT = 5          # robots.txt, sitemap.xml, discovery fetches
CONTENT_TIMEOUT  = 10         # full content extraction
RETRY_BACKOFF    = 1.5
_DEFAULT_UA = "Mozilla/5.0 (compatible; SiteIngest-Bot/1.0)"
# ──────────────────────────────────────────────────────────────────

def _ua() -> str:
    return os.environ.get("SITE_INGEST_USER_AGENT", _DEFAULT_UA)

def new_session() -> requests.Session:
    s = requests.Session()
    s.headers["User-Agent"] = _ua()
    return s

def is_html(resp) -> bool:
    """Missing Content-Type counts as HTML; anything else must say so."""
    ct = resp.headers.get("content-type", "")
    return not ct or "text/html" in ct or "application/xhtml+xml" in ct

def fetch_page(url: str,
               timeout: float = METADATA_TIMEOUT,
               retries: int = 0,
               session: requests.Session | None = None) -> requests.Response:
    """
    GET `url` once (plus `retries`), returning the 2xx response.
    Raises FetchTimeout / FetchFailed; nothing else escapes.
    """
    getter = session.get if session is not None else requests.get
    err: FetchTimeout | FetchFailed | None = None
    for attempt in range(1, retries + 2):
        try:
            logger.debug("FETCH %s  (try %d)", url, attempt)
            r = getter(url, headers={"User-Agent": _ua()}, timeout=timeout)
            if not 200 <= r.status_code < 300:
                # a definite answer from the server; retrying won't change it
                raise FetchFailed(url, r.status_code, getattr(r, "reason", "") or "")
            return r
        except requests.Timeout:
            err = FetchTimeout(url, timeout)
        except requests.RequestException as exc:
            err = FetchFailed(url, None, str(exc))
        logger.debug("  ↳ error: %s", err)
        if attempt <= retries:
            time.sleep(RETRY_BACKOFF * attempt)
    raise err

def fetch_text(url: str,
               timeout: float = METADATA_TIMEOUT,
               session: requests.Session | None = None) -> str | None:
    """Best-effort variant: body text, or None on any fetch failure."""
    try:
        return fetch_page(url, timeout=timeout, session=session).text
    except (FetchTimeout, FetchFailed) as exc:
        logger.debug("best-effort fetch of %s failed: %s", url, exc)
        return None
