# urlsafety.py — pre-flight URL checks (pure, no I/O)
from __future__ import annotations

from typing import NamedTuple, Optional
from urllib.parse import urlparse

from errors import (InvalidUrl, PrivateNetworkBlocked, UnsupportedProtocol,
                    UrlValidationError)

_ALLOWED_SCHEMES = ("http", "https")


class UrlValidation(NamedTuple):
    valid: bool
    error: Optional[str] = None


def is_allowed_protocol(scheme: str) -> bool:
    return scheme.lower() in _ALLOWED_SCHEMES


def is_private_hostname(hostname: str) -> bool:
    """localhost, 127.*, 10.*, 192.168.* and 172.16.* – 172.31.*"""
    lower = hostname.lower()
    if lower == "localhost":
        return True
    if lower.startswith(("127.", "10.", "192.168.")):
        return True
    if lower.startswith("172."):
        parts = lower.split(".")
        if len(parts) > 1 and parts[1].isdigit() and 16 <= int(parts[1]) <= 31:
            return True
    return False


def check_url(url: str) -> str:
    """Raise the matching UrlValidationError, else return the hostname."""
    try:
        parsed = urlparse(url.strip())
        parsed.port                       # raises on a malformed port
    except ValueError as exc:
        raise InvalidUrl(str(exc)) from exc

    if not parsed.scheme:
        raise InvalidUrl("missing scheme")
    if not is_allowed_protocol(parsed.scheme):
        raise UnsupportedProtocol(parsed.scheme)
    if not parsed.hostname:
        raise InvalidUrl("missing host")
    if is_private_hostname(parsed.hostname):
        raise PrivateNetworkBlocked(parsed.hostname)
    return parsed.hostname


def validate_url(url: str) -> UrlValidation:
    try:
        check_url(url)
    except UrlValidationError as exc:
        return UrlValidation(False, str(exc))
    return UrlValidation(True)
