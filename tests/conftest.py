import pytest
import requests

import fetcher


class FakeResponse:
    def __init__(self, status=200, text="", content_type="text/html; charset=utf-8",
                 reason="OK"):
        self.status_code = status
        self.text = text
        self.reason = reason
        self.headers = {"content-type": content_type} if content_type else {}


class FakeSession:
    """
    Stand-in for requests.Session. Routes map URL → body text, FakeResponse,
    an exception instance, or a list of those served in turn. Unknown URLs 404.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def get(self, url, headers=None, timeout=None):
        self.calls.append((url, timeout))
        route = self.routes.get(url)
        if isinstance(route, list):
            route = route.pop(0) if len(route) > 1 else route[0]
        if route is None:
            return FakeResponse(404, "", reason="Not Found")
        if isinstance(route, BaseException):
            raise route
        if isinstance(route, FakeResponse):
            return route
        return FakeResponse(200, route)

    def close(self):
        pass

    def requested(self, url):
        return [c for c in self.calls if c[0] == url]


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def offline(monkeypatch):
    """Route module-level requests.get and fetcher.new_session to one fake."""
    fake = FakeSession()
    monkeypatch.setattr(requests, "get", fake.get)
    monkeypatch.setattr(fetcher, "new_session", lambda: fake)
    return fake


def sitemap_xml(*urls):
    locs = "".join(f"<url><loc>{u}</loc></url>" for u in urls)
    return ('<?xml version="1.0" encoding="UTF-8"?>'
            f'<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">{locs}</urlset>')


def page(title="", body="", links=()):
    anchors = "".join(f'<a href="{href}">{href}</a>' for href in links)
    return (f"<html><head><title>{title}</title></head>"
            f"<body>{body}{anchors}</body></html>")
