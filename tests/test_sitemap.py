import requests

from conftest import FakeResponse, sitemap_xml
from crawler import is_crawlable
from sitemap import discover_sitemap_urls, parse_sitemap_locs

SITEMAP = "https://example.com/sitemap.xml"


def _accept(url):
    return is_crawlable(url, "example.com")


def test_extracts_same_origin_locs(session):
    session.routes[SITEMAP] = sitemap_xml(
        "https://example.com/a",
        "https://example.com/b",
        "https://other.org/c",
        "https://example.com/file.pdf",
        "https://example.com/static/app.css",
        "https://example.com/a",
    )
    urls = discover_sitemap_urls("https://example.com/start", _accept, session=session)
    assert urls == ["https://example.com/a", "https://example.com/b"]
    assert session.calls == [(SITEMAP, 5)]


def test_missing_sitemap_is_empty(session):
    assert discover_sitemap_urls("https://example.com", _accept, session=session) == []


def test_failures_never_raise(session):
    session.routes[SITEMAP] = requests.ConnectionError("down")
    assert discover_sitemap_urls("https://example.com", _accept, session=session) == []

    session.routes[SITEMAP] = "<urlset><url><loc>broken"
    assert discover_sitemap_urls("https://example.com", _accept, session=session) == []

    session.routes[SITEMAP] = FakeResponse(500, "oops")
    assert discover_sitemap_urls("https://example.com", _accept, session=session) == []


def test_parses_locs_without_namespace():
    xml = "<urlset><url><loc> https://x.com/1 </loc></url><url><loc></loc></url></urlset>"
    assert parse_sitemap_locs(xml) == ["https://x.com/1"]


def test_sitemap_index_entries_are_not_pages(session):
    session.routes[SITEMAP] = (
        '<sitemapindex xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">'
        "<sitemap><loc>https://example.com/sitemap-posts.xml</loc></sitemap>"
        "<sitemap><loc>https://example.com/sitemap-pages.xml</loc></sitemap>"
        "</sitemapindex>"
    )
    assert discover_sitemap_urls("https://example.com", _accept, session=session) == []
