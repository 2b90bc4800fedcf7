import pytest
import requests

from conftest import FakeResponse
from errors import FetchFailed, FetchTimeout
from extractor import extract_content, parse_content
from parser import is_ad_token, looks_like_data, parse_html

URL = "https://example.com/page"

ARTICLE = """
  <html>
    <head>
      <title>Example Title</title>
      <meta name="description" content="A short description" />
    </head>
    <body>
      <script>console.log('remove me');</script>
      <main>
        <h1>Hello</h1>
        <p>World</p>
      </main>
    </body>
  </html>
"""


def test_extracts_structured_content_and_metadata(session):
    session.routes[URL] = ARTICLE
    result = extract_content(URL, session=session)

    assert result.metadata.url == URL
    assert result.metadata.domain == "example.com"
    assert result.metadata.title == "Example Title"
    assert result.metadata.description == "A short description"
    assert result.metadata.content_size > 0
    assert result.metadata.is_dynamic_content is False
    assert result.text.startswith("# Website: Example Title\n\n**URL:** https://example.com/page\n\n---\n\n")
    assert "Hello" in result.text
    assert "World" in result.text
    assert "remove me" not in result.text
    assert session.calls == [(URL, 10)]


def test_non_2xx_raises_fetch_failed(session):
    session.routes[URL] = FakeResponse(404, "", reason="Not Found")
    with pytest.raises(FetchFailed) as info:
        extract_content(URL, session=session)
    assert info.value.status == 404


def test_timeout_raises_fetch_timeout(session):
    session.routes[URL] = requests.Timeout("slow")
    with pytest.raises(FetchTimeout):
        extract_content(URL, session=session)


def test_header_falls_back_to_h1_then_domain():
    result = parse_content(URL, "<body><h1> Big   Heading </h1><p>x</p></body>")
    assert result.metadata.title == "Big Heading"

    result = parse_content(URL, "<body><p>just text</p></body>")
    assert result.metadata.title is None
    assert result.text.startswith("# Website: example.com\n")


def test_og_description_is_used_when_no_meta_description():
    html = '<head><meta property="og:description" content="From OG"></head><body>x</body>'
    assert parse_content(URL, html).metadata.description == "From OG"


def test_main_content_root_is_preferred():
    html = "<body><nav>Menu</nav><div class='content'><p>Body copy</p></div><footer>Foot</footer></body>"
    assert parse_html(html) == "Body copy"


def test_falls_back_to_body():
    html = "<body><nav>Menu</nav><p>Body copy</p></body>"
    assert parse_html(html) == "Menu\n\nBody copy"


def test_removes_junk_and_ad_containers_by_token():
    html = """<body>
      <div class="header">Site header</div>
      <div class="ad">A1</div>
      <div class="promo ads-top">A2</div>
      <div id="sidebar-ad">A3</div>
      <div class="google-adsense-unit">A4</div>
      <div class="topbanner-ad">A5</div>
      <div class="shadow loaded">Keep me</div>
      <noscript>enable js</noscript><svg><text>chart</text></svg><canvas>c</canvas>
      <style>p { color: red }</style>
    </body>"""
    text = parse_html(html)
    assert "Site header" in text
    assert "Keep me" in text
    for gone in ("A1", "A2", "A3", "A4", "A5", "enable js", "chart", "color"):
        assert gone not in text


def test_nested_ad_containers_are_removed_once():
    html = "<body><div class='ads'><div class='ad-slot'>x</div></div><p>ok</p></body>"
    assert parse_html(html) == "ok"


def test_input_values_and_image_alts_are_kept():
    html = """<body><form>
      <label>Email</label><input value="jane@example.com">
      <label>Order</label><input value="12345">
      <label>Note</label><input value="hello">
      <input type="hidden" value="csrftoken1234567890">
      <input type="password" value="secret">
      <textarea>Price: $49.99</textarea>
      <img alt="Team photo at the offsite"><img alt="logo"><img alt="ab">
    </form></body>"""
    text = parse_html(html)
    assert "jane@example.com" in text
    assert "12345" in text
    assert "[Input: hello]" in text
    assert "Price: $49.99" in text
    assert "[Input: Price" not in text
    assert "csrftoken" not in text
    assert "secret" not in text
    assert "[Image: Team photo at the offsite]" in text
    assert "logo" not in text
    assert "[Image: ab]" not in text


def test_breaks_and_padding_prevent_word_concatenation():
    html = "<body><p>one<br>two</p><table><tr><td>a</td><td>b</td></tr></table><span>x</span><span>y</span></body>"
    assert parse_html(html) == "one\n\ntwo\n\na b\n\nx y"


@pytest.mark.parametrize("token,expected", [
    ("ad", True), ("ADS", True), ("advert", True), ("advertisement", True),
    ("ad-unit", True), ("ads-right", True), ("top-ad", True), ("footer-ads", True),
    ("adslot1", True), ("myadsense", True), ("banner-ad", True),
    ("header", False), ("shadow", False), ("loaded", False), ("banner", False),
    ("address", False), ("add-to-cart", False),
])
def test_ad_token_matching(token, expected):
    assert is_ad_token(token) is expected


@pytest.mark.parametrize("value,expected", [
    ("2024", True), ("a@b", True), ("$5", True), ("10 USD", True),
    ("AbC123xyz7890", True), (" AbC123xyz7890 ", True), ("hello", False),
    ("Submit", False), ("12", False),
    ("Describe your requirements", False), ("international shipping", False),
])
def test_looks_like_data(value, expected):
    assert looks_like_data(value) is expected


def test_prose_in_form_fields_is_labelled_as_input():
    html = "<body><textarea>Tell us about international shipping</textarea></body>"
    assert parse_html(html) == "[Input: Tell us about international shipping]"


def test_ad_theme_class_on_body_keeps_the_page():
    html = '<html class="ads"><body class="single has-ads"><p>Real article</p><div class="ad-slot">buy</div></body></html>'
    assert parse_html(html) == "Real article"
