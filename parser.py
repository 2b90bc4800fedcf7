#parser.py
"""
HTML → clean text.

Everything here works on a BeautifulSoup tree through three primitives
(`select_all`, `remove_nodes`, `get_text`) plus attribute inspection, so the
ad / input / alt-text rules never depend on parser internals.
"""
from __future__ import annotations

import re
from typing import Iterable, List, Optional

from bs4 import BeautifulSoup, Tag

# ─────────────────────────── constants ────────────────────────────
JUNK_TAGS        = "script, style, noscript, svg, canvas"
MAIN_SELECTORS   = "main, article, [role=main], .content, .main-content"
BLOCK_TAGS       = ["div", "p", "li", "tr"]
INLINE_TAGS      = ["span", "td", "th", "label"]
SKIP_INPUT_TYPES = ("hidden", "password")
GENERIC_ALTS     = {
    "image", "img", "photo", "picture", "pic", "logo", "icon", "banner",
    "placeholder", "spacer", "thumbnail", "untitled", "null", "undefined",
}
_AD_EXACT        = {"ad", "ads", "advert", "advertisement"}
PAGE_ROOT_TAGS   = ("html", "body")
# ──────────────────────────────────────────────────────────────────

_DIGITS_RE    = re.compile(r"\d{4,}")
_CURRENCY_RE  = re.compile(
    r"[$€£¥₹]\s?\d|\d[\d,.]*\s?(?:USD|EUR|GBP|JPY|INR|CAD|AUD)\b", re.I)
_LONG_ALNUM_RE = re.compile(r"[A-Za-z0-9]{12,}")
_HSPACE_RE    = re.compile(r"[ \t\f\v\u00a0]+")


# ───────────────────────── tree primitives ────────────────────────
def make_soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "html.parser")

def select_all(root: Tag, selector: str) -> List[Tag]:
    return list(root.select(selector))

def remove_nodes(nodes: Iterable[Tag]) -> int:
    removed = 0
    for node in nodes:
        if node.decomposed:           # already gone with an ancestor
            continue
        node.decompose()
        removed += 1
    return removed

def get_text(root: Tag) -> str:
    return root.get_text()


# ───────────────────────── ad containers ──────────────────────────
def is_ad_token(token: str) -> bool:
    t = token.lower()
    return (
        t in _AD_EXACT
        or t.startswith(("ad-", "ads-"))
        or t.endswith(("-ad", "-ads"))
        or "adslot" in t
        or "adsense" in t
        or ("banner" in t and "ad" in t)
    )

def _attr_tokens(el: Tag) -> List[str]:
    tokens: List[str] = []
    for name in ("class", "id"):
        val = el.get(name)
        if not val:
            continue
        if isinstance(val, str):
            val = val.split()
        tokens.extend(val)
    return tokens

def is_ad_container(el: Tag) -> bool:
    return any(is_ad_token(t) for t in _attr_tokens(el))


# ─────────────────────── inline data keeping ──────────────────────
def looks_like_data(value: str) -> bool:
    value = value.strip()
    return bool(
        _DIGITS_RE.search(value)
        or "@" in value
        or _CURRENCY_RE.search(value)
        or _LONG_ALNUM_RE.fullmatch(value)
    )

def _inline_inputs(root: Tag) -> None:
    for el in select_all(root, "input, textarea"):
        if el.name == "input":
            if (el.get("type") or "").lower() in SKIP_INPUT_TYPES:
                el.decompose()
                continue
            value = (el.get("value") or "").strip()
        else:
            value = el.get_text().strip()
        if not value:
            el.decompose()
        elif looks_like_data(value):
            el.replace_with(f" {value} ")
        else:
            el.replace_with(f" [Input: {value}] ")

def _inline_images(root: Tag) -> None:
    for el in select_all(root, "img"):
        alt = (el.get("alt") or "").strip()
        if len(alt) >= 3 and alt.lower() not in GENERIC_ALTS:
            el.replace_with(f" [Image: {alt}] ")
        else:
            el.decompose()

def _pad_elements(root: Tag) -> None:
    for br in select_all(root, "br"):
        br.replace_with("\n")
    for el in root.find_all(BLOCK_TAGS):
        if el.parent is not None:
            el.insert_before("\n")
            el.insert_after("\n")
    for el in root.find_all(INLINE_TAGS):
        if el.parent is not None:
            el.insert_before(" ")
            el.insert_after(" ")


# ───────────────────────── metadata ───────────────────────────────
def _squash(text: str) -> str:
    return _HSPACE_RE.sub(" ", text.replace("\n", " ")).strip()

def page_title(soup: BeautifulSoup) -> Optional[str]:
    for tag in ("title", "h1"):
        el = soup.find(tag)
        if el is not None:
            text = _squash(el.get_text())
            if text:
                return text
    return None

def page_description(soup: BeautifulSoup) -> Optional[str]:
    metas = soup.find_all("meta")
    for key, wanted in (("name", "description"), ("property", "og:description")):
        for m in metas:
            if (m.get(key) or "").lower() == wanted:
                content = (m.get("content") or "").strip()
                if content:
                    return content
    return None


# ───────────────────────── body text ──────────────────────────────
def clean_tree(soup: BeautifulSoup) -> BeautifulSoup:
    """Mutates `soup`: junk and ad nodes out, inline data kept, spacing in."""
    remove_nodes(select_all(soup, JUNK_TAGS))
    # theme classes on the page root (e.g. "has-ads") must not wipe the document
    remove_nodes([el for el in soup.find_all(True)
                  if el.name not in PAGE_ROOT_TAGS and is_ad_container(el)])
    _inline_inputs(soup)
    _inline_images(soup)
    _pad_elements(soup)
    return soup

def main_content_root(soup: BeautifulSoup) -> Tag:
    return soup.select_one(MAIN_SELECTORS) or soup.body or soup

def collapse_lines(text: str) -> str:
    lines = (_HSPACE_RE.sub(" ", line).strip() for line in text.splitlines())
    return "\n\n".join(line for line in lines if line)

def body_text(soup: BeautifulSoup) -> str:
    """Main-content text of an already cleaned tree."""
    return collapse_lines(get_text(main_content_root(soup)))

def parse_html(html: str) -> str:
    """Body text of a full HTML document, already cleaned and collapsed."""
    if not html:
        return ""
    return body_text(clean_tree(make_soup(html)))
