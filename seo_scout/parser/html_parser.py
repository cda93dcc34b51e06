# === FILE: seo_scout/parser/html_parser.py ===
"""HTML parsing utilities for SeoScout.

:func:`parse_page` turns a fetched body into a :class:`CrawledPage`:

* title — document <title> text or ``""`` if absent.
* description — ``<meta name="description">`` content or ``""``.
* links — site-relative outbound links (see
  :func:`seo_scout.crawler.link_extractor.extract_relative_links`).
* content — visible text of ``<body>``.
* dom — the parsed soup, kept only until issue detection.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import List, Optional

from bs4 import BeautifulSoup
from bs4.element import PreformattedString, Tag

from seo_scout.crawler.link_extractor import extract_relative_links, normalize_url
from seo_scout.crawler.models import CrawledPage

__all__: Sequence[str] = ("element_text", "parse_html", "parse_page", "visible_text")

_INVISIBLE = ["script", "style", "noscript", "template"]

# block-level elements separate words; inline markup (<b>, <em>, <a>) does not
_BLOCK_TAGS = frozenset(
    {
        "address", "article", "aside", "blockquote", "br", "dd", "div", "dl", "dt",
        "fieldset", "figcaption", "figure", "footer", "form", "h1", "h2", "h3", "h4",
        "h5", "h6", "header", "hr", "li", "main", "nav", "ol", "p", "pre", "section",
        "table", "tbody", "td", "tfoot", "th", "thead", "tr", "ul",
    }
)


def parse_html(html: str) -> BeautifulSoup:
    """Parse markup with the stdlib-backed BeautifulSoup parser."""
    return BeautifulSoup(html, "html.parser")


def _collect_text(tag: Tag, parts: List[str]) -> None:
    for child in tag.children:
        if isinstance(child, Tag):
            block = child.name in _BLOCK_TAGS
            if block:
                parts.append(" ")
            _collect_text(child, parts)
            if block:
                parts.append(" ")
        elif not isinstance(child, PreformattedString):
            parts.append(str(child))


def element_text(tag: Tag) -> str:
    """Rendered text of *tag*: whitespace collapsed, no separators added inside inline markup."""
    parts: List[str] = []
    _collect_text(tag, parts)
    return " ".join("".join(parts).split())


def visible_text(soup: BeautifulSoup) -> str:
    """Text of <body> without script/style content."""
    body = soup.body or soup
    # work on a copy: the soup itself stays intact for the issue detector
    body = BeautifulSoup(str(body), "html.parser")
    for element in body(_INVISIBLE):
        element.decompose()
    return element_text(body)


def _description(soup: BeautifulSoup) -> str:
    tag = soup.select_one("meta[name=description]")
    if tag is None:
        return ""
    value = tag.get("content")
    return value if isinstance(value, str) else ""


def parse_page(
    url: str,
    html: str,
    base_url: str,
    *,
    response_time: int = 0,
    in_sitemap: Optional[bool] = None,
) -> CrawledPage:
    """Build the crawl-phase record for *url* from its HTML body."""
    soup = parse_html(html)

    title_tag = soup.find("title")
    title = title_tag.get_text(strip=True) if title_tag else ""

    return CrawledPage(
        url=normalize_url(url),
        title=title,
        description=_description(soup),
        links=frozenset(extract_relative_links(soup, base_url)),
        content=visible_text(soup),
        response_time=response_time,
        in_sitemap=in_sitemap,
        dom=soup,
    )
