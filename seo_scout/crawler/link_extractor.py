# seo_scout/crawler/link_extractor.py
"""
Link extraction and URL normalization utilities for SeoScout.
"""
from __future__ import annotations

from typing import Iterable, Set
from urllib.parse import urldefrag

from bs4 import BeautifulSoup
from bs4.element import Tag

__all__ = ["normalize_url", "resolve_link", "resolve_links", "extract_relative_links"]


def normalize_url(url: str) -> str:
    """Strip surrounding whitespace and trailing slashes: the page identity."""
    return url.strip().rstrip("/")


def resolve_link(base_url: str, link: str) -> str:
    """Resolve a relative link (``/path``) against *base_url* and normalize it."""
    return normalize_url(normalize_url(base_url) + link)


def extract_relative_links(soup: BeautifulSoup, base_url: str) -> Set[str]:
    """
    Collect outbound internal links as site-relative paths.

    Keeps ``href`` values that start with ``/`` or with *base_url* (prefix
    removed). Protocol-relative ``//host`` links point to another origin and
    are ignored, fragments are dropped.
    """
    base = normalize_url(base_url)
    links: Set[str] = set()
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        raw, _ = urldefrag(href_val.strip())
        if raw.startswith(base):
            raw = raw[len(base):]
            if raw and not raw.startswith(("/", "?")):
                # base https://a.com must not swallow https://a.com.evil
                continue
            if not raw.startswith("/"):
                raw = "/" + raw
        if not raw.startswith("/") or raw.startswith("//"):
            continue
        links.add(raw)
    return links


def resolve_links(base_url: str, links: Iterable[str]) -> Set[str]:
    """Resolve every relative link of a page into absolute, normalized URLs."""
    return {resolve_link(base_url, link) for link in links}
