# File: seo_scout/link_graph.py
"""seo_scout.link_graph: Подсчёт входящих внутренних ссылок по завершённому обходу."""

from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, Protocol

from seo_scout.crawler.link_extractor import resolve_links

__all__ = ["build_incoming_links"]


class _Linked(Protocol):
    url: str
    links: FrozenSet[str]


def build_incoming_links(pages: Iterable[_Linked], base_url: str) -> Dict[str, FrozenSet[str]]:
    """Возвращает для каждой страницы множество URL других страниц, ссылающихся на неё.

    Ссылки страницы Q разрешаются относительно base_url; самоссылки не учитываются.
    """
    pages = list(pages)
    targets = {page.url: resolve_links(base_url, page.links) for page in pages}
    return {
        page.url: frozenset(
            source
            for source, resolved in targets.items()
            if source != page.url and page.url in resolved
        )
        for page in pages
    }
