# File: seo_scout/parser/sitemap_parser.py
"""seo_scout.parser.sitemap_parser: Модуль для парсинга sitemap.xml и извлечения URL."""

from __future__ import annotations

from typing import List, Set

from lxml import etree

from seo_scout.crawler.link_extractor import normalize_url


def parse_sitemap(xml_content: str) -> List[str]:
    """Разбирает XML content sitemap и возвращает список URL из тегов <loc>.

    Args:
        xml_content: строка с содержимым sitemap.xml.

    Returns:
        Список URL, найденных в <loc> тегах (пустой для нечитаемого XML).

    Пример:
    ```python
    from seo_scout.parser.sitemap_parser import parse_sitemap

    with open('sitemap.xml', encoding='utf-8') as f:
        content = f.read()
    urls = parse_sitemap(content)
    print(urls)
    ```
    """
    if not xml_content.strip():
        return []
    parser = etree.XMLParser(ns_clean=True, recover=True)
    root = etree.fromstring(xml_content.encode("utf-8"), parser=parser)
    if root is None:
        return []
    locs = root.findall(".//{*}loc")
    return [loc.text.strip() for loc in locs if loc.text]


def sitemap_urls(xml_content: str) -> Set[str]:
    """Множество нормализованных URL sitemap (без завершающего слеша)."""
    return {normalize_url(url) for url in parse_sitemap(xml_content)}
