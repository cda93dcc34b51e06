# === FILE: seo_scout/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import time
from typing import Dict, List, Optional, Set

from seo_scout.config import AuditConfig
from seo_scout.crawler.fetcher import Fetcher
from seo_scout.crawler.link_extractor import normalize_url, resolve_links
from seo_scout.crawler.models import CrawledPage
from seo_scout.crawler.robots import RobotsTxtRules
from seo_scout.exceptions import FetchFailure, PermissionDenied, SitemapUnavailable
from seo_scout.logger import get_logger
from seo_scout.parser.html_parser import parse_page
from seo_scout.parser.sitemap_parser import sitemap_urls

__all__ = ("Crawler",)


class Crawler:
    """Последовательный краулер одного сайта: robots.txt, sitemap, очередь URL."""

    def __init__(
        self, base_url: str, config: AuditConfig, fetcher: Optional[Fetcher] = None
    ) -> None:
        self.base_url = normalize_url(base_url)
        self.config = config
        self.fetcher = fetcher or Fetcher(config)
        self.logger = get_logger("crawler")
        self.sitemap: Optional[Set[str]] = None

    async def __aenter__(self) -> Crawler:
        await self.fetcher.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.fetcher.__aexit__(exc_type, exc, tb)

    @property
    def _headers(self) -> Dict[str, str]:
        return {"User-Agent": self.config.user_agent}

    async def check_permission(self) -> RobotsTxtRules:
        """Проверяет robots.txt; при отсутствии файла или полном запрете бросает PermissionDenied."""
        robots_url = f"{self.base_url}/robots.txt"
        resp = await self.fetcher.fetch(robots_url, self._headers)
        if resp.status == 404:
            raise PermissionDenied(self.base_url, "no robots.txt file found")
        if not resp.ok:
            raise PermissionDenied(self.base_url, f"robots.txt returned HTTP {resp.status}")
        rules = RobotsTxtRules(resp.text)
        if rules.disallows_all(self.config.user_agent):
            raise PermissionDenied(self.base_url, "robots.txt disallows the whole site")
        self.logger.debug("robots.txt allows crawling %s", self.base_url)
        return rules

    async def load_sitemap(self) -> Set[str]:
        """Загружает sitemap.xml; недоступный sitemap считается фатальной ошибкой."""
        sitemap_url = f"{self.base_url}/sitemap.xml"
        try:
            resp = await self.fetcher.fetch(sitemap_url, self._headers)
        except FetchFailure as exc:
            raise SitemapUnavailable(sitemap_url, str(exc)) from exc
        if not resp.ok:
            raise SitemapUnavailable(sitemap_url, f"HTTP {resp.status}")
        self.sitemap = sitemap_urls(resp.text)
        self.logger.info("Sitemap lists %d URLs", len(self.sitemap))
        return self.sitemap

    def _in_sitemap(self, url: str) -> Optional[bool]:
        return None if self.sitemap is None else url in self.sitemap

    async def fetch_page(self, url: str) -> CrawledPage:
        resp = await self.fetcher.fetch(url, self._headers)
        if not resp.ok:
            raise FetchFailure(url, resp.status)
        return parse_page(
            url,
            resp.text,
            self.base_url,
            response_time=resp.response_time,
            in_sitemap=self._in_sitemap(normalize_url(url)),
        )

    async def crawl(self) -> List[CrawledPage]:
        """Обходит все достижимые внутренние URL, каждый ровно один раз."""
        await self.check_permission()
        if self.config.use_sitemap:
            await self.load_sitemap()

        self.logger.info("Старт обхода: %s", self.base_url)
        start = time.monotonic()
        frontier: Set[str] = {self.base_url}
        results: Dict[str, CrawledPage] = {}

        while frontier:
            url = frontier.pop()
            page = await self.fetch_page(url)
            results[page.url] = page
            frontier |= resolve_links(self.base_url, page.links)
            frontier.difference_update(results)
            self.logger.debug(
                "%d / %d crawled (%s)", len(results), len(results) + len(frontier), page.url
            )
            if frontier:
                await asyncio.sleep(self.config.crawl_delay)

        duration = time.monotonic() - start
        self.logger.info("Завершено: %d страниц за %.2f с", len(results), duration)
        return list(results.values())
