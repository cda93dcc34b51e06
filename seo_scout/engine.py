# File: seo_scout/engine.py
"""seo_scout.engine: Orchestration layer для одного цикла обхода, аудита и сохранения."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Union

from seo_scout.config import AuditConfig, ConsistencyRules, load_config
from seo_scout.crawler.crawler import Crawler
from seo_scout.crawler.fetcher import Fetcher
from seo_scout.crawler.link_extractor import normalize_url
from seo_scout.crawler.models import CrawledPage, Page, SiteHistory, Snapshot
from seo_scout.exceptions import HistoryNotFound
from seo_scout.history import HistoryStore, SnapshotDelta, SnapshotTotals, diff
from seo_scout.issues import CONSISTENCY_TAGS, detect
from seo_scout.link_graph import build_incoming_links
from seo_scout.logger import logger

__all__ = ["CrawlOutcome", "Engine", "annotate_pages", "latest_snapshot"]


def latest_snapshot(history: SiteHistory) -> Snapshot:
    latest = history.latest
    if latest is None:
        raise HistoryNotFound(history.base_url)
    return latest


@dataclass(frozen=True, slots=True)
class CrawlOutcome:
    """Результат цикла: обновлённая история сайта и сравнение с прошлым снимком."""

    history: SiteHistory
    summary: Union[SnapshotDelta, SnapshotTotals]

    @property
    def snapshot(self) -> Snapshot:
        return latest_snapshot(self.history)

    @property
    def is_first_crawl(self) -> bool:
        return isinstance(self.summary, SnapshotTotals)


def annotate_pages(
    crawled: Iterable[CrawledPage], base_url: str, rules: Optional[ConsistencyRules] = None
) -> List[Page]:
    """Вторая фаза: входящие ссылки, затем теги проблем. Исходные записи не меняются."""
    crawled = list(crawled)
    incoming = build_incoming_links(crawled, base_url)
    pages: List[Page] = []
    for item in crawled:
        page = Page(
            url=item.url,
            title=item.title,
            description=item.description,
            links=item.links,
            content=item.content,
            response_time=item.response_time,
            in_sitemap=item.in_sitemap,
            incoming_links=incoming[item.url],
        )
        issues = detect(page, item.dom, rules) if item.dom is not None else frozenset()
        pages.append(replace(page, issues=issues))
    return pages


class Engine:
    """Фасад для CLI и тестов: обход, аннотирование, сохранение снимка."""

    @staticmethod
    def load_config(path: Optional[str]) -> AuditConfig:
        """Загружает конфиг из YAML/JSON или использует значения по умолчанию."""
        return load_config(path)

    def __init__(
        self,
        config: AuditConfig,
        store: Optional[HistoryStore] = None,
        fetcher: Optional[Fetcher] = None,
    ) -> None:
        self.config = config
        self.store = store or HistoryStore(config.history_file)
        self.fetcher = fetcher

    async def crawl(self, base_url: str) -> List[CrawledPage]:
        """Первая фаза: только обход, без побочных эффектов на хранилище."""
        async with Crawler(base_url, self.config, self.fetcher) as crawler:
            return await crawler.crawl()

    async def run(self, base_url: str) -> CrawlOutcome:
        base = normalize_url(base_url)
        crawled = await self.crawl(base)
        pages = annotate_pages(crawled, base, self.config.consistency)
        snapshot = Snapshot(pages=tuple(pages))
        logger.info(
            "Crawl of %s done: %d pages, %d issues", base, len(snapshot), snapshot.issue_count
        )
        history = self.store.append(base, snapshot)
        return CrawlOutcome(history=history, summary=diff(history))

    def start_crawl(self, base_url: str) -> CrawlOutcome:
        """Синхронная обёртка над :meth:`run` для CLI."""
        try:
            return asyncio.run(self.run(base_url))
        except Exception as exc:
            logger.error("Crawl failed: %s", exc)
            raise

    def inconsistencies(self, base_url: str) -> List[Page]:
        """Страницы последнего снимка с тегами согласованности данных или вне sitemap."""
        latest = latest_snapshot(self.store.get(base_url))
        return sorted(
            (p for p in latest.pages if p.issues & CONSISTENCY_TAGS),
            key=lambda p: p.url,
        )
