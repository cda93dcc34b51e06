# File: seo_scout/exceptions.py
"""seo_scout.exceptions: Ошибки, прерывающие цикл обхода или работу с историей."""

from __future__ import annotations

from typing import Optional

__all__ = [
    "SeoScoutError",
    "PermissionDenied",
    "FetchFailure",
    "SitemapUnavailable",
    "HistoryNotFound",
    "HistoryCorrupted",
]


class SeoScoutError(Exception):
    """Базовый класс для всех ошибок SeoScout."""


class PermissionDenied(SeoScoutError):
    """robots.txt отсутствует или запрещает обход всего сайта."""

    def __init__(self, base_url: str, reason: str) -> None:
        super().__init__(f"Crawling {base_url} is not allowed: {reason}")
        self.base_url = base_url
        self.reason = reason


class FetchFailure(SeoScoutError):
    """Запрос завершился не-2xx статусом или ошибкой транспорта."""

    def __init__(self, url: str, status: Optional[int] = None, detail: str = "") -> None:
        if status is not None:
            message = f"GET {url} returned HTTP {status}"
        else:
            message = f"GET {url} failed: {detail or 'transport error'}"
        super().__init__(message)
        self.url = url
        self.status = status


class SitemapUnavailable(SeoScoutError):
    """sitemap.xml запрошен, но недоступен."""

    def __init__(self, url: str, detail: str) -> None:
        super().__init__(f"Sitemap {url} is unavailable: {detail}")
        self.url = url


class HistoryNotFound(SeoScoutError):
    """Для сайта ещё нет ни одного сохранённого снимка."""

    def __init__(self, base_url: str) -> None:
        super().__init__(f"No crawl history found for {base_url}")
        self.base_url = base_url


class HistoryCorrupted(SeoScoutError):
    """Файл истории не удаётся распаковать или разобрать."""
