# File: seo_scout/issues/detector.py
"""seo_scout.issues.detector: Правила on-page SEO и проверки согласованности данных.

Все группы правил независимы; результат зависит только от страницы и её DOM,
поэтому повторный вызов :func:`detect` даёт то же множество тегов.
"""

from __future__ import annotations

import re
from typing import FrozenSet, Optional, Protocol, Set

from bs4 import BeautifulSoup

from seo_scout.config import ConsistencyRules
from seo_scout.issues.episodes import EpisodeKind, parse_episodes, parse_season
from seo_scout.issues.tags import IssueTag
from seo_scout.parser.html_parser import element_text

__all__ = ["detect"]

TITLE_MAX_LENGTH = 70
DESCRIPTION_MIN_LENGTH = 110
DESCRIPTION_MAX_LENGTH = 160
H1_MAX_LENGTH = 70
MIN_INCOMING_LINKS = 2
OPEN_GRAPH_REQUIRED = frozenset({"og:title", "og:type", "og:image", "og:url"})


class AuditedPage(Protocol):
    url: str
    title: str
    description: str
    content: str
    in_sitemap: Optional[bool]
    incoming_links: FrozenSet[str]


def _title_issues(page: AuditedPage) -> Set[IssueTag]:
    issues: Set[IssueTag] = set()
    if not page.title.strip():
        issues.add(IssueTag.TITLE_EMPTY)
    if len(page.title) > TITLE_MAX_LENGTH:
        issues.add(IssueTag.TITLE_TOO_LONG)
    return issues


def _description_issues(page: AuditedPage) -> Set[IssueTag]:
    issues: Set[IssueTag] = set()
    if not page.description.strip():
        issues.add(IssueTag.DESCRIPTION_EMPTY)
    if len(page.description) < DESCRIPTION_MIN_LENGTH:
        issues.add(IssueTag.DESCRIPTION_TOO_SHORT)
    if len(page.description) > DESCRIPTION_MAX_LENGTH:
        issues.add(IssueTag.DESCRIPTION_TOO_LONG)
    return issues


def _content_issues(page: AuditedPage, dom: BeautifulSoup) -> Set[IssueTag]:
    issues: Set[IssueTag] = set()
    if not page.content.strip():
        issues.add(IssueTag.CONTENT_EMPTY)

    headings = [element_text(h1) for h1 in dom.select("h1")]
    if not headings or any(not text for text in headings):
        issues.add(IssueTag.H1_MISSING)
    if len(headings) > 1:
        issues.add(IssueTag.MULTIPLE_H1)
    if any(len(text) > H1_MAX_LENGTH for text in headings):
        issues.add(IssueTag.H1_TOO_LONG)
    return issues


def _open_graph_issues(dom: BeautifulSoup) -> Set[IssueTag]:
    properties = {meta.get("property") for meta in dom.select('meta[property^="og:"]')}
    if not OPEN_GRAPH_REQUIRED <= properties:
        return {IssueTag.OPEN_GRAPH_TAGS_INCOMPLETE}
    return set()


def _link_issues(page: AuditedPage) -> Set[IssueTag]:
    issues: Set[IssueTag] = set()
    if len(page.incoming_links) < MIN_INCOMING_LINKS:
        issues.add(IssueTag.INCOMING_LINKS_TOO_FEW)
    # None: the sitemap was not consulted for this crawl
    if page.in_sitemap is False:
        issues.add(IssueTag.NOT_IN_SITEMAP)
    return issues


def _data_consistency_issues(
    page: AuditedPage, dom: BeautifulSoup, rules: ConsistencyRules
) -> Set[IssueTag]:
    if not re.search(rules.catalog_path_pattern, page.url):
        return set()

    issues: Set[IssueTag] = set()
    season = parse_season(dom, rules)
    if season is not None and season > rules.max_season:
        issues.add(IssueTag.DATA_INCONSISTENCY_SEASON)

    episodes = parse_episodes(dom, rules)
    if not episodes:
        issues.add(IssueTag.CONTENT_EMPTY)
        return issues

    keys = [e.key for e in episodes if e.kind is EpisodeKind.EPISODE]
    if any(prev > cur for prev, cur in zip(keys, keys[1:])):
        issues.add(IssueTag.DATA_INCONSISTENCY)

    for episode in episodes:
        if episode.kind is EpisodeKind.SUMMARY:
            continue
        texts = (episode.title or "", episode.description or "")
        if any("recap" in text.lower() for text in texts):
            issues.add(IssueTag.DATA_INCONSISTENCY_SUMMARY)
            break
    return issues


def detect(
    page: AuditedPage, dom: BeautifulSoup, rules: Optional[ConsistencyRules] = None
) -> FrozenSet[IssueTag]:
    """Возвращает множество тегов проблем для страницы и её разобранной разметки."""
    rules = rules or ConsistencyRules()
    return frozenset(
        _title_issues(page)
        | _description_issues(page)
        | _content_issues(page, dom)
        | _open_graph_issues(dom)
        | _link_issues(page)
        | _data_consistency_issues(page, dom, rules)
    )
