# File: seo_scout/report/console.py
"""seo_scout.report.console: Текстовые сводки для вывода в терминал."""

from __future__ import annotations

from typing import Iterable, List, Union

from seo_scout.crawler.models import Page, Snapshot
from seo_scout.history import SnapshotDelta, SnapshotTotals


def _issues(page: Page) -> str:
    return ", ".join(sorted(tag.value for tag in page.issues))


def page_lines(page: Page) -> List[str]:
    return [
        f"Page: {page.url}",
        f"Title: {page.title}",
        f"Description: {page.description}",
        f"Response time: {page.response_time}ms",
        f"Incoming links: {len(page.incoming_links)}",
        f"Issues: {_issues(page)}",
    ]


def format_totals(snapshot: Snapshot, totals: SnapshotTotals) -> str:
    """Полный отчёт первого обхода: все страницы, затем итоги."""
    lines: List[str] = []
    for page in sorted(snapshot.pages, key=lambda p: p.url):
        lines.extend(page_lines(page))
        lines.append("")
    lines += [
        f"Total pages: {totals.page_count}",
        f"Total words: {totals.word_count}",
        f"Total issues: {totals.issue_count}",
        f"Average response time: {totals.avg_response_time}ms",
        f"Min response time: {totals.min_response_time}ms",
        f"Max response time: {totals.max_response_time}ms",
    ]
    return "\n".join(lines)


def format_delta(delta: SnapshotDelta) -> str:
    values = delta.formatted()
    return "\n".join(
        [
            f"New words: {values['words']}",
            f"New pages: {values['pages']}",
            f"New issues: {values['issues']}",
            f"New response time: {values['response_time']}",
        ]
    )


def format_summary(snapshot: Snapshot, summary: Union[SnapshotDelta, SnapshotTotals]) -> str:
    if isinstance(summary, SnapshotDelta):
        return format_delta(summary)
    return format_totals(snapshot, summary)


def format_inconsistencies(base_url: str, pages: Iterable[Page]) -> str:
    pages = list(pages)
    if not pages:
        return f"No data inconsistency found for {base_url}"
    return "\n".join(f"{page.url}: {_issues(page)}" for page in pages)
