"""
Data models for the SeoScout crawler.

A crawl runs in two phases: the frontier loop produces :class:`CrawledPage`
records, post-processing turns them into annotated :class:`Page` records that
are frozen inside a :class:`Snapshot`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, FrozenSet, Optional, Tuple

if TYPE_CHECKING:
    from bs4 import BeautifulSoup

    from seo_scout.issues import IssueTag


@dataclass(frozen=True, slots=True)
class CrawledPage:
    """Page as extracted during the crawl, before any link-graph or issue data exists."""

    url: str
    title: str
    description: str
    links: FrozenSet[str]
    content: str = ""
    response_time: int = 0
    in_sitemap: Optional[bool] = None
    # transient: needed by the issue detector, never persisted
    dom: Optional["BeautifulSoup"] = field(default=None, repr=False, compare=False, hash=False)


@dataclass(frozen=True, slots=True)
class Page:
    """Annotated page stored inside a snapshot."""

    url: str
    title: str
    description: str
    links: FrozenSet[str]
    content: str = ""
    response_time: int = 0
    in_sitemap: Optional[bool] = None
    incoming_links: FrozenSet[str] = frozenset()
    issues: FrozenSet["IssueTag"] = frozenset()

    @property
    def word_count(self) -> int:
        return len(self.content.split())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "title": self.title,
            "description": self.description,
            "links": sorted(self.links),
            "content": self.content,
            "response_time": self.response_time,
            "in_sitemap": self.in_sitemap,
            "incoming_links": sorted(self.incoming_links),
            "issues": sorted(tag.name for tag in self.issues),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Page:
        from seo_scout.issues import IssueTag

        return cls(
            url=data["url"],
            title=data.get("title", ""),
            description=data.get("description", ""),
            links=frozenset(data.get("links", ())),
            content=data.get("content", ""),
            response_time=int(data.get("response_time", 0)),
            in_sitemap=data.get("in_sitemap"),
            incoming_links=frozenset(data.get("incoming_links", ())),
            issues=frozenset(IssueTag[name] for name in data.get("issues", ())),
        )


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


@dataclass(frozen=True, slots=True)
class Snapshot:
    """One completed crawl of a site."""

    pages: Tuple[Page, ...]
    taken_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        urls = [p.url for p in self.pages]
        if len(urls) != len(set(urls)):
            raise ValueError("Snapshot contains duplicate page URLs")

    def __len__(self) -> int:
        return len(self.pages)

    @property
    def word_count(self) -> int:
        return sum(p.word_count for p in self.pages)

    @property
    def issue_count(self) -> int:
        return sum(len(p.issues) for p in self.pages)

    @property
    def average_response_time(self) -> int:
        if not self.pages:
            return 0
        return sum(p.response_time for p in self.pages) // len(self.pages)

    def page(self, url: str) -> Optional[Page]:
        return next((p for p in self.pages if p.url == url), None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "taken_at": self.taken_at.isoformat(),
            "pages": [p.to_dict() for p in sorted(self.pages, key=lambda p: p.url)],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Snapshot:
        return cls(
            pages=tuple(Page.from_dict(p) for p in data.get("pages", ())),
            taken_at=datetime.fromisoformat(data["taken_at"]),
        )


@dataclass(frozen=True, slots=True)
class SiteHistory:
    """Chronological, append-only list of snapshots for one base URL."""

    base_url: str
    snapshots: Tuple[Snapshot, ...] = ()

    @property
    def latest(self) -> Optional[Snapshot]:
        return self.snapshots[-1] if self.snapshots else None

    @property
    def previous(self) -> Optional[Snapshot]:
        return self.snapshots[-2] if len(self.snapshots) > 1 else None

    def appended(self, snapshot: Snapshot) -> SiteHistory:
        return SiteHistory(self.base_url, self.snapshots + (snapshot,))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "base_url": self.base_url,
            "snapshots": [s.to_dict() for s in self.snapshots],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SiteHistory:
        return cls(
            base_url=data["base_url"],
            snapshots=tuple(Snapshot.from_dict(s) for s in data.get("snapshots", ())),
        )
