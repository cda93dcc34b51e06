# File: tests/conftest.py
from collections.abc import AsyncIterator
from typing import Optional

import pytest
from aiohttp import web
from bs4 import BeautifulSoup

from seo_scout.config import AuditConfig
from seo_scout.crawler.models import Page, SiteHistory, Snapshot

GOOD_DESCRIPTION = "d" * 130


@pytest.fixture()
def basic_config(tmp_path) -> AuditConfig:
    """
    Return a fast AuditConfig for crawler tests (no pacing delay).
    """
    return AuditConfig(
        user_agent="TestAgent/1.0",
        timeout=5.0,
        crawl_delay=0,
        use_sitemap=False,
        history_file=tmp_path / "history.json.gz",
    )


def html_page(
    *,
    title: str = "Title",
    description: Optional[str] = GOOD_DESCRIPTION,
    body: str = "<h1>Heading</h1><p>Some text</p>",
    og: bool = True,
) -> str:
    """Build a small HTML document; by default it passes every on-page rule."""
    head = f"<title>{title}</title>"
    if description is not None:
        head += f'<meta name="description" content="{description}">'
    if og:
        head += "".join(
            f'<meta property="og:{name}" content="x">' for name in ("title", "type", "image", "url")
        )
    return f"<html><head>{head}</head><body>{body}</body></html>"


def soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def make_page(url: str = "https://example.com", **kwargs) -> Page:
    defaults = dict(
        title="Title",
        description=GOOD_DESCRIPTION,
        links=frozenset(),
        content="some words here",
        response_time=100,
        in_sitemap=True,
        incoming_links=frozenset({"https://example.com/a", "https://example.com/b"}),
    )
    defaults.update(kwargs)
    return Page(url=url, **defaults)


def make_history(base_url: str, *snapshots: Snapshot) -> SiteHistory:
    return SiteHistory(base_url, tuple(snapshots))


async def serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()
