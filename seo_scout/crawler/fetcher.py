# seo_scout/crawler/fetcher.py
"""
Fetcher module: a single GET with fixed timeouts and redirect following.

The crawl engine talks to the network only through :meth:`Fetcher.fetch`,
which returns status, body text and the measured response time. Status
checking is left to the caller; transport errors become :class:`FetchFailure`.
"""
from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Mapping, Optional

from aiohttp import ClientError, ClientSession, ClientTimeout

from seo_scout.config import AuditConfig
from seo_scout.exceptions import FetchFailure
from seo_scout.logger import get_logger

__all__ = ["FetchResponse", "Fetcher"]

log = get_logger("fetcher")


@dataclass(frozen=True, slots=True)
class FetchResponse:
    """Result of one GET request."""

    url: str
    status: int
    text: str
    response_time: int

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class Fetcher:
    """Owns the aiohttp session for the duration of one crawl."""

    def __init__(self, config: AuditConfig, session: Optional[ClientSession] = None) -> None:
        self.config = config
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self) -> Fetcher:
        if self.session is None:
            timeout = ClientTimeout(
                connect=self.config.timeout,
                sock_connect=self.config.timeout,
                sock_read=self.config.timeout,
            )
            self.session = ClientSession(
                timeout=timeout,
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    async def fetch(self, url: str, headers: Optional[Mapping[str, str]] = None) -> FetchResponse:
        """GET *url*, following redirects. Raises FetchFailure on transport errors."""
        if not self.session:
            raise RuntimeError("Session not initialized")
        start = time.monotonic()
        try:
            async with self.session.get(url, headers=headers, allow_redirects=True) as resp:
                text = await resp.text(errors="replace")
                status = resp.status
        except (ClientError, asyncio.TimeoutError) as exc:
            log.warning("GET %s failed: %s", url, exc)
            raise FetchFailure(url, detail=str(exc) or type(exc).__name__) from exc
        elapsed = int((time.monotonic() - start) * 1000)
        log.debug("GET %s -> %s in %d ms", url, status, elapsed)
        return FetchResponse(url=url, status=status, text=text, response_time=elapsed)
