# File: seo_scout/history.py
"""seo_scout.history: Хранилище снимков обхода и сравнение двух последних запусков.

Вся история (все сайты) хранится в одном gzip-сжатом JSON-файле. Запись идёт
через :meth:`HistoryStore.transaction`: файл читается целиком, меняется в памяти
и атомарно заменяется через временный файл и ``os.replace``.
"""

from __future__ import annotations

import gzip
import json
import os
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Union

from seo_scout.crawler.link_extractor import normalize_url
from seo_scout.crawler.models import SiteHistory, Snapshot
from seo_scout.exceptions import HistoryCorrupted, HistoryNotFound
from seo_scout.logger import get_logger

__all__ = [
    "HistoryStore",
    "SnapshotDelta",
    "SnapshotTotals",
    "diff",
    "format_signed",
]

log = get_logger("history")


def format_signed(value: int) -> str:
    """``+200`` для положительных значений, иначе число как есть (``0``, ``-200``)."""
    return f"+{value}" if value > 0 else str(value)


@dataclass(frozen=True, slots=True)
class SnapshotDelta:
    """Разница между последним и предыдущим снимком (последний минус предыдущий)."""

    word_delta: int
    page_delta: int
    issue_delta: int
    avg_response_time_delta: int

    def formatted(self) -> dict[str, str]:
        return {
            "words": format_signed(self.word_delta),
            "pages": format_signed(self.page_delta),
            "issues": format_signed(self.issue_delta),
            "response_time": f"{format_signed(self.avg_response_time_delta)}ms",
        }


@dataclass(frozen=True, slots=True)
class SnapshotTotals:
    """Абсолютные показатели единственного снимка."""

    page_count: int
    word_count: int
    issue_count: int
    avg_response_time: int
    min_response_time: int
    max_response_time: int


def _totals(snapshot: Snapshot) -> SnapshotTotals:
    times = [p.response_time for p in snapshot.pages] or [0]
    return SnapshotTotals(
        page_count=len(snapshot),
        word_count=snapshot.word_count,
        issue_count=snapshot.issue_count,
        avg_response_time=snapshot.average_response_time,
        min_response_time=min(times),
        max_response_time=max(times),
    )


def diff(history: SiteHistory) -> Union[SnapshotDelta, SnapshotTotals]:
    """Сравнивает два последних снимка; при одном снимке возвращает абсолютные итоги."""
    latest, previous = history.latest, history.previous
    if latest is None:
        raise HistoryNotFound(history.base_url)
    if previous is None:
        return _totals(latest)
    return SnapshotDelta(
        word_delta=latest.word_count - previous.word_count,
        page_delta=len(latest) - len(previous),
        issue_delta=latest.issue_count - previous.issue_count,
        avg_response_time_delta=latest.average_response_time - previous.average_response_time,
    )


class HistoryStore:
    """Файл истории снимков; принадлежит одному процессу."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path).expanduser()

    # ------------------------------------------------------------------ read
    def _read(self) -> List[SiteHistory]:
        if not self.path.exists():
            return []
        try:
            with gzip.open(self.path, "rt", encoding="utf-8") as fh:
                raw = json.load(fh)
            return [SiteHistory.from_dict(entry) for entry in raw]
        except (OSError, EOFError, ValueError, KeyError, TypeError) as exc:
            raise HistoryCorrupted(f"Cannot read history file {self.path}: {exc}") from exc

    def load_history(self) -> List[SiteHistory]:
        """Все известные сайты с упорядоченными снимками."""
        return self._read()

    def get(self, base_url: str) -> SiteHistory:
        base = normalize_url(base_url)
        for history in self._read():
            if history.base_url == base and history.snapshots:
                return history
        raise HistoryNotFound(base)

    # ----------------------------------------------------------------- write
    def _write(self, histories: List[SiteHistory]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps([h.to_dict() for h in histories], ensure_ascii=False)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
        )
        try:
            with os.fdopen(fd, "wb") as raw_fh, gzip.GzipFile(
                filename=self.path.name, mode="wb", fileobj=raw_fh
            ) as gz:
                gz.write(payload.encode("utf-8"))
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    @contextmanager
    def transaction(self) -> Iterator[List[SiteHistory]]:
        """Читает всю историю, отдаёт её для изменения и атомарно записывает обратно.

        Если тело блока бросает исключение, файл на диске не меняется.
        """
        histories = self._read()
        yield histories
        self._write(histories)

    def append(self, base_url: str, snapshot: Snapshot) -> SiteHistory:
        """Добавляет снимок в историю сайта (создаёт историю при первом обходе)."""
        base = normalize_url(base_url)
        with self.transaction() as histories:
            for index, history in enumerate(histories):
                if history.base_url == base:
                    updated = history.appended(snapshot)
                    histories[index] = updated
                    break
            else:
                updated = SiteHistory(base, (snapshot,))
                histories.append(updated)
        log.info("Saved snapshot #%d for %s", len(updated.snapshots), base)
        return updated
