# File: seo_scout/issues/episodes.py
"""seo_scout.issues.episodes: Разбор списка эпизодов на страницах каталога."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Set

from bs4 import BeautifulSoup
from bs4.element import Tag

from seo_scout.config import ConsistencyRules
from seo_scout.parser.html_parser import element_text

__all__ = ["EpisodeKind", "Episode", "parse_season", "parse_episodes"]

_SEASON_RE = re.compile(r"Saison (\d+)")
_NUMBER_RE = re.compile(r"(Épisode récapitulatif|Épisode|Spécial|Film) (\d+)")


class EpisodeKind(str, Enum):
    EPISODE = "Épisode"
    SUMMARY = "Épisode récapitulatif"
    SPECIAL = "Spécial"
    FILM = "Film"


@dataclass(frozen=True, slots=True)
class Episode:
    """Строка списка эпизодов; существует только во время одной проверки."""

    season: int
    kind: EpisodeKind
    number: int
    title: Optional[str] = None
    description: Optional[str] = None

    @property
    def key(self) -> tuple[int, int]:
        return self.season, self.number


def _text(tag: Optional[Tag]) -> Optional[str]:
    if tag is None:
        return None
    text = element_text(tag)
    return text or None


def parse_season(dom: BeautifulSoup, rules: ConsistencyRules) -> Optional[int]:
    """Номер сезона из элемента выбора сезона, если он есть на странице."""
    text = _text(dom.select_one(rules.season_selector))
    if not text:
        return None
    match = _SEASON_RE.search(text)
    if match is None:
        return None
    return int(match.group(1))


def _nearest_block(row: Tag, blocks: Set[int]) -> Optional[Tag]:
    for parent in row.parents:
        if id(parent) in blocks:
            return parent
    return None


def parse_episodes(dom: BeautifulSoup, rules: ConsistencyRules) -> List[Episode]:
    """Эпизоды в порядке документа. Строки без сезона или номера пропускаются."""
    blocks = {id(block) for block in dom.select(rules.block_selector)}
    episodes: List[Episode] = []
    for row in dom.select(rules.row_selector):
        text = element_text(row)
        season = _SEASON_RE.search(text)
        number = _NUMBER_RE.search(text)
        if season is None or number is None:
            continue
        block = _nearest_block(row, blocks)
        episodes.append(
            Episode(
                season=int(season.group(1)),
                kind=EpisodeKind(number.group(1)),
                number=int(number.group(2)),
                title=_text(block.select_one(rules.title_selector)) if block else None,
                description=_text(block.select_one(rules.description_selector)) if block else None,
            )
        )
    return episodes
