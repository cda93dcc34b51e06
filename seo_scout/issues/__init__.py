"""seo_scout.issues: Детектор SEO-проблем и проверки данных каталога."""

from .detector import detect
from .episodes import Episode, EpisodeKind, parse_episodes, parse_season
from .tags import CONSISTENCY_TAGS, IssueTag

__all__ = [
    "CONSISTENCY_TAGS",
    "Episode",
    "EpisodeKind",
    "IssueTag",
    "detect",
    "parse_episodes",
    "parse_season",
]
