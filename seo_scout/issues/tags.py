"""Closed set of issue tags attached to audited pages."""
from __future__ import annotations

from enum import Enum


class IssueTag(str, Enum):
    TITLE_EMPTY = "TITLE_EMPTY"
    TITLE_TOO_LONG = "TITLE_TOO_LONG"
    DESCRIPTION_EMPTY = "DESCRIPTION_EMPTY"
    DESCRIPTION_TOO_SHORT = "DESCRIPTION_TOO_SHORT"
    DESCRIPTION_TOO_LONG = "DESCRIPTION_TOO_LONG"
    CONTENT_EMPTY = "CONTENT_EMPTY"
    H1_MISSING = "H1_MISSING"
    MULTIPLE_H1 = "MULTIPLE_H1"
    H1_TOO_LONG = "H1_TOO_LONG"
    OPEN_GRAPH_TAGS_INCOMPLETE = "OPEN_GRAPH_TAGS_INCOMPLETE"
    INCOMING_LINKS_TOO_FEW = "INCOMING_LINKS_TOO_FEW"
    NOT_IN_SITEMAP = "NOT_IN_SITEMAP"
    DATA_INCONSISTENCY = "DATA_INCONSISTENCY"
    DATA_INCONSISTENCY_SEASON = "DATA_INCONSISTENCY_SEASON"
    DATA_INCONSISTENCY_SUMMARY = "DATA_INCONSISTENCY_SUMMARY"

    def __str__(self) -> str:
        return self.value


# Tags reported by the ``inconsistency-history`` command.
CONSISTENCY_TAGS = frozenset(
    {
        IssueTag.DATA_INCONSISTENCY,
        IssueTag.DATA_INCONSISTENCY_SEASON,
        IssueTag.DATA_INCONSISTENCY_SUMMARY,
        IssueTag.NOT_IN_SITEMAP,
    }
)
