# File: tests/test_history.py
import gzip
import json
from datetime import datetime, timezone

import pytest
from conftest import make_history, make_page
from seo_scout.crawler.models import Page, Snapshot
from seo_scout.exceptions import HistoryCorrupted, HistoryNotFound
from seo_scout.history import HistoryStore, SnapshotDelta, SnapshotTotals, diff, format_signed
from seo_scout.issues import IssueTag

BASE = "https://example.com"


def words(n: int) -> str:
    return " ".join(["word"] * n)


def snapshot(*pages: Page, day: int = 1) -> Snapshot:
    return Snapshot(pages=pages, taken_at=datetime(2024, 5, day, tzinfo=timezone.utc))


@pytest.fixture()
def store(tmp_path) -> HistoryStore:
    return HistoryStore(tmp_path / "data" / "history.json.gz")


@pytest.mark.parametrize("value,expected", [(200, "+200"), (0, "0"), (-200, "-200")])
def test_format_signed(value, expected):
    assert format_signed(value) == expected


def test_word_delta_positive_and_negative():
    small = snapshot(make_page(content=words(1000)))
    large = snapshot(make_page(content=words(1200)), day=2)

    grow = diff(make_history(BASE, small, large))
    assert isinstance(grow, SnapshotDelta)
    assert grow.word_delta == 200
    assert grow.formatted()["words"] == "+200"

    shrink = diff(make_history(BASE, large, small))
    assert shrink.word_delta == -200
    assert shrink.formatted()["words"] == "-200"


def test_delta_compares_latest_two_only():
    first = snapshot(make_page(response_time=900), day=1)
    second = snapshot(
        make_page(response_time=100),
        make_page(f"{BASE}/a", response_time=300, issues=frozenset({IssueTag.TITLE_EMPTY})),
        day=2,
    )
    third = snapshot(
        make_page(response_time=100),
        make_page(f"{BASE}/a", response_time=200),
        make_page(f"{BASE}/b", response_time=300, issues=frozenset({IssueTag.H1_MISSING, IssueTag.MULTIPLE_H1})),
        day=3,
    )
    delta = diff(make_history(BASE, first, second, third))

    assert delta == SnapshotDelta(
        word_delta=3,
        page_delta=1,
        issue_delta=1,
        avg_response_time_delta=0,
    )
    assert delta.formatted() == {
        "words": "+3",
        "pages": "+1",
        "issues": "+1",
        "response_time": "0ms",
    }


def test_single_snapshot_reports_totals():
    only = snapshot(
        make_page(response_time=100, content=words(5)),
        make_page(f"{BASE}/a", response_time=250, issues=frozenset({IssueTag.H1_MISSING})),
    )
    totals = diff(make_history(BASE, only))
    assert totals == SnapshotTotals(
        page_count=2,
        word_count=8,
        issue_count=1,
        avg_response_time=175,
        min_response_time=100,
        max_response_time=250,
    )


def test_empty_history_has_nothing_to_diff():
    with pytest.raises(HistoryNotFound):
        diff(make_history(BASE))


def test_snapshot_rejects_duplicate_urls():
    with pytest.raises(ValueError):
        Snapshot(pages=(make_page(), make_page()))


def test_append_creates_and_extends_history(store):
    assert store.load_history() == []

    first = store.append(BASE + "/", snapshot(make_page(), day=1))
    assert first.base_url == BASE
    assert len(first.snapshots) == 1

    store.append("https://other.org", snapshot(make_page("https://other.org"), day=1))
    second = store.append(BASE, snapshot(make_page(), make_page(f"{BASE}/a"), day=2))
    assert len(second.snapshots) == 2

    loaded = store.load_history()
    assert [h.base_url for h in loaded] == [BASE, "https://other.org"]
    assert [len(s) for s in loaded[0].snapshots] == [1, 2]
    assert loaded[0].snapshots[0].taken_at < loaded[0].snapshots[1].taken_at


def test_round_trip_keeps_page_data(store):
    page = make_page(
        f"{BASE}/animes/x",
        links=frozenset({"/", "/b"}),
        in_sitemap=False,
        issues=frozenset({IssueTag.NOT_IN_SITEMAP, IssueTag.DATA_INCONSISTENCY}),
    )
    store.append(BASE, snapshot(page))
    assert store.get(BASE).latest.pages == (page,)


def test_file_is_gzip_json_without_dom(store):
    store.append(BASE, snapshot(make_page()))
    with gzip.open(store.path, "rt", encoding="utf-8") as fh:
        raw = json.load(fh)
    page = raw[0]["snapshots"][0]["pages"][0]
    assert raw[0]["base_url"] == BASE
    assert "dom" not in page
    assert page["url"] == BASE


def test_failed_transaction_leaves_file_untouched(store):
    store.append(BASE, snapshot(make_page()))
    before = store.path.read_bytes()

    with pytest.raises(RuntimeError):
        with store.transaction() as histories:
            histories.clear()
            raise RuntimeError("boom")

    assert store.path.read_bytes() == before
    assert list(store.path.parent.glob("*.tmp")) == []


def test_get_unknown_site(store):
    store.append(BASE, snapshot(make_page()))
    with pytest.raises(HistoryNotFound):
        store.get("https://unknown.org")


def test_corrupted_file(store):
    store.path.parent.mkdir(parents=True)
    store.path.write_bytes(b"definitely not gzip")
    with pytest.raises(HistoryCorrupted):
        store.load_history()
