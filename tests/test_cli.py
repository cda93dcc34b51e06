# File: tests/test_cli.py
"""Тесты для CLI (`seo_scout/cli.py`) с использованием click.testing.CliRunner.
Проверяют команды `crawl`, `inconsistency-history`, `report`, `config`, `--version`,
интерактивный запуск без команды, а также коды возврата при ошибках.
"""
import importlib
import json

import pytest
from click.testing import CliRunner
from conftest import make_page
from seo_scout.cli import cli
from seo_scout.crawler.models import Snapshot
from seo_scout.engine import CrawlOutcome, Engine
from seo_scout.exceptions import PermissionDenied
from seo_scout.history import HistoryStore, diff
from seo_scout.issues import IssueTag

# seo_scout/__init__.py re-exports the `cli` group, shadowing the submodule attribute
cli_module = importlib.import_module("seo_scout.cli")

BASE = "https://example.com"


@pytest.fixture()
def config_file(tmp_path):
    cfg = tmp_path / "config.yaml"
    cfg.write_text(f"history_file: {tmp_path / 'history.json.gz'}\ncrawl_delay: 0\n", encoding="utf-8")
    return cfg


@pytest.fixture()
def store(tmp_path) -> HistoryStore:
    return HistoryStore(tmp_path / "history.json.gz")


@pytest.fixture()
def fake_crawl(monkeypatch, store):
    """Патчим Engine.start_crawl: снимок сохраняется без сетевых запросов."""
    calls = []

    def start_crawl(self, base_url):
        calls.append(base_url)
        page = make_page(base_url, issues=frozenset({IssueTag.H1_MISSING}))
        history = self.store.append(base_url, Snapshot(pages=(page,)))
        return CrawlOutcome(history=history, summary=diff(history))

    monkeypatch.setattr(Engine, "start_crawl", start_crawl)
    return calls


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "SeoScout" in result.output


def test_show_config(config_file, tmp_path):
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(config_file), "config"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["history_file"] == str(tmp_path / "history.json.gz")
    assert data["user_agent"] == "ahrefs-lite"


def test_first_crawl_prints_totals(config_file, fake_crawl):
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(config_file), "crawl", BASE + "/"])
    assert result.exit_code == 0, result.output
    assert fake_crawl == [BASE]
    assert f"Page: {BASE}" in result.output
    assert "Issues: H1_MISSING" in result.output
    assert "Total pages: 1" in result.output


def test_second_crawl_prints_delta(config_file, fake_crawl):
    runner = CliRunner()
    runner.invoke(cli, ["--config", str(config_file), "crawl", BASE])
    result = runner.invoke(cli, ["--config", str(config_file), "crawl", BASE])
    assert result.exit_code == 0, result.output
    assert "New words: 0" in result.output
    assert "New pages: 0" in result.output
    assert "New response time: 0ms" in result.output


def test_crawl_prompts_for_url(config_file, fake_crawl):
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(config_file), "crawl"], input=f"{BASE}\n")
    assert result.exit_code == 0, result.output
    assert fake_crawl == [BASE]


def test_crawl_permission_denied_exits_1(config_file, monkeypatch):
    def refuse(self, base_url):
        raise PermissionDenied(base_url, "robots.txt disallows the whole site")

    monkeypatch.setattr(Engine, "start_crawl", refuse)
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(config_file), "crawl", BASE])
    assert result.exit_code == 1
    assert "not allowed" in result.output


def test_invalid_url_exits_1(config_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(config_file), "crawl", "example.com"])
    assert result.exit_code == 1


def test_inconsistency_history_without_history_exits_1(config_file):
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(config_file), "inconsistency-history", BASE])
    assert result.exit_code == 1
    assert "No crawl history" in result.output


def test_inconsistency_history_lists_pages(config_file, store):
    store.append(
        BASE,
        Snapshot(
            pages=(
                make_page(BASE),
                make_page(f"{BASE}/animes/x", issues=frozenset({IssueTag.DATA_INCONSISTENCY_SEASON})),
                make_page(f"{BASE}/hidden", in_sitemap=False, issues=frozenset({IssueTag.NOT_IN_SITEMAP})),
                make_page(f"{BASE}/long", issues=frozenset({IssueTag.TITLE_TOO_LONG})),
            )
        ),
    )
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(config_file), "inconsistency-history", BASE])
    assert result.exit_code == 0, result.output
    assert f"{BASE}/animes/x: DATA_INCONSISTENCY_SEASON" in result.output
    assert f"{BASE}/hidden: NOT_IN_SITEMAP" in result.output
    assert f"{BASE}/long" not in result.output


def test_interactive_prompt_runs_selected_command(config_file, fake_crawl):
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(config_file)], input=f"{BASE}\ncrawl\n")
    assert result.exit_code == 0, result.output
    assert fake_crawl == [BASE]
    assert "Total pages: 1" in result.output


def test_report_writes_json_and_html(config_file, store, tmp_path):
    store.append(BASE, Snapshot(pages=(make_page(BASE, issues=frozenset({IssueTag.MULTIPLE_H1})),)))
    out_json = tmp_path / "out" / "report.json"
    out_html = tmp_path / "out" / "report.html"

    runner = CliRunner()
    result = runner.invoke(
        cli,
        ["--config", str(config_file), "report", BASE, "--json", str(out_json), "--html", str(out_html)],
    )
    assert result.exit_code == 0, result.output

    data = json.loads(out_json.read_text(encoding="utf-8"))
    assert data["base_url"] == BASE
    assert data["summary"]["kind"] == "SnapshotTotals"
    assert data["pages"][0]["issues"] == ["MULTIPLE_H1"]

    html = out_html.read_text(encoding="utf-8")
    assert BASE in html
    assert "MULTIPLE_H1" in html


def test_report_requires_an_output(config_file, store):
    store.append(BASE, Snapshot(pages=(make_page(BASE),)))
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(config_file), "report", BASE])
    assert result.exit_code == 1


def test_engine_factory_uses_config(config_file, tmp_path):
    cfg = cli_module.load_config(config_file)
    engine = cli_module.make_engine(cfg)
    assert engine.store.path == tmp_path / "history.json.gz"
