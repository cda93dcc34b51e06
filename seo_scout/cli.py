# === FILE: seo_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска SeoScout через командную строку.

Команды:
  crawl                  Обойти сайт, сохранить снимок, вывести итоги или разницу
  inconsistency-history  Страницы последнего снимка с проблемами данных или вне sitemap
  report                 Сохранить последний снимок в JSON и/или HTML
  config                 Показать текущую конфигурацию

Без команды CLI спрашивает URL сайта и имя команды.

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (только консоль, если не указан)

Дополнительно:
  --version, -v       Показать версию SeoScout

Пример:
  seo-scout crawl https://www.example.com
"""
import sys
from pathlib import Path
from typing import Optional

import click

from seo_scout import __version__
from seo_scout.config import AuditConfig, load_config
from seo_scout.engine import Engine
from seo_scout.exceptions import SeoScoutError
from seo_scout.logger import init_logging
from seo_scout.report import format_inconsistencies, format_summary, render_html, render_json

CONTEXT_SETTINGS = dict(help_option_names=["--help"])
PROMPT_COMMANDS = ("crawl", "inconsistency-history")


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def make_engine(config: AuditConfig) -> Engine:
    return Engine(config)


def _base_url(value: Optional[str]) -> str:
    url = value or click.prompt('Base URL')
    url = url.strip().rstrip('/')
    if not url.startswith(('http://', 'https://')):
        print_error(f'Некорректный URL: {url}')
    return url


@click.group(context_settings=CONTEXT_SETTINGS, invoke_without_command=True)
@click.version_option(__version__, '--version', '-v', message='SeoScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (только консоль, если не указан)'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file):
    """Группа команд SeoScout CLI."""
    init_logging(level=log_level, log_file=str(log_file) if log_file else None)
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg

    if ctx.invoked_subcommand is None:
        base_url = _base_url(None)
        command = click.prompt('Command', type=click.Choice(PROMPT_COMMANDS))
        target = crawl if command == 'crawl' else inconsistency_history
        ctx.invoke(target, base_url=base_url)


@cli.command('crawl', context_settings=CONTEXT_SETTINGS)
@click.argument('base_url', required=False)
@click.pass_context
def crawl(ctx, base_url):
    """Обойти сайт и сравнить снимок с предыдущим."""
    base_url = _base_url(base_url)
    engine = make_engine(ctx.obj['config'])
    click.echo(f'Crawling {base_url}')
    try:
        outcome = engine.start_crawl(base_url)
    except SeoScoutError as e:
        print_error(str(e))
    click.echo(format_summary(outcome.snapshot, outcome.summary))


@cli.command('inconsistency-history', context_settings=CONTEXT_SETTINGS)
@click.argument('base_url', required=False)
@click.pass_context
def inconsistency_history(ctx, base_url):
    """Показать страницы последнего снимка с проблемами согласованности данных."""
    base_url = _base_url(base_url)
    engine = make_engine(ctx.obj['config'])
    try:
        pages = engine.inconsistencies(base_url)
    except SeoScoutError as e:
        print_error(str(e))
    click.echo(format_inconsistencies(base_url, pages))


@cli.command('report', context_settings=CONTEXT_SETTINGS)
@click.argument('base_url')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить JSON-отчёт в файл'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить HTML-отчёт в файл'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Папка с Jinja2-шаблоном report.html.j2'
)
@click.pass_context
def report(ctx, base_url, json_output, html_output, template_dir):
    """Сохранить отчёт по последнему снимку сайта."""
    base_url = _base_url(base_url)
    engine = make_engine(ctx.obj['config'])
    try:
        history = engine.store.get(base_url)
    except SeoScoutError as e:
        print_error(str(e))

    if not json_output and not html_output:
        print_error('Укажите --json и/или --html')

    if json_output:
        try:
            saved_json = render_json(history, json_output)
            click.echo(f'JSON report: {saved_json}')
        except OSError as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(history, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}')
        except OSError as e:
            print_error(f'Ошибка при сохранении HTML: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
