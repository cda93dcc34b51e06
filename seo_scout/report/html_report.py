# File: seo_scout/report/html_report.py
"""seo_scout.report.html_report: Генерация HTML-отчёта с помощью Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from seo_scout.crawler.models import SiteHistory
from seo_scout.history import diff

DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


def render_html(
    history: SiteHistory,
    template_dir: Optional[Union[Path, str]],
    output_path: Union[Path, str],
) -> Path:
    """Рендерит HTML-отчёт по последнему снимку и сохраняет его по указанному пути.

    Args:
        history: история сайта хотя бы с одним снимком.
        template_dir: директория с шаблоном ``report.html.j2``; None — встроенный шаблон.
        output_path: путь к итоговому HTML-файлу.

    Returns:
        Path до сохранённого HTML-файла.

    Пример:
    ```python
    from seo_scout.report.html_report import render_html
    html_path = render_html(history, template_dir=None, output_path='reports/report.html')
    ```
    """
    template_dir = Path(template_dir) if template_dir else DEFAULT_TEMPLATE_DIR
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    template = env.get_template("report.html.j2")

    snapshot = history.latest
    context: dict[str, Any] = {
        "base_url": history.base_url,
        "taken_at": snapshot.taken_at,
        "snapshot_count": len(history.snapshots),
        "pages": sorted(snapshot.pages, key=lambda p: p.url),
        "summary": diff(history),
    }

    html_content = template.render(**context)
    output_path.write_text(html_content, encoding="utf-8")

    return output_path
