# seo_scout/report/json_report.py

"""
Генерация JSON-отчёта для проекта SeoScout.

Сериализация последнего снимка истории сайта в файл.
"""
import json
from dataclasses import asdict
from pathlib import Path

from seo_scout.crawler.models import SiteHistory
from seo_scout.history import diff


def render_json(history: SiteHistory, output_path: Path | str) -> Path:
    """
    Сохраняет последний снимок history в формате JSON по указанному пути.

    :param history: история сайта хотя бы с одним снимком
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла

    Пример:
    ```python
    from seo_scout.report.json_report import render_json
    report_path = render_json(store.get("https://example.com"), 'reports/report.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    snapshot = history.latest
    summary = diff(history)
    data = {
        "base_url": history.base_url,
        "snapshots": len(history.snapshots),
        "summary": {"kind": type(summary).__name__, **asdict(summary)},
        **snapshot.to_dict(),
    }

    # Запись в файл с отступами и Unicode
    with output.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    return output
