# File: seo_scout/report/__init__.py
"""seo_scout.report: Консольные сводки и экспорт отчётов (JSON и HTML) для CLI и тестов."""

from .console import format_inconsistencies, format_summary
from .html_report import render_html
from .json_report import render_json

__all__ = ["format_inconsistencies", "format_summary", "render_html", "render_json"]
