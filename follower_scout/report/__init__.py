# File: follower_scout/report/__init__.py
"""follower_scout.report: Вывод результата поиска подписчиков (JSON и HTML-бейдж) для CLI."""

from follower_scout.report.html_report import BADGE_TEMPLATE, render_html
from follower_scout.report.json_report import render_json

__all__ = ["BADGE_TEMPLATE", "render_html", "render_json"]
