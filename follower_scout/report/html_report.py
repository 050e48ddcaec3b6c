# File: follower_scout/report/html_report.py
"""follower_scout.report.html_report: HTML-бейдж с числом подписчиков на Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from follower_scout.service import FollowerLookup

BADGE_TEMPLATE = "badge.html.j2"


def _thousands(value: int) -> str:
    return f"{value:,}"


def render_html(
    lookup: FollowerLookup,
    template_dir: Union[Path, str],
    output_path: Union[Path, str],
    profile_url: str | None = None,
) -> Path:
    """Рендерит бейдж подписчиков для lookup и сохраняет его по указанному пути.

    Шаблон получает ``status``, чтобы показать найденное число (включая ноль),
    "нет данных" и ошибку загрузки тремя разными блоками.

    Args:
        lookup: результат поиска подписчиков.
        template_dir: директория с ``badge.html.j2``.
        output_path: путь к итоговому HTML-файлу.
        profile_url: необязательная ссылка на профиль.

    Returns:
        Path до сохранённого HTML-файла.
    """
    template_dir = Path(template_dir)
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    env.filters["thousands"] = _thousands
    template = env.get_template(BADGE_TEMPLATE)

    context: dict[str, Any] = {
        "username": lookup.username,
        "status": lookup.status.value,
        "followers": lookup.followers,
        "source": lookup.source,
        "note": lookup.note,
        "cached": lookup.cached,
        "profile_url": profile_url,
    }

    output_path.write_text(template.render(**context), encoding="utf-8")
    return output_path
