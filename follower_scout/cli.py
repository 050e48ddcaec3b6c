# === FILE: follower_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа FollowerScout для командной строки.

Команды:
  lookup    Загрузить страницу профиля и вывести число подписчиков в JSON
  extract   Прогнать экстрактор по сохранённому HTML-файлу
  serve     Запустить HTTP-эндпоинт
  config    Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (только stderr, если не указан)
  --log-format FORMAT Формат логирования

Команда lookup опции:
  --debug             Добавить URL, размер страницы и фрагмент HTML в ответ
  --json PATH         Сохранить JSON-ответ в файл
  --html PATH         Сохранить HTML-бейдж в файл
  --template DIR      Папка с Jinja2-шаблонами
  --pretty            Преформатировать JSON-вывод (отступ 2)

Пример:
  follower-scout lookup @boy.throb --pretty --html reports/badge.html
"""
import asyncio
import json
import sys
from pathlib import Path

import click

from follower_scout import __version__
from follower_scout.config import load_config
from follower_scout.extractor import extract
from follower_scout.logger import DEFAULT_FORMAT, init_logging
from follower_scout.report.html_report import render_html
from follower_scout.report.json_report import render_json
from follower_scout.server import run_server
from follower_scout.service import lookup_followers, profile_url

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg="red", err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, "--version", "-v", message="FollowerScout, version %(version)s")
@click.option(
    "--config", "-c", "config_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Путь к файлу конфигурации YAML или JSON.",
)
@click.option(
    "--log-level", "log_level",
    default="INFO", show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    help="Уровень логирования",
)
@click.option(
    "--log-file", "log_file",
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help="Путь к файлу логов (только stderr, если не указан)",
)
@click.option(
    "--log-format", "log_format",
    default=DEFAULT_FORMAT,
    show_default=True,
    help="Строка формата для логов",
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """Группа команд FollowerScout CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format,
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f"Ошибка загрузки конфигурации: {e}")
    ctx.ensure_object(dict)
    ctx.obj["config"] = cfg


@cli.command("lookup", context_settings=CONTEXT_SETTINGS)
@click.argument("username", required=False)
@click.option("--debug", is_flag=True, help="Добавить отладочные поля в ответ")
@click.option(
    "--json", "-j", "json_output",
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help="Сохранить JSON-ответ в файл",
)
@click.option(
    "--html", "-h", "html_output",
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help="Сохранить HTML-бейдж в файл",
)
@click.option(
    "--template", "-t", "template_dir",
    default="templates",
    show_default=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Папка с Jinja2-шаблонами",
)
@click.option("--pretty", is_flag=True, help="Преформатировать JSON-вывод (отступ 2)")
@click.pass_context
def lookup(ctx, username, debug, json_output, html_output, template_dir, pretty):
    """Узнать число подписчиков USERNAME (профиль по умолчанию, если не указан)."""
    cfg = ctx.obj["config"]
    result = asyncio.run(lookup_followers(cfg, username, debug=debug))

    # Если не сохраняем в файл — печатаем в stdout
    if not json_output and not html_output:
        click.echo(json.dumps(result.to_payload(), ensure_ascii=False, indent=2 if pretty else None))
        return

    # JSON-ответ
    if json_output:
        try:
            saved_json = render_json(result, json_output)
            click.echo(f"JSON report: {saved_json}")
        except OSError as e:
            print_error(f"Ошибка при сохранении JSON: {e}")

    # HTML-бейдж
    if html_output:
        try:
            link = profile_url(cfg, result.username)
            saved_html = render_html(result, template_dir, html_output, profile_url=link)
            click.echo(f"HTML report: {saved_html}")
        except Exception as e:
            print_error(f"Ошибка при сохранении HTML: {e}")


@cli.command("extract", context_settings=CONTEXT_SETTINGS)
@click.argument("html_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--pretty", is_flag=True, help="Преформатировать JSON-вывод (отступ 2)")
def extract_file(html_file, pretty):
    """Извлечь число подписчиков из сохранённого HTML_FILE."""
    html = html_file.read_text(encoding="utf-8", errors="replace")
    result = extract(html)
    click.echo(json.dumps(result.as_dict(), indent=2 if pretty else None))


@cli.command("serve", context_settings=CONTEXT_SETTINGS)
@click.option("--host", default=None, help="Адрес для прослушивания (override server.host)")
@click.option("--port", default=None, type=int, help="Порт (override server.port)")
@click.pass_context
def serve(ctx, host, port):
    """Запустить HTTP-эндпоинт."""
    run_server(ctx.obj["config"], host=host, port=port)


@cli.command("config", context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj["config"]
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
