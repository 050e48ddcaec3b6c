# follower_scout/report/json_report.py

"""
Генерация JSON-ответа для проекта FollowerScout.

Сохраняет в файл то же тело, что отдаёт HTTP-эндпоинт, плюс имя пользователя.
"""
import json
from pathlib import Path

from follower_scout.service import FollowerLookup


def render_json(lookup: FollowerLookup, output_path: Path | str) -> Path:
    """
    Сохраняет результат lookup в формате JSON по указанному пути.

    :param lookup: результат FollowerService.lookup
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла
    """
    # Приводим к Path
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    data = {"username": lookup.username, **lookup.to_payload()}

    with output.open("w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    return output
