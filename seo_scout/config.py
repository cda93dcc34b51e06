# === FILE: seo_scout/config.py ===
"""
Модуль для загрузки и валидации конфигурации SeoScout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
import re
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

__all__ = ["ConsistencyRules", "AuditConfig", "load_config"]


class ConsistencyRules(BaseModel):
    """Селекторы и шаблоны для проверки согласованности страниц каталога."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    catalog_path_pattern: str = Field(
        "/animes/", description="Регулярное выражение для URL страниц каталога."
    )
    season_selector: str = Field(
        "button.dropdown-toggle", description="Элемент с текстом выбранного сезона."
    )
    row_selector: str = Field("p.text-muted.mb-0", description="Строки списка эпизодов.")
    block_selector: str = Field("div.card", description="Ближайший структурный блок строки.")
    title_selector: str = Field(".h6", description="Заголовок эпизода внутри блока.")
    description_selector: str = Field(
        ".card-text", description="Описание эпизода внутри блока."
    )
    max_season: int = Field(5, ge=1, description="Максимально правдоподобный номер сезона.")

    @field_validator("catalog_path_pattern")
    def _check_pattern(cls, v: str) -> str:
        try:
            re.compile(v)
        except re.error as exc:
            raise ValueError(f"Неправильное регулярное выражение {v!r}: {exc}") from exc
        return v


class AuditConfig(BaseModel):
    """Конфигурация одного запуска обхода и аудита."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    user_agent: str = Field("ahrefs-lite", min_length=1, description="Заголовок User-Agent.")
    timeout: float = Field(60.0, gt=0, description="Таймаут соединения и чтения (секунд).")
    crawl_delay: float = Field(0.25, ge=0, description="Пауза между запросами (секунд).")
    use_sitemap: bool = Field(True, description="Запрашивать sitemap.xml и отмечать страницы.")
    history_file: Path = Field(
        Path("crawl_history.json.gz"), description="Сжатый файл истории снимков."
    )
    consistency: ConsistencyRules = Field(default_factory=ConsistencyRules)


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None] = None) -> AuditConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект AuditConfig.
    Без явного пути берёт configs/default.yaml, если он есть, иначе значения по умолчанию.
    Явно указанный, но отсутствующий файл -> FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.is_file():
            return AuditConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    try:
        return AuditConfig(**data)
    except ValidationError:
        raise
