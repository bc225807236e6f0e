"""
Загрузчик настроек калькулятора.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .model import CalcConfig, ConfigError, DEFAULT_CONFIG
from .paths import calc_path

_LOG = logging.getLogger("kcalc.config")

_yaml = YAML(typ="safe")


def _read_yaml_map(path: Path) -> dict:
    """Читает YAML файл и возвращает словарь."""
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"YAML must be a mapping: {path}")
    return raw


def load_config(root: Path) -> CalcConfig:
    """
    Загружает настройки из kcalc-cfg/calc.yaml.

    Args:
        root: Каталог, в котором ищется kcalc-cfg/

    Returns:
        Настройки; значения по умолчанию, если файла нет
    """
    path = calc_path(root)
    if not path.is_file():
        _LOG.debug("No settings file at %s, using defaults", path)
        return DEFAULT_CONFIG

    config = CalcConfig.from_dict(_read_yaml_map(path), source=path.name)
    _LOG.debug("Loaded settings from %s: %s", path, config)
    return config


__all__ = ["load_config"]
