from __future__ import annotations

from .load import load_config
from .model import CalcConfig, ConfigError, DEFAULT_CONFIG
from .paths import cfg_root, calc_path

__all__ = ["load_config", "CalcConfig", "ConfigError", "DEFAULT_CONFIG", "cfg_root", "calc_path"]
