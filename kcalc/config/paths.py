from __future__ import annotations

from pathlib import Path

# Single source of truth for configuration directory structure.
CFG_DIR = "kcalc-cfg"
CALC_FILE = "calc.yaml"


def cfg_root(root: Path) -> Path:
    """Absolute path to the kcalc-cfg/ directory."""
    return (root / CFG_DIR).resolve()


def calc_path(root: Path) -> Path:
    """Path to the main settings file kcalc-cfg/calc.yaml."""
    return cfg_root(root) / CALC_FILE
