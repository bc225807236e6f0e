"""
Модель настроек калькулятора.
Загружается из kcalc-cfg/calc.yaml; все поля необязательны.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from ..errors import KCUserError
from ..formatting import DEFAULT_PRECISION
from ..recovery import DEFAULT_RECOVERY_DELAY_MS
from ..types import DEFAULT_ERROR_MARKER, ZERO_MARKER

MAX_PRECISION = 12


class ConfigError(KCUserError):
    """Ошибка загрузки настроек с указанием пути поля."""
    pass


@dataclass(frozen=True)
class CalcConfig:
    """
    Настройки калькулятора.

    Attributes:
        precision: Знаков после точки при округлении результата (0..12)
        recovery_delay_ms: Через сколько миллисекунд дисплей вернётся от ошибки к выражению
        error_marker: Текст дисплея при ошибке вычисления
    """
    precision: int = DEFAULT_PRECISION
    recovery_delay_ms: int = DEFAULT_RECOVERY_DELAY_MS
    error_marker: str = DEFAULT_ERROR_MARKER

    @classmethod
    def from_dict(cls, data: Dict[str, Any], *, source: str = "calc.yaml") -> "CalcConfig":
        """Создание экземпляра из словаря (из YAML) с проверкой значений."""
        unknown = set(data) - {"precision", "recovery_delay_ms", "error_marker"}
        if unknown:
            raise ConfigError(f"{source}: unknown keys: {', '.join(sorted(unknown))}")

        precision = _int_field(data, "precision", DEFAULT_PRECISION, source)
        if not 0 <= precision <= MAX_PRECISION:
            raise ConfigError(f"{source}.precision: expected 0..{MAX_PRECISION}, got {precision}")

        delay = _int_field(data, "recovery_delay_ms", DEFAULT_RECOVERY_DELAY_MS, source)
        if delay < 0:
            raise ConfigError(f"{source}.recovery_delay_ms: must be >= 0, got {delay}")

        marker = data.get("error_marker", DEFAULT_ERROR_MARKER)
        if not isinstance(marker, str) or not marker.strip():
            raise ConfigError(f"{source}.error_marker: expected non-empty string, got {marker!r}")
        if marker == ZERO_MARKER:
            raise ConfigError(f"{source}.error_marker: must differ from '{ZERO_MARKER}'")

        return cls(precision=precision, recovery_delay_ms=delay, error_marker=marker)

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация в словарь для YAML."""
        return {
            "precision": self.precision,
            "recovery_delay_ms": self.recovery_delay_ms,
            "error_marker": self.error_marker,
        }


def _int_field(data: Dict[str, Any], name: str, default: int, source: str) -> int:
    val = data.get(name, default)
    # bool является подклассом int, в настройках это опечатка
    if isinstance(val, bool) or not isinstance(val, int):
        raise ConfigError(f"{source}.{name}: expected int, got {val!r}")
    return val


DEFAULT_CONFIG = CalcConfig()

__all__ = ["CalcConfig", "ConfigError", "DEFAULT_CONFIG", "MAX_PRECISION"]
