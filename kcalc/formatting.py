"""
Форматирование результата вычисления для дисплея.

Округляет значение до фиксированного числа знаков, чтобы убрать шум
двоичной арифметики (0.1 + 0.2 → 0.3), и выводит минимальную десятичную
запись: без хвостовых нулей, без точки у целых, без экспоненты.
"""

from __future__ import annotations

import math
from decimal import Decimal

DEFAULT_PRECISION = 8

# За этой границей у масштабированного значения нет дробной части
_EXACT_INT_LIMIT = float(2 ** 52)


def round_result(value: float, precision: int = DEFAULT_PRECISION) -> float:
    """round(value × 10^precision) / 10^precision с округлением половины вверх."""
    scale = 10.0 ** precision
    scaled = value * scale
    if not math.isfinite(scaled) or abs(scaled) >= _EXACT_INT_LIMIT:
        return value
    return math.floor(scaled + 0.5) / scale


def format_result(value: float, precision: int = DEFAULT_PRECISION) -> str:
    """
    Округляет и переводит число в текст дисплея.

    >>> format_result(0.1 + 0.2)
    '0.3'
    >>> format_result(4.0)
    '4'
    >>> format_result(1e21)
    '1000000000000000000000'
    """
    rounded = round_result(value, precision)
    if rounded == 0:
        # -0.0 тоже сюда
        return "0"
    text = format(Decimal(repr(rounded)).normalize(), "f")
    return text


__all__ = ["DEFAULT_PRECISION", "round_result", "format_result"]
