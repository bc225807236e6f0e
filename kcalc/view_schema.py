"""
Pydantic-схемы ответа для слоя отображения.

После каждого перехода отображение перечитывает состояние и всю историю
целиком; частичных обновлений нет.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _ViewModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class HistoryItemView(_ViewModel):
    id: str
    expression: str
    result: str
    timestamp: int
    time: str  # HH:MM в локальном времени


class CalculatorView(_ViewModel):
    display: str
    expression: str
    expression_line: str  # выражение над дисплеем, если оно отличается от дисплея
    last_result: str | None = None
    mode: str
    is_error: bool
    history: List[HistoryItemView]
    history_empty: bool


class KeyView(_ViewModel):
    label: str
    value: str
    kind: str
    highlight: bool = False
    span: int = 1


class KeypadView(_ViewModel):
    columns: int
    keys: List[KeyView]


__all__ = ["HistoryItemView", "CalculatorView", "KeyView", "KeypadView"]
