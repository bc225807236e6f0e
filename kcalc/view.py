from __future__ import annotations

from datetime import datetime
from typing import Iterable

from .keypad import KEYPAD
from .types import CalculatorState, HistoryEntry, Mode
from .view_schema import CalculatorView, HistoryItemView, KeypadView, KeyView

KEYPAD_COLUMNS = 4


def time_label(timestamp_ms: int) -> str:
    """Метка времени записи истории: часы и минуты в локальной зоне."""
    return datetime.fromtimestamp(timestamp_ms / 1000).strftime("%H:%M")


def build_view(state: CalculatorState, history: Iterable[HistoryEntry]) -> CalculatorView:
    items = [
        HistoryItemView(
            id=e.id,
            expression=e.expression,
            result=e.result,
            timestamp=e.timestamp,
            time=time_label(e.timestamp),
        )
        for e in history
    ]
    return CalculatorView(
        display=state.display,
        expression=state.expression,
        expression_line=state.expression if state.expression != state.display else "",
        last_result=state.last_result,
        mode=state.mode.value,
        is_error=state.mode == Mode.ERROR,
        history=items,
        history_empty=not items,
    )


def build_keypad_view() -> KeypadView:
    return KeypadView(
        columns=KEYPAD_COLUMNS,
        keys=[
            KeyView(label=k.label, value=k.value, kind=k.kind.value, highlight=k.highlight, span=k.span)
            for k in KEYPAD
        ],
    )


__all__ = ["build_view", "build_keypad_view", "time_label"]
