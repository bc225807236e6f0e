"""
kcalc: калькулятор с клавиатурой: машина состояний ввода, вычислитель
выражений и журнал истории сессии.
"""

from __future__ import annotations

from .expr import evaluate, sanitize
from .formatting import format_result
from .history import HistoryLog
from .keypad import KEYPAD, key_event, lookup_key
from .machine import InputMachine, transition
from .session import CalculatorSession
from .types import (
    CalculatorState,
    Failure,
    HistoryEntry,
    KeyEvent,
    KeyKind,
    Mode,
    Success,
)

__all__ = [
    "sanitize",
    "evaluate",
    "format_result",
    "HistoryLog",
    "KEYPAD",
    "key_event",
    "lookup_key",
    "InputMachine",
    "transition",
    "CalculatorSession",
    "CalculatorState",
    "Failure",
    "HistoryEntry",
    "KeyEvent",
    "KeyKind",
    "Mode",
    "Success",
]
