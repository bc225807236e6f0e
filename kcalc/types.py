from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Union


# ---- Маркеры дисплея ----
ZERO_MARKER = "0"
DEFAULT_ERROR_MARKER = "Error"


class KeyKind(Enum):
    """Типы клавиш на клавиатуре калькулятора."""
    NUMBER = "number"
    OPERATOR = "operator"
    FUNCTION = "function"
    ACTION = "action"


class Mode(Enum):
    """
    Логический режим машины ввода.

    Хранится явно рядом с дисплеем и выражением, а не выводится
    из совпадения display == last_result.
    """
    FRESH = "fresh"              # после clear или старта, на дисплее '0'
    POST_RESULT = "post_result"  # сразу после успешного вычисления
    EDITING = "editing"          # выражение набирается
    ERROR = "error"              # на дисплее маркер ошибки до восстановления


# -----------------------------
@dataclass(frozen=True)
class KeyEvent:
    """Одно нажатие клавиши. Создаётся снаружи, не изменяется."""
    value: str
    kind: KeyKind


@dataclass(frozen=True)
class CalculatorState:
    """
    Состояние калькулятора в рамках одной сессии.

    Инварианты:
    - display никогда не пуст
    - display совпадает с expression, кроме режимов POST_RESULT (display == last_result)
      и ERROR (display == маркер ошибки)
    - generation увеличивается на каждом переходе; отложенное восстановление
      после ошибки сверяет его перед применением
    """
    display: str = ZERO_MARKER
    expression: str = ""
    last_result: Optional[str] = None
    mode: Mode = Mode.FRESH
    generation: int = 0

    def bump(self, **changes) -> "CalculatorState":
        """Новое состояние с изменёнными полями и следующим поколением."""
        return replace(self, generation=self.generation + 1, **changes)


@dataclass(frozen=True)
class HistoryEntry:
    """Запись истории: создаётся только при успешном вычислении."""
    id: str
    expression: str
    result: str
    timestamp: int  # epoch millis


# ---- Исход вычисления ----

@dataclass(frozen=True)
class Success:
    value: float


@dataclass(frozen=True)
class Failure:
    reason: str = ""


EvaluationOutcome = Union[Success, Failure]


# ---- Результат перехода ----

@dataclass(frozen=True)
class RecoveryRequest:
    """
    Заявка на отложенное восстановление дисплея после ошибки.

    Применяется только если поколение состояния не изменилось
    с момента создания заявки.
    """
    generation: int
    restore_display: str


@dataclass(frozen=True)
class TransitionResult:
    state: CalculatorState
    entry: Optional[HistoryEntry] = None
    recovery: Optional[RecoveryRequest] = None


__all__ = [
    "ZERO_MARKER",
    "DEFAULT_ERROR_MARKER",
    "KeyKind",
    "Mode",
    "KeyEvent",
    "CalculatorState",
    "HistoryEntry",
    "Success",
    "Failure",
    "EvaluationOutcome",
    "RecoveryRequest",
    "TransitionResult",
]
