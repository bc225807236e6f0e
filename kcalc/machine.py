"""
Машина состояний ввода.

Преобразует пару (состояние, нажатие) в следующее состояние, а при
успешном вычислении ещё и в запись истории. Функции перехода чистые:
таймеры, история и блокировки живут в сессии (см. session.py).

Режимы:
- FRESH / ERROR: цифра заменяет дисплей, оператор дописывается к '0'
- POST_RESULT: оператор продолжает цепочку от результата, цифра начинает новое выражение
- EDITING: всё дописывается к выражению как есть
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable

from .expr import evaluate, sanitize
from .formatting import DEFAULT_PRECISION, format_result
from .keypad import CLEAR, EQUALS
from .types import (
    DEFAULT_ERROR_MARKER,
    ZERO_MARKER,
    CalculatorState,
    Failure,
    HistoryEntry,
    KeyEvent,
    KeyKind,
    Mode,
    RecoveryRequest,
    TransitionResult,
)


def epoch_millis() -> int:
    return time.time_ns() // 1_000_000


@dataclass(frozen=True)
class InputMachine:
    """
    Функция перехода калькулятора с зафиксированными параметрами отображения.

    Attributes:
        precision: Число знаков после точки при округлении результата
        error_marker: Текст дисплея при ошибке вычисления
        clock: Источник времени для записей истории (epoch millis)
    """
    precision: int = DEFAULT_PRECISION
    error_marker: str = DEFAULT_ERROR_MARKER
    clock: Callable[[], int] = field(default=epoch_millis, compare=False)

    def transition(self, state: CalculatorState, event: KeyEvent) -> TransitionResult:
        """
        Применяет одно нажатие к состоянию.

        Raises:
            ValueError: Для функции или действия, которых нет на клавиатуре
        """
        if event.kind == KeyKind.FUNCTION:
            if event.value != CLEAR:
                raise ValueError(f"Unsupported function key '{event.value}'")
            return TransitionResult(state=self.clear(state))

        if event.kind == KeyKind.ACTION:
            if event.value != EQUALS:
                raise ValueError(f"Unsupported action key '{event.value}'")
            return self._equals(state)

        return TransitionResult(state=self._input(state, event))

    def clear(self, state: CalculatorState) -> CalculatorState:
        return state.bump(display=ZERO_MARKER, expression="", last_result=None, mode=Mode.FRESH)

    def restore(self, state: CalculatorState, request: RecoveryRequest) -> CalculatorState:
        """
        Восстанавливает дисплей после ошибки.

        Если с момента ошибки состояние успело измениться (поколение другое),
        заявка устарела и состояние возвращается как есть.
        """
        if state.generation != request.generation:
            return state
        text = request.restore_display
        return state.bump(display=text, mode=_mode_for(text))

    def _input(self, state: CalculatorState, event: KeyEvent) -> CalculatorState:
        value = event.value
        is_operator = event.kind == KeyKind.OPERATOR

        if state.mode in (Mode.FRESH, Mode.ERROR):
            # Неявный ведущий ноль: '+' превращается в '0+'
            text = ZERO_MARKER + value if is_operator else value
            return state.bump(display=text, expression=text, mode=_mode_for(text))

        if state.mode == Mode.POST_RESULT:
            text = state.display + value if is_operator else value
            return state.bump(display=text, expression=text, last_result=None, mode=_mode_for(text))

        return state.bump(
            display=state.display + value,
            expression=state.expression + value,
            mode=Mode.EDITING,
        )

    def _equals(self, state: CalculatorState) -> TransitionResult:
        sanitized = sanitize(state.expression)
        if not sanitized:
            return TransitionResult(state=state)

        outcome = evaluate(sanitized)

        if isinstance(outcome, Failure):
            failed = state.bump(display=self.error_marker, mode=Mode.ERROR)
            request = RecoveryRequest(
                generation=failed.generation,
                restore_display=state.expression or ZERO_MARKER,
            )
            return TransitionResult(state=failed, recovery=request)

        result_text = format_result(outcome.value, self.precision)
        timestamp = self.clock()
        next_state = state.bump(
            display=result_text,
            expression=result_text,
            last_result=result_text,
            mode=Mode.POST_RESULT,
        )
        entry = HistoryEntry(
            # Поколение уникально в пределах сессии, метка времени нет
            id=f"{timestamp}-{next_state.generation}",
            expression=state.expression,
            result=result_text,
            timestamp=timestamp,
        )
        return TransitionResult(state=next_state, entry=entry)


def _mode_for(text: str) -> Mode:
    # Дисплей '0': следующая цифра заменит ноль
    return Mode.FRESH if text == ZERO_MARKER else Mode.EDITING


_DEFAULT_MACHINE = InputMachine()


def transition(state: CalculatorState, event: KeyEvent) -> TransitionResult:
    """Переход с параметрами по умолчанию (8 знаков, маркер 'Error')."""
    return _DEFAULT_MACHINE.transition(state, event)


__all__ = ["InputMachine", "transition", "epoch_millis"]
