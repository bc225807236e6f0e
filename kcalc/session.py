"""
Сессия калькулятора.

Владеет единственным состоянием, журналом истории и отложенным
восстановлением после ошибки. Нажатия обрабатываются строго по одному;
таймер восстановления работает в своём потоке, поэтому и нажатия,
и срабатывание таймера проходят под одной блокировкой.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Iterable, List, Optional

from .config import CalcConfig, DEFAULT_CONFIG
from .history import HistoryLog
from .keypad import key_event
from .machine import InputMachine, epoch_millis
from .recovery import ErrorRecovery, Scheduler
from .types import CalculatorState, HistoryEntry, KeyEvent, RecoveryRequest
from .view import build_view
from .view_schema import CalculatorView

_LOG = logging.getLogger("kcalc.session")


class CalculatorSession:

    def __init__(
        self,
        config: CalcConfig = DEFAULT_CONFIG,
        *,
        scheduler: Optional[Scheduler] = None,
        clock: Callable[[], int] = epoch_millis,
    ):
        self.config = config
        self._lock = threading.RLock()
        self._machine = InputMachine(
            precision=config.precision,
            error_marker=config.error_marker,
            clock=clock,
        )
        self._state = CalculatorState()
        self._history = HistoryLog()
        self._recovery = ErrorRecovery(
            self._restore,
            scheduler=scheduler,
            delay_ms=config.recovery_delay_ms,
            lock=self._lock,
        )

    # ---- Чтение для отображения ----

    @property
    def state(self) -> CalculatorState:
        with self._lock:
            return self._state

    @property
    def history(self) -> List[HistoryEntry]:
        with self._lock:
            return self._history.entries()

    @property
    def recovery_pending(self) -> bool:
        return self._recovery.pending is not None

    def view(self) -> CalculatorView:
        with self._lock:
            return build_view(self._state, self._history)

    # ---- Ввод ----

    def press(self, key: str) -> CalculatorState:
        """Нажатие клавиши по метке или значению (см. keypad.lookup_key)."""
        return self.dispatch(key_event(key))

    def press_many(self, keys: Iterable[str]) -> CalculatorState:
        state = self.state
        for key in keys:
            state = self.press(key)
        return state

    def dispatch(self, event: KeyEvent) -> CalculatorState:
        with self._lock:
            result = self._machine.transition(self._state, event)
            if result.state is self._state:
                # no-op (например, «=» на пустом выражении) не трогает ни состояние, ни таймер
                _LOG.debug("%s %r: no-op", event.kind.value, event.value)
                return self._state

            # Любой новый переход отменяет ожидающее восстановление
            self._recovery.cancel()
            self._state = result.state
            _LOG.debug(
                "%s %r -> display=%r expression=%r mode=%s gen=%d",
                event.kind.value, event.value,
                self._state.display, self._state.expression, self._state.mode.value, self._state.generation,
            )

            if result.entry is not None:
                self._history.append(result.entry)
                _LOG.debug("History += %s = %s", result.entry.expression, result.entry.result)
            if result.recovery is not None:
                self._recovery.schedule(result.recovery)
            return self._state

    # ---- История ----

    def select_entry(self, entry_id: str) -> CalculatorState:
        """
        Загружает результат записи истории в калькулятор.

        Raises:
            HistoryEntryNotFound: если записи нет в текущей сессии
        """
        with self._lock:
            entry = self._history.get(entry_id)
            self._recovery.cancel()
            self._state = self._history.select_entry(entry, self._state)
            _LOG.debug("Selected history entry %s -> %r", entry.id, entry.result)
            return self._state

    def clear_history(self) -> None:
        with self._lock:
            self._history.clear()

    # ---- Восстановление после ошибки ----

    def _restore(self, request: RecoveryRequest) -> None:
        with self._lock:
            restored = self._machine.restore(self._state, request)
            if restored is self._state:
                _LOG.debug("Stale recovery ignored (generation=%d)", request.generation)
                return
            self._state = restored
            _LOG.debug("Display restored to %r", restored.display)


__all__ = ["CalculatorSession"]
