"""
Отложенное восстановление дисплея после ошибки вычисления.

Ошибка показывается сразу, а через фиксированную задержку дисплей
возвращается к выражению. Задача восстановления отменяемая: новое
нажатие отменяет её, а если таймер всё же сработал, проверка поколения
превращает устаревшее восстановление в no-op.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional, Protocol, runtime_checkable

from .types import RecoveryRequest

_LOG = logging.getLogger("kcalc.recovery")

DEFAULT_RECOVERY_DELAY_MS = 1500


@runtime_checkable
class Cancellable(Protocol):
    """Дескриптор запланированной задачи."""

    def cancel(self) -> None:
        ...


@runtime_checkable
class Scheduler(Protocol):
    """Планировщик однократных отложенных вызовов."""

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> Cancellable:
        """
        Планирует вызов callback через delay_s секунд.

        Returns:
            Дескриптор, отмена которого гарантирует, что callback не будет вызван
            (если он ещё не начал выполняться)
        """
        ...


class ThreadingScheduler:
    """Планировщик на threading.Timer. Таймеры-демоны не держат процесс при выходе."""

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> Cancellable:
        timer = threading.Timer(delay_s, callback)
        timer.daemon = True
        timer.start()
        return timer


class ErrorRecovery:
    """
    Держит не более одной ожидающей заявки на восстановление.

    apply вызывается из потока таймера под общей с владельцем блокировкой,
    поэтому срабатывание таймера и обработка нажатий не перемежаются.
    """

    def __init__(
        self,
        apply: Callable[[RecoveryRequest], None],
        scheduler: Optional[Scheduler] = None,
        delay_ms: int = DEFAULT_RECOVERY_DELAY_MS,
        lock: Optional[threading.RLock] = None,
    ):
        self._apply = apply
        self._scheduler = scheduler or ThreadingScheduler()
        self._delay_ms = delay_ms
        self._lock = lock or threading.RLock()
        self._handle: Optional[Cancellable] = None
        self._pending: Optional[RecoveryRequest] = None

    @property
    def delay_ms(self) -> int:
        return self._delay_ms

    @property
    def pending(self) -> Optional[RecoveryRequest]:
        return self._pending

    def schedule(self, request: RecoveryRequest) -> None:
        """Планирует восстановление, отменяя предыдущее."""
        with self._lock:
            self.cancel()
            self._pending = request
            _LOG.debug("Recovery scheduled in %d ms (generation=%d)", self._delay_ms, request.generation)
            self._handle = self._scheduler.call_later(
                self._delay_ms / 1000.0, lambda: self._fire(request)
            )

    def cancel(self) -> None:
        with self._lock:
            if self._handle is not None:
                self._handle.cancel()
                _LOG.debug("Pending recovery cancelled (generation=%d)", self._pending.generation)
            self._handle = None
            self._pending = None

    def _fire(self, request: RecoveryRequest) -> None:
        with self._lock:
            if self._pending is not request:
                # Заменена или отменена, пока таймер уже запускался
                return
            self._handle = None
            self._pending = None
            self._apply(request)


__all__ = [
    "DEFAULT_RECOVERY_DELAY_MS",
    "Cancellable",
    "Scheduler",
    "ThreadingScheduler",
    "ErrorRecovery",
]
