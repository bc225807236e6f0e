"""
Сессия целиком: нажатия, история, восстановление после ошибки по таймеру.
"""

import pytest

from kcalc.config import CalcConfig
from kcalc.errors import HistoryEntryNotFound, UnknownKeyError
from kcalc.session import CalculatorSession
from kcalc.types import Mode


def test_two_plus_two_appends_history(session, clock):
    session.press_many(["2", "+", "2", "="])

    assert session.state.display == "4"
    [entry] = session.history
    assert entry.expression == "2+2"
    assert entry.result == "4"
    assert entry.timestamp == clock.now_ms


def test_equals_on_empty_changes_nothing(session, scheduler):
    before = session.state
    session.press("=")
    assert session.state is before
    assert session.history == []
    assert scheduler.handles == []


def test_division_by_zero_recovers_after_delay(session, scheduler):
    session.press_many(["1", "0", "/", "0", "="])
    assert session.state.display == "Error"
    assert session.recovery_pending

    scheduler.advance(1.0)
    assert session.state.display == "Error"

    scheduler.advance(0.5)
    assert session.state.display == "10/0"
    assert session.state.expression == "10/0"
    assert session.state.mode == Mode.EDITING
    assert not session.recovery_pending
    assert session.history == []


def test_new_key_cancels_pending_recovery(session, scheduler):
    session.press_many(["1", "/", "0", "="])
    [handle] = scheduler.active

    session.press("7")
    assert handle.cancelled
    scheduler.advance(2.0)
    assert session.state.display == "7"


def test_clear_cancels_pending_recovery(session, scheduler):
    session.press_many(["1", "/", "0", "=", "C"])
    scheduler.advance(2.0)
    assert session.state.display == "0"
    assert session.state.mode == Mode.FRESH


def test_stale_timer_is_noop_even_if_it_fires(session, scheduler):
    """Таймер мог сработать уже после отмены (гонка потоков): состояние не затирается."""
    session.press_many(["1", "/", "0", "="])
    session.press_many(["2", "+", "3"])
    scheduler.fire_all()
    assert session.state.display == "2+3"


def test_repeated_failure_reschedules(session, scheduler):
    session.press_many(["1", "/", "0", "="])
    session.press("=")
    assert len(scheduler.active) == 1
    scheduler.advance(1.5)
    assert session.state.display == "1/0"


def test_deeply_nested_input_shows_error_and_recovers(session, scheduler):
    keys = ["5"] + ["-"] * 1200 + ["5"]
    session.press_many(keys + ["="])
    assert session.state.display == "Error"
    assert session.state.mode == Mode.ERROR
    assert session.recovery_pending

    scheduler.advance(1.5)
    assert session.state.display == "".join(keys)
    assert session.state.mode == Mode.EDITING
    assert session.history == []


def test_post_result_chain(session):
    session.press_many(["2", "+", "2", "=", "×", "3", "="])
    assert session.state.display == "12"
    assert [e.result for e in session.history] == ["4", "12"]


def test_select_entry_then_chain(session, clock):
    session.press_many(["6", "×", "7", "="])
    clock.tick(1000)
    session.press_many(["1", "+", "1", "="])
    first = session.history[0]

    session.select_entry(first.id)
    assert session.state.display == "42"
    assert session.state.mode == Mode.POST_RESULT

    session.press_many(["-", "2", "="])
    assert session.state.display == "40"
    assert len(session.history) == 3


def test_select_entry_then_digit_starts_fresh(session):
    session.press_many(["6", "×", "7", "=", "C"])
    session.select_entry(session.history[0].id)
    session.press("9")
    assert session.state.display == "9"


def test_select_missing_entry(session):
    with pytest.raises(HistoryEntryNotFound):
        session.select_entry("nope")


def test_clear_history(session):
    session.press_many(["1", "=", "2", "="])
    session.clear_history()
    assert session.history == []
    assert session.view().history_empty is True
    # Состояние калькулятора не трогается
    assert session.state.display == "2"


def test_unknown_key(session):
    with pytest.raises(UnknownKeyError):
        session.press("sin")


def test_config_is_applied(scheduler, clock):
    cfg = CalcConfig(precision=3, recovery_delay_ms=200, error_marker="ERR")
    s = CalculatorSession(cfg, scheduler=scheduler, clock=clock)

    s.press_many(["1", "÷", "3", "="])
    assert s.state.display == "0.333"

    s.press_many(["÷", "0", "="])
    assert s.state.display == "ERR"
    scheduler.advance(0.2)
    assert s.state.display == "0.333/0"


def test_real_timer_recovery():
    """ThreadingScheduler по умолчанию: восстановление приходит из потока таймера."""
    import time

    s = CalculatorSession(CalcConfig(recovery_delay_ms=10))
    s.press_many(["1", "/", "0", "="])
    assert s.state.display == "Error"

    deadline = time.monotonic() + 5
    while s.state.display == "Error" and time.monotonic() < deadline:
        time.sleep(0.01)
    assert s.state.display == "1/0"
