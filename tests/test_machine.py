"""
Тесты машины состояний ввода.
"""

import pytest

from kcalc.keypad import key_event
from kcalc.machine import InputMachine, transition
from kcalc.types import CalculatorState, KeyEvent, KeyKind, Mode


def run(keys, state=None, machine=None):
    """Прогоняет последовательность клавиш; возвращает итоговое состояние и все записи истории."""
    machine = machine or InputMachine(clock=lambda: 1_000)
    state = state or CalculatorState()
    entries = []
    for key in keys:
        result = machine.transition(state, key_event(key))
        state = result.state
        if result.entry is not None:
            entries.append(result.entry)
    return state, entries


def test_initial_state():
    state = CalculatorState()
    assert state.display == "0"
    assert state.expression == ""
    assert state.last_result is None
    assert state.mode == Mode.FRESH


# ---- Fresh ----

def test_fresh_digit_replaces_zero():
    state, _ = run(["5"])
    assert (state.display, state.expression, state.mode) == ("5", "5", Mode.EDITING)


def test_fresh_operator_gets_implicit_zero():
    state, _ = run(["+"])
    assert (state.display, state.expression) == ("0+", "0+")
    assert state.mode == Mode.EDITING


def test_zero_keeps_fresh():
    state, _ = run(["0", "7"])
    assert state.display == "7"


# ---- Editing ----

def test_editing_appends():
    state, _ = run(["1", "2", "+", "3", ".", "5"])
    assert state.display == "12+3.5"
    assert state.expression == "12+3.5"


# ---- Equals ----

def test_two_plus_two():
    state, entries = run(["2", "+", "2", "="])
    assert state.display == "4"
    assert state.expression == "4"
    assert state.last_result == "4"
    assert state.mode == Mode.POST_RESULT
    assert len(entries) == 1
    assert entries[0].expression == "2+2"
    assert entries[0].result == "4"
    assert entries[0].timestamp == 1_000


def test_equals_on_empty_is_noop():
    machine = InputMachine()
    state = CalculatorState()
    result = machine.transition(state, key_event("="))
    assert result.state is state
    assert result.entry is None
    assert result.recovery is None


def test_equals_after_clear_is_noop():
    state, _ = run(["5", "C"])
    result = transition(state, key_event("="))
    assert result.state is state


def test_failure_shows_error_and_requests_recovery():
    state, _ = run(["1", "0", "/", "0"])
    result = InputMachine().transition(state, key_event("="))

    assert result.state.display == "Error"
    assert result.state.mode == Mode.ERROR
    assert result.state.expression == "10/0"
    assert result.state.last_result is None
    assert result.entry is None
    assert result.recovery is not None
    assert result.recovery.restore_display == "10/0"
    assert result.recovery.generation == result.state.generation


def test_malformed_expression_fails():
    state, entries = run(["(", "2", "+", "="])
    assert state.display == "Error"
    assert entries == []


def test_custom_error_marker_and_precision():
    machine = InputMachine(precision=2, error_marker="ERR")
    state, _ = run(["2", "÷", "3", "="], machine=machine)
    assert state.display == "0.67"
    state, _ = run(["1", "÷", "0", "="], machine=machine)
    assert state.display == "ERR"


# ---- PostResult ----

def test_post_result_operator_chains():
    state, _ = run(["2", "+", "2", "=", "+"])
    assert state.display == "4+"
    assert state.expression == "4+"
    assert state.last_result is None
    assert state.mode == Mode.EDITING


def test_post_result_digit_starts_new_expression():
    state, _ = run(["2", "+", "2", "=", "5"])
    assert state.display == "5"
    assert state.expression == "5"
    assert state.last_result is None


def test_chained_evaluation():
    state, entries = run(["2", "+", "2", "=", "×", "3", "="])
    assert state.display == "12"
    assert [e.expression for e in entries] == ["2+2", "4*3"]


def test_chain_from_negative_result():
    state, _ = run(["3", "-", "5", "=", "*", "2", "="])
    assert state.display == "-4"


def test_mode_is_explicit_not_inferred():
    # Пользователь набирает текст, совпадающий с прошлым результатом: это редактирование
    state, _ = run(["2", "+", "2", "=", "4"])
    assert state.display == "4"
    assert state.mode == Mode.EDITING
    state, _ = run(["+", "1"], state=state)
    assert state.display == "4+1"


# ---- Error mode input ----

def test_error_then_digit_replaces():
    state, _ = run(["1", "/", "0", "=", "7"])
    assert (state.display, state.expression, state.mode) == ("7", "7", Mode.EDITING)


def test_error_then_operator_prepends_zero():
    state, _ = run(["1", "/", "0", "=", "-"])
    assert state.display == "0-"


# ---- Clear ----

def test_clear_from_any_mode():
    for keys in (["5"], ["2", "+", "2", "="], ["1", "/", "0", "="]):
        state, _ = run(keys + ["C"])
        assert state.display == "0"
        assert state.expression == ""
        assert state.last_result is None
        assert state.mode == Mode.FRESH


# ---- Generation / restore ----

def test_every_transition_bumps_generation():
    state, _ = run(["1", "+", "1", "=", "C"])
    assert state.generation == 5


def test_restore_applies_for_current_generation():
    machine = InputMachine()
    state, _ = run(["1", "0", "/", "0"])
    failed = machine.transition(state, key_event("="))
    restored = machine.restore(failed.state, failed.recovery)
    assert restored.display == "10/0"
    assert restored.mode == Mode.EDITING


def test_restore_is_noop_when_stale():
    machine = InputMachine()
    state, _ = run(["1", "/", "0"])
    failed = machine.transition(state, key_event("="))
    newer = machine.transition(failed.state, key_event("5")).state
    assert machine.restore(newer, failed.recovery) is newer


def test_unsupported_function_and_action():
    with pytest.raises(ValueError, match="Unsupported function"):
        transition(CalculatorState(), KeyEvent("sqrt", KeyKind.FUNCTION))
    with pytest.raises(ValueError, match="Unsupported action"):
        transition(CalculatorState(), KeyEvent("percent", KeyKind.ACTION))


def test_history_ids_unique_with_same_timestamp():
    _, entries = run(["1", "=", "2", "="])
    assert entries[0].timestamp == entries[1].timestamp
    assert entries[0].id != entries[1].id
