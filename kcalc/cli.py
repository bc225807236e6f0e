from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, TextIO

from .config import load_config
from .errors import KCUserError
from .expr import evaluate, sanitize
from .formatting import format_result
from .jsonic import dumps as jdumps
from .session import CalculatorSession
from .types import Failure
from .version import tool_version
from .view import build_keypad_view

_LOG = logging.getLogger("kcalc")


def _setup_logging() -> None:
    if getattr(_setup_logging, "_inited", False):
        return
    _setup_logging._inited = True  # type: ignore[attr-defined]
    level = logging.DEBUG if os.environ.get("KCALC_DEBUG") else logging.WARNING
    _LOG.setLevel(level)
    if not _LOG.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
        _LOG.addHandler(h)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="kc",
        description="Keypad calculator (input state machine + history)",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("keys", help="Раскладка клавиатуры (JSON)")

    sp_press = sub.add_parser("press", help="Прогнать нажатия через сессию и вывести состояние (JSON)")
    sp_press.add_argument(
        "keys",
        nargs="+",
        metavar="KEY",
        help="метка или значение клавиши: 7, ÷ или /, C или clear, = или equals",
    )

    sp_eval = sub.add_parser("eval", help="Вычислить выражение целиком и вывести результат")
    sp_eval.add_argument("expression", help="арифметическое выражение, например '(1+2)*3'")

    sub.add_parser("repl", help="Интерактивная сессия: клавиши через пробел, команды :history, :select ID|N, :clear-history, :quit")

    return p


def _run_eval(expression: str, precision: int) -> tuple[int, str]:
    outcome = evaluate(sanitize(expression))
    if isinstance(outcome, Failure):
        _LOG.debug("Evaluation failed: %s", outcome.reason)
        return 1, ""
    return 0, format_result(outcome.value, precision)


def _entry_id(session: CalculatorSession, ref: str) -> str:
    """:select принимает id записи или её номер в :history (с единицы)."""
    entries = session.history
    if ref.isdigit() and 1 <= int(ref) <= len(entries):
        return entries[int(ref) - 1].id
    return ref


def _repl(session: CalculatorSession, stdin: TextIO, stdout: TextIO) -> int:
    """Построчный ввод: каждая строка: клавиши через пробел или команда с двоеточием."""
    for raw in stdin:
        line = raw.strip()
        if not line:
            continue

        if line.startswith(":"):
            cmd, _, arg = line[1:].partition(" ")
            if cmd in ("quit", "q"):
                return 0
            if cmd == "history":
                entries = session.history
                if not entries:
                    stdout.write("No history yet\n")
                for i, e in enumerate(entries, 1):
                    stdout.write(f"{i}. {e.id}  {e.expression} = {e.result}\n")
                continue
            if cmd == "clear-history":
                session.clear_history()
                continue
            if cmd == "select":
                try:
                    session.select_entry(_entry_id(session, arg.strip()))
                except KCUserError as e:
                    stdout.write(f"{e}\n")
                    continue
            else:
                stdout.write(f"Unknown command ':{cmd}'\n")
                continue
        else:
            try:
                session.press_many(line.split())
            except KCUserError as e:
                stdout.write(f"{e}\n")

        view = session.view()
        if view.expression_line:
            stdout.write(f"{view.expression_line}\n")
        stdout.write(f"{view.display}\n")
        stdout.flush()
    return 0


def main(argv: List[str] | None = None) -> int:
    _setup_logging()
    ns = _build_parser().parse_args(argv)

    try:
        config = load_config(Path.cwd())

        if ns.cmd == "keys":
            sys.stdout.write(jdumps(build_keypad_view().model_dump(mode="json", by_alias=True)))
            return 0

        if ns.cmd == "press":
            session = CalculatorSession(config)
            session.press_many(ns.keys)
            sys.stdout.write(jdumps(session.view().model_dump(mode="json", by_alias=True)))
            return 0

        if ns.cmd == "eval":
            rc, text = _run_eval(ns.expression, config.precision)
            if rc != 0:
                sys.stderr.write(config.error_marker + "\n")
                return rc
            sys.stdout.write(text + "\n")
            return 0

        if ns.cmd == "repl":
            return _repl(CalculatorSession(config), sys.stdin, sys.stdout)

    except KCUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
