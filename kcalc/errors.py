"""
Base exception for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from KCUserError.

Programming errors and bugs should NOT inherit from KCUserError;
they will propagate with full tracebacks.
"""

from __future__ import annotations


class KCUserError(Exception):
    """
    Base class for all user-facing errors in kcalc.

    These errors indicate problems that the user can fix:
    configuration issues, unknown keys, stale history references, etc.
    """
    pass


class UnknownKeyError(KCUserError):
    """Клавиша отсутствует в раскладке клавиатуры."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Unknown key '{key}'")


class HistoryEntryNotFound(KCUserError):
    """Запись истории с указанным id не найдена в текущей сессии."""

    def __init__(self, entry_id: str):
        self.entry_id = entry_id
        super().__init__(f"History entry not found: {entry_id}")


__all__ = ["KCUserError", "UnknownKeyError", "HistoryEntryNotFound"]
