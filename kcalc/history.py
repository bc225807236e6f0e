"""
Журнал истории вычислений в рамках сессии.

Только добавление в конец и полная очистка; отдельные записи
не изменяются и не удаляются.
"""

from __future__ import annotations

from typing import Iterator, List, Optional

from .errors import HistoryEntryNotFound
from .types import CalculatorState, HistoryEntry, Mode


class HistoryLog:
    """Упорядоченный по вставке список записей истории (старые первыми)."""

    def __init__(self) -> None:
        self._entries: List[HistoryEntry] = []

    def append(self, entry: HistoryEntry) -> None:
        self._entries.append(entry)

    def clear(self) -> None:
        self._entries = []

    def entries(self) -> List[HistoryEntry]:
        """Копия записей для отрисовки."""
        return list(self._entries)

    def find(self, entry_id: str) -> Optional[HistoryEntry]:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def get(self, entry_id: str) -> HistoryEntry:
        """
        Raises:
            HistoryEntryNotFound: если записи нет (например, после clear)
        """
        entry = self.find(entry_id)
        if entry is None:
            raise HistoryEntryNotFound(entry_id)
        return entry

    def select_entry(self, entry: HistoryEntry, state: CalculatorState) -> CalculatorState:
        """
        Загружает результат записи в калькулятор.

        Выбор записи равносилен только что полученному результату: режим
        POST_RESULT, last_result = результат записи. Следующий оператор
        продолжит цепочку, следующая цифра начнёт новое выражение.
        """
        return state.bump(
            display=entry.result,
            expression=entry.result,
            last_result=entry.result,
            mode=Mode.POST_RESULT,
        )

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)


__all__ = ["HistoryLog"]
