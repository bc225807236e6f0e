"""
Статическая раскладка клавиатуры калькулятора.

Порядок клавиш соответствует сетке 4×5: слева направо, сверху вниз.
Клавиша «0» занимает две колонки.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from .errors import UnknownKeyError
from .types import KeyEvent, KeyKind

CLEAR = "clear"
EQUALS = "equals"


@dataclass(frozen=True)
class KeySpec:
    """Описание одной клавиши на клавиатуре."""
    label: str
    value: str
    kind: KeyKind
    highlight: bool = False
    span: int = 1

    def event(self) -> KeyEvent:
        return KeyEvent(value=self.value, kind=self.kind)


KEYPAD: List[KeySpec] = [
    KeySpec("C", CLEAR, KeyKind.FUNCTION, highlight=True),
    KeySpec("(", "(", KeyKind.OPERATOR),
    KeySpec(")", ")", KeyKind.OPERATOR),
    KeySpec("÷", "/", KeyKind.OPERATOR),
    KeySpec("7", "7", KeyKind.NUMBER),
    KeySpec("8", "8", KeyKind.NUMBER),
    KeySpec("9", "9", KeyKind.NUMBER),
    KeySpec("×", "*", KeyKind.OPERATOR),
    KeySpec("4", "4", KeyKind.NUMBER),
    KeySpec("5", "5", KeyKind.NUMBER),
    KeySpec("6", "6", KeyKind.NUMBER),
    KeySpec("-", "-", KeyKind.OPERATOR),
    KeySpec("1", "1", KeyKind.NUMBER),
    KeySpec("2", "2", KeyKind.NUMBER),
    KeySpec("3", "3", KeyKind.NUMBER),
    KeySpec("+", "+", KeyKind.OPERATOR),
    KeySpec("0", "0", KeyKind.NUMBER, span=2),
    KeySpec(".", ".", KeyKind.NUMBER),
    KeySpec("=", EQUALS, KeyKind.ACTION),
]


def _build_index() -> Dict[str, KeySpec]:
    # Значения и метки не конфликтуют: «÷» и «/» ведут на одну клавишу
    index: Dict[str, KeySpec] = {}
    for spec in KEYPAD:
        index[spec.value] = spec
        index[spec.label] = spec
    return index


_INDEX = _build_index()


def lookup_key(key: str) -> KeySpec:
    """
    Находит клавишу по метке («÷», «C», «=») или по значению («/», «clear», «equals»).

    Raises:
        UnknownKeyError: если такой клавиши нет на клавиатуре
    """
    spec = _INDEX.get(key)
    if spec is None:
        spec = _INDEX.get(key.strip())
    if spec is None:
        raise UnknownKeyError(key)
    return spec


def key_event(key: str) -> KeyEvent:
    """Событие нажатия для клавиши с указанной меткой или значением."""
    return lookup_key(key).event()


__all__ = ["CLEAR", "EQUALS", "KeySpec", "KEYPAD", "lookup_key", "key_event"]
