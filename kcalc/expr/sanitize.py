from __future__ import annotations

import re

# Единственный допустимый алфавит выражения перед вычислением
_DISALLOWED = re.compile(r"[^0-9+\-*/().]")


def sanitize(raw: str) -> str:
    """Удаляет все символы вне набора 0-9 + - * / ( ) . (порядок остальных сохраняется)."""
    return _DISALLOWED.sub("", raw)


__all__ = ["sanitize"]
