"""
Лексер для арифметических выражений.

Выполняет токенизацию строки выражения, разбивая её на значимые элементы:
- Числа (целые и десятичные: 12, 1.5, .5, 5.)
- Операторы (+, -, *, /)
- Скобки
- Пробелы (игнорируются)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List


@dataclass
class Token:
    """
    Токен арифметического выражения.

    Attributes:
        type: Тип токена (NUMBER, OPERATOR, LPAREN, RPAREN, EOF)
        value: Значение токена
        position: Позиция в исходной строке
    """
    type: str
    value: str
    position: int

    def __repr__(self):
        return f"Token({self.type}, '{self.value}', pos={self.position})"


class ExpressionLexer:
    """
    Лексер для разбиения строки выражения на токены.

    Поддерживаемые токены:
    - NUMBER: десятичные литералы без экспоненты
    - OPERATOR: + - * /
    - LPAREN / RPAREN: скобки
    - EOF: конец строки
    """

    # Спецификация токенов: (regex_pattern, token_type, ignore_flag)
    TOKEN_SPECS = [
        (r'\s+', 'WHITESPACE', True),

        # Сначала форма с ведущими цифрами, чтобы "5." и "1.25" брались целиком
        (r'\d+\.?\d*', 'NUMBER', False),
        (r'\.\d+', 'NUMBER', False),

        (r'[+\-*/]', 'OPERATOR', False),
        (r'\(', 'LPAREN', False),
        (r'\)', 'RPAREN', False),

        # Неизвестный символ (ошибка)
        (r'.', 'UNKNOWN', False),
    ]

    def __init__(self):
        self._compiled_patterns = [
            (re.compile(pattern), token_type, ignore)
            for pattern, token_type, ignore in self.TOKEN_SPECS
        ]

    def tokenize(self, text: str) -> List[Token]:
        """
        Разбивает строку на токены.

        Args:
            text: Строка выражения

        Returns:
            Список токенов, включая EOF в конце

        Raises:
            ValueError: При обнаружении неизвестного символа (например, одиночной точки)
        """
        tokens: List[Token] = []
        position = 0

        while position < len(text):
            for pattern, token_type, ignore in self._compiled_patterns:
                match = pattern.match(text, position)
                if not match:
                    continue

                value = match.group(0)
                if not ignore:
                    if token_type == 'UNKNOWN':
                        raise ValueError(f"Unexpected character '{value}' at position {position}")
                    tokens.append(Token(type=token_type, value=value, position=position))

                position = match.end()
                break

        tokens.append(Token(type='EOF', value='', position=position))
        return tokens
