"""
Парсер арифметических выражений с рекурсивным спуском.

Строит абстрактное синтаксическое дерево (AST) из последовательности токенов.
Поддерживает приоритеты операторов и группировку в скобках.

Грамматика:
expression → term (("+" | "-") term)*
term       → unary (("*" | "/") unary)*
unary      → ("+" | "-") unary | primary
primary    → NUMBER | "(" expression ")"

Суммарная вложенность скобок и унарных знаков ограничена MAX_NESTING.
"""

from __future__ import annotations

from typing import List

from .lexer import ExpressionLexer, Token
from .model import (
    Expr,
    NodeType,
    NumberLiteral,
    UnaryExpr,
    GroupExpr,
    BinaryExpr,
)


class ParseError(Exception):
    """Ошибка парсинга арифметического выражения."""

    def __init__(self, message: str, position: int):
        self.message = message
        self.position = position
        super().__init__(f"Parse error at position {position}: {message}")


_ADDITIVE = {"+": NodeType.ADD, "-": NodeType.SUB}
_MULTIPLICATIVE = {"*": NodeType.MUL, "/": NodeType.DIV}
_UNARY = {"+": NodeType.POS, "-": NodeType.NEG}

# Предел вложенности скобок и унарных знаков (суммарно)
MAX_NESTING = 100


class ExpressionParser:
    """
    Парсер арифметических выражений с рекурсивным спуском.

    Принимает только числовые литералы, четыре арифметических оператора
    и скобки. Ничего, кроме построения дерева, не исполняет.
    """

    def __init__(self):
        self.lexer = ExpressionLexer()
        self._tokens: List[Token] = []
        self._position = 0
        self._depth = 0

    def parse(self, text: str) -> Expr:
        """
        Парсит строку выражения в AST.

        Raises:
            ParseError: При синтаксической ошибке
            ValueError: При ошибке токенизации
        """
        self._tokens = self.lexer.tokenize(text)
        self._position = 0
        self._depth = 0

        if len(self._tokens) == 1:
            raise ParseError("Empty expression", 0)

        result = self._parse_expression()

        if not self._is_at_end():
            current = self._current_token()
            raise ParseError(f"Unexpected token '{current.value}'", current.position)

        return result

    def _parse_expression(self) -> Expr:
        """Сложение и вычитание (низший приоритет, левая ассоциативность)."""
        left = self._parse_term()

        while True:
            op = self._match_operator(_ADDITIVE)
            if op is None:
                return left
            right = self._parse_term()
            left = BinaryExpr(left=left, right=right, operator=op)

    def _parse_term(self) -> Expr:
        """Умножение и деление."""
        left = self._parse_unary()

        while True:
            op = self._match_operator(_MULTIPLICATIVE)
            if op is None:
                return left
            right = self._parse_unary()
            left = BinaryExpr(left=left, right=right, operator=op)

    def _parse_unary(self) -> Expr:
        start = self._current_position()
        op = self._match_operator(_UNARY)
        if op is not None:
            # Правая ассоциативность: --5 == -(-5)
            self._enter(start)
            try:
                return UnaryExpr(operand=self._parse_unary(), operator=op)
            finally:
                self._depth -= 1
        return self._parse_primary()

    def _parse_primary(self) -> Expr:
        """Литерал или группа в скобках."""
        current = self._current_token()

        if current.type == 'NUMBER':
            self._advance()
            return NumberLiteral(text=current.value, value=float(current.value))

        if current.type == 'LPAREN':
            self._advance()
            if self._current_token().type == 'RPAREN':
                raise ParseError("Empty parentheses", self._current_position())
            self._enter(current.position)
            try:
                expr = self._parse_expression()
            finally:
                self._depth -= 1
            if self._current_token().type != 'RPAREN':
                raise ParseError("Expected ')' after grouped expression", self._current_position())
            self._advance()
            return GroupExpr(expr=expr)

        if current.type == 'EOF':
            raise ParseError("Unexpected end of expression", current.position)
        raise ParseError(f"Unexpected token '{current.value}'", current.position)

    # Вспомогательные методы для работы с токенами

    def _enter(self, position: int) -> None:
        """Учитывает ещё один уровень вложенности."""
        if self._depth >= MAX_NESTING:
            raise ParseError("Expression nested too deeply", position)
        self._depth += 1

    def _current_token(self) -> Token:
        # tokenize всегда завершает поток токеном EOF, а _advance на нём останавливается
        return self._tokens[self._position]

    def _current_position(self) -> int:
        return self._current_token().position

    def _is_at_end(self) -> bool:
        return self._current_token().type == 'EOF'

    def _advance(self) -> Token:
        """Продвигает позицию и возвращает предыдущий токен."""
        if not self._is_at_end():
            self._position += 1
        return self._tokens[self._position - 1] if self._position > 0 else self._current_token()

    def _match_operator(self, table: dict) -> NodeType | None:
        """Потребляет оператор из таблицы и возвращает соответствующий тип узла."""
        current = self._current_token()
        if current.type == 'OPERATOR' and current.value in table:
            self._advance()
            return table[current.value]
        return None
