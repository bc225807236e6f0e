"""
Вычислитель арифметических выражений.

Проходит по AST и вычисляет значение в арифметике двойной точности.
Деление на ноль и любые неконечные промежуточные значения считаются
ошибкой вычисления, а не числовым результатом.
"""

from __future__ import annotations

import math
from typing import cast

from .model import (
    Expr,
    NodeType,
    NumberLiteral,
    UnaryExpr,
    GroupExpr,
    BinaryExpr,
)
from ..types import EvaluationOutcome, Failure, Success


class EvaluationError(Exception):
    """Ошибка при вычислении выражения (деление на ноль, переполнение)."""
    pass


class ExpressionEvaluator:
    """
    Вычислитель арифметических выражений.

    Не хранит состояние между вызовами.
    """

    def evaluate(self, node: Expr) -> float:
        """
        Вычисляет значение узла.

        Raises:
            EvaluationError: При делении на ноль или неконечном результате
        """
        node_type = node.get_type()

        if node_type == NodeType.NUMBER:
            value = cast(NumberLiteral, node).value
        elif node_type == NodeType.GROUP:
            value = self.evaluate(cast(GroupExpr, node).expr)
        elif node_type == NodeType.NEG:
            value = -self.evaluate(cast(UnaryExpr, node).operand)
        elif node_type == NodeType.POS:
            value = self.evaluate(cast(UnaryExpr, node).operand)
        elif node_type in (NodeType.ADD, NodeType.SUB, NodeType.MUL, NodeType.DIV):
            value = self._evaluate_binary(cast(BinaryExpr, node))
        else:
            raise EvaluationError(f"Unknown node type: {node_type}")

        return _finite(value)

    def _evaluate_binary(self, node: BinaryExpr) -> float:
        # Левый край цепочки 1+2+3+... обходится циклом: глубина рекурсии
        # не зависит от длины цепочки
        chain = [node]
        while isinstance(chain[-1].left, BinaryExpr):
            chain.append(chain[-1].left)

        value = self.evaluate(chain[-1].left)
        for link in reversed(chain):
            value = _finite(self._apply(link.operator, value, self.evaluate(link.right)))
        return value

    def _apply(self, op: NodeType, left: float, right: float) -> float:
        try:
            if op == NodeType.ADD:
                return left + right
            if op == NodeType.SUB:
                return left - right
            if op == NodeType.MUL:
                return left * right
            if right == 0:
                raise EvaluationError("Division by zero")
            return left / right
        except OverflowError as e:
            raise EvaluationError(f"Arithmetic overflow: {e}") from e


def _finite(value: float) -> float:
    if not math.isfinite(value):
        raise EvaluationError(f"Non-finite result: {value}")
    return value


def evaluate(sanitized: str) -> EvaluationOutcome:
    """
    Вычисляет очищенную строку выражения.

    Пустая строка, синтаксическая ошибка и ошибка вычисления дают Failure;
    исключения наружу не выходят.
    """
    from .parser import ExpressionParser, ParseError

    if not sanitized:
        return Failure("Empty expression")

    try:
        tree = ExpressionParser().parse(sanitized)
        return Success(ExpressionEvaluator().evaluate(tree))
    except (ParseError, ValueError, EvaluationError, RecursionError) as e:
        return Failure(str(e))


__all__ = ["EvaluationError", "ExpressionEvaluator", "evaluate"]
