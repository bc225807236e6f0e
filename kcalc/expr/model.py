"""
Модели данных для арифметических выражений.

Узлы абстрактного синтаксического дерева, которое строит парсер
и обходит вычислитель.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class NodeType(Enum):
    """Типы узлов выражения."""
    NUMBER = "number"
    NEG = "neg"
    POS = "pos"
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    GROUP = "group"  # явная группировка в скобках


BINARY_SYMBOLS = {
    NodeType.ADD: "+",
    NodeType.SUB: "-",
    NodeType.MUL: "*",
    NodeType.DIV: "/",
}


@dataclass
class Expr(ABC):
    """Базовый абстрактный класс для всех узлов выражения."""

    @abstractmethod
    def get_type(self) -> NodeType:
        """Возвращает тип узла."""
        pass

    def __str__(self) -> str:
        return self._to_string()

    @abstractmethod
    def _to_string(self) -> str:
        pass


@dataclass
class NumberLiteral(Expr):
    """
    Числовой литерал.

    text хранится как в исходной строке ("5.", ".5"), value уже приведён к float.
    """
    text: str
    value: float

    def get_type(self) -> NodeType:
        return NodeType.NUMBER

    def _to_string(self) -> str:
        return self.text


@dataclass
class UnaryExpr(Expr):
    """Унарный плюс или минус: -operand, +operand"""
    operand: Expr
    operator: NodeType  # NEG или POS

    def get_type(self) -> NodeType:
        return self.operator

    def _to_string(self) -> str:
        sign = "-" if self.operator == NodeType.NEG else "+"
        return f"{sign}{self.operand}"


@dataclass
class GroupExpr(Expr):
    """Выражение в скобках: (expr)"""
    expr: Expr

    def get_type(self) -> NodeType:
        return NodeType.GROUP

    def _to_string(self) -> str:
        return f"({self.expr})"


@dataclass
class BinaryExpr(Expr):
    """
    Бинарная операция: left op right

    Поддерживаемые операторы: ADD, SUB, MUL, DIV.
    """
    left: Expr
    right: Expr
    operator: NodeType

    def get_type(self) -> NodeType:
        return self.operator

    def _to_string(self) -> str:
        return f"{self.left}{BINARY_SYMBOLS[self.operator]}{self.right}"


__all__ = [
    "Expr",
    "NodeType",
    "NumberLiteral",
    "UnaryExpr",
    "GroupExpr",
    "BinaryExpr",
    "BINARY_SYMBOLS",
]
