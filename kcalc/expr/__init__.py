"""
Арифметические выражения: очистка, лексер, парсер, вычислитель.
"""

from __future__ import annotations

from .evaluator import EvaluationError, ExpressionEvaluator, evaluate
from .parser import ExpressionParser, ParseError
from .sanitize import sanitize

__all__ = [
    "sanitize",
    "evaluate",
    "ExpressionParser",
    "ExpressionEvaluator",
    "ParseError",
    "EvaluationError",
]
