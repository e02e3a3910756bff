"""
datemath — relative date math expressions.

Resolves expressions like "now-6h", "now/d" or "2021-01-01||+1M/M" into
concrete points in time, including fiscal year / quarter rounding.
"""

from datemath.core.domain import (
    DateMathSettings,
    MathExpression,
    Operation,
    OperationKind,
    Unit,
)
from datemath.evaluator import (
    DateMathRangeError,
    FiscalRoundingError,
    apply_expression,
    evaluate_math,
    round_to_fiscal,
)
from datemath.parser import (
    DateMathError,
    DateMathSyntaxError,
    is_math_expression,
    is_number,
    split_expression,
    tokenize,
)
from datemath.resolver import DateMathResolver, is_valid, resolve, resolve_request

__all__ = [
    # Domain
    "DateMathSettings",
    "MathExpression",
    "Operation",
    "OperationKind",
    "Unit",
    # Parser
    "DateMathError",
    "DateMathSyntaxError",
    "is_math_expression",
    "is_number",
    "split_expression",
    "tokenize",
    # Evaluator
    "DateMathRangeError",
    "FiscalRoundingError",
    "apply_expression",
    "evaluate_math",
    "round_to_fiscal",
    # Resolver
    "DateMathResolver",
    "resolve",
    "is_valid",
    "resolve_request",
]
