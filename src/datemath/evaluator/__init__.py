"""Evaluator — applies parsed date math operations to timestamps."""

from .fiscal import FISCAL_PERIOD_MONTHS, FiscalRoundingError, round_to_fiscal
from .math_evaluator import (
    DateMathRangeError,
    apply_expression,
    apply_operation,
    evaluate_math,
)

__all__ = [
    # Fiscal rounding
    "FISCAL_PERIOD_MONTHS",
    "FiscalRoundingError",
    "round_to_fiscal",
    # Evaluator
    "DateMathRangeError",
    "apply_expression",
    "apply_operation",
    "evaluate_math",
]
