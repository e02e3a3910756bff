"""
Domain models and value objects.

Contains Operation, MathExpression and DateMathSettings.
"""

from datemath.core.domain.operation import (
    FISCAL_MARKER,
    FISCAL_UNITS,
    OPERATION_SYMBOLS,
    MathExpression,
    Operation,
    OperationKind,
    Unit,
)
from datemath.core.domain.settings import (
    DEFAULT_FISCAL_YEAR_START_MONTH,
    DEFAULT_WEEK_START,
    DateMathSettings,
)

__all__ = [
    # Operation module
    "FISCAL_MARKER",
    "FISCAL_UNITS",
    "OPERATION_SYMBOLS",
    "Operation",
    "OperationKind",
    "Unit",
    "MathExpression",
    # Settings
    "DEFAULT_FISCAL_YEAR_START_MONTH",
    "DEFAULT_WEEK_START",
    "DateMathSettings",
]
