"""
Math Evaluator — применение операций date math к timestamp

Каждая операция преобразует timestamp в новый timestamp:
- ROUND + fiscal → round_to_fiscal
- ROUND → end_of (round_up) или start_of
- ADD → add(count, unit)
- SUBTRACT → subtract(count, unit)

Операции применяются строго слева направо к результату предыдущей.
Любая ошибка (синтаксис, fiscal unit, выход за диапазон datetime) делает
невалидным всё выражение: evaluate_math возвращает None, частичный сдвиг
не возвращается.
"""

from datetime import datetime
from typing import Optional

import structlog

from datemath.core.calendar import add, end_of, start_of, subtract
from datemath.core.domain.operation import MathExpression, Operation, OperationKind
from datemath.core.domain.settings import DEFAULT_FISCAL_YEAR_START_MONTH, DEFAULT_WEEK_START
from datemath.evaluator.fiscal import round_to_fiscal
from datemath.parser.tokenizer import DateMathError, tokenize

logger = structlog.get_logger(__name__)


class DateMathRangeError(DateMathError):
    """Результат операции вне диапазона datetime (например, "+9999999999y")."""


def apply_operation(
    timestamp: datetime,
    operation: Operation,
    round_up: bool = False,
    fiscal_year_start_month: int = DEFAULT_FISCAL_YEAR_START_MONTH,
    week_start: int = DEFAULT_WEEK_START,
) -> datetime:
    """
    Применение одной операции.

    Raises:
        FiscalRoundingError: fiscal округление для единицы кроме y/Q
        DateMathRangeError: результат вне диапазона datetime
    """
    try:
        if operation.kind == OperationKind.ROUND:
            if operation.fiscal:
                return round_to_fiscal(timestamp, operation.unit, round_up, fiscal_year_start_month)
            if round_up:
                return end_of(timestamp, operation.unit, week_start)
            return start_of(timestamp, operation.unit, week_start)

        if operation.kind == OperationKind.ADD:
            return add(timestamp, operation.count, operation.unit)

        return subtract(timestamp, operation.count, operation.unit)
    except DateMathError:
        raise
    except (OverflowError, ValueError) as e:
        raise DateMathRangeError(f"Operation {operation.to_text()!r} out of range: {e}") from e


def apply_expression(
    expression: MathExpression,
    timestamp: datetime,
    round_up: bool = False,
    fiscal_year_start_month: int = DEFAULT_FISCAL_YEAR_START_MONTH,
    week_start: int = DEFAULT_WEEK_START,
) -> datetime:
    """
    Последовательное применение операций выражения.

    Пустое выражение возвращает timestamp без изменений.

    Raises:
        DateMathError: Любая операция невалидна
    """
    result = timestamp
    for operation in expression.operations:
        result = apply_operation(result, operation, round_up, fiscal_year_start_month, week_start)
    return result


def evaluate_math(
    math_string: str,
    timestamp: datetime,
    round_up: bool = False,
    fiscal_year_start_month: int = DEFAULT_FISCAL_YEAR_START_MONTH,
    week_start: int = DEFAULT_WEEK_START,
) -> Optional[datetime]:
    """
    Разбор и применение math string к timestamp.

    Args:
        math_string: например "-1d/d"; пробелы игнорируются
        timestamp: исходный момент (не изменяется)
        round_up: "/" округляет к концу единицы вместо начала
        fiscal_year_start_month: месяц начала fiscal year [0, 11]
        week_start: первый день недели (0 = понедельник)

    Returns:
        Новый datetime или None, если выражение невалидно
    """
    try:
        expression = tokenize(math_string)
        return apply_expression(expression, timestamp, round_up, fiscal_year_start_month, week_start)
    except DateMathError as e:
        logger.debug("invalid_math_expression", math_string=math_string, error=str(e))
        return None
