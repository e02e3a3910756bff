"""
Tokenizer — разбор math string в последовательность Operation

Грамматика:
    math_string := { operation }
    operation   := operator [count] ["f"] unit
    operator    := "/" | "+" | "-"
    count       := digit { digit }      ; не более 10 цифр, по умолчанию 1
    unit        := "y" | "Q" | "M" | "w" | "d" | "h" | "m" | "s"

Разбор однопроходный, слева направо, без backtracking. Любое нарушение
грамматики делает невалидным всё выражение (DateMathSyntaxError),
частичный результат не возвращается.
"""

import re
from typing import Any, Final

from datemath.core.domain.operation import (
    FISCAL_MARKER,
    FISCAL_UNITS,
    MathExpression,
    Operation,
    OperationKind,
    Unit,
)

# Максимальная длина числа в операции
MAX_COUNT_LENGTH: Final[int] = 10

OPERATOR_KINDS: Final[dict[str, OperationKind]] = {
    "/": OperationKind.ROUND,
    "+": OperationKind.ADD,
    "-": OperationKind.SUBTRACT,
}

UNIT_CODES: Final[dict[str, Unit]] = {unit.value: unit for unit in Unit}

_NUMBER_PATTERN: Final[re.Pattern[str]] = re.compile(r"^-?\d+\.?\d*$", re.ASCII)
_WHITESPACE_PATTERN: Final[re.Pattern[str]] = re.compile(r"\s+")


class DateMathError(ValueError):
    """Базовая ошибка date math: выражение невалидно целиком."""


class DateMathSyntaxError(DateMathError):
    """
    Нарушение грамматики math string.

    Attributes:
        expression: math string без пробелов
        position: позиция курсора, на которой обнаружена ошибка
    """

    def __init__(self, message: str, expression: str, position: int):
        super().__init__(f"{message} at position {position} in {expression!r}")
        self.expression = expression
        self.position = position


def is_number(value: Any) -> bool:
    """
    Является ли value числовым литералом (целым или десятичным).

    Examples:
        >>> is_number("7")
        True
        >>> is_number("-1.5")
        True
        >>> is_number("d")
        False
    """
    return _NUMBER_PATTERN.match(str(value)) is not None


def strip_whitespace(math_string: str) -> str:
    return _WHITESPACE_PATTERN.sub("", math_string)


def tokenize(math_string: str) -> MathExpression:
    """
    Разбор math string в MathExpression.

    Args:
        math_string: например "-1d/d" или "+ 2h"

    Returns:
        MathExpression (пустая строка → пустое выражение)

    Raises:
        DateMathSyntaxError: Неизвестный оператор или единица, count у "/"
            отличен от 1, число длиннее MAX_COUNT_LENGTH, "f" у единицы
            кроме y/Q
    """
    text = strip_whitespace(math_string)
    operations: list[Operation] = []
    cursor = 0

    while cursor < len(text):
        operation, cursor = _read_operation(text, cursor)
        operations.append(operation)

    return MathExpression(operations=tuple(operations))


def _read_operation(text: str, cursor: int) -> tuple[Operation, int]:
    kind = OPERATOR_KINDS.get(text[cursor])
    if kind is None:
        raise DateMathSyntaxError(f"Unknown operator {text[cursor]!r}", text, cursor)
    cursor += 1

    count, cursor = _read_count(text, cursor)

    unit_position = cursor
    unit_char = text[cursor:cursor + 1]
    cursor += 1
    is_fiscal = unit_char == FISCAL_MARKER
    if is_fiscal:
        unit_position = cursor
        unit_char = text[cursor:cursor + 1]
        cursor += 1

    unit = UNIT_CODES.get(unit_char)
    if unit is None:
        raise DateMathSyntaxError(f"Unknown unit {unit_char!r}", text, unit_position)

    # Округление только до целой единицы: "/M" или "/1M", не "/2M"
    if kind == OperationKind.ROUND and count != 1:
        raise DateMathSyntaxError(f"Round operation requires count 1, got {count}", text, unit_position)

    if is_fiscal and unit not in FISCAL_UNITS:
        raise DateMathSyntaxError(f"Fiscal modifier not supported for unit {unit_char!r}", text, unit_position)

    return Operation(kind=kind, count=count, unit=unit, fiscal=is_fiscal), cursor


def _read_count(text: str, cursor: int) -> tuple[int, int]:
    # Нет цифры → count = 1, символ будет прочитан как единица
    if cursor >= len(text) or not is_number(text[cursor]):
        return 1, cursor

    start = cursor
    while cursor < len(text) and is_number(text[cursor]):
        cursor += 1
        if cursor - start > MAX_COUNT_LENGTH:
            raise DateMathSyntaxError(
                f"Count longer than {MAX_COUNT_LENGTH} digits", text, start
            )

    return int(text[start:cursor]), cursor
