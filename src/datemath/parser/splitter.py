"""
Expression Splitter — разделение выражения на anchor и math string

Формат: anchor ["||" math_string]

- anchor "now": текущий момент; math string идёт сразу после "now"
  ("now-1d"), разделитель "||" после "now" допустим, но не обязателен
- иначе anchor это ISO-8601, math string: всё после первого "||"
"""

from dataclasses import dataclass
from typing import Any, Final

NOW: Final[str] = "now"
SEPARATOR: Final[str] = "||"


@dataclass(frozen=True)
class SplitExpression:
    """Результат разделения выражения."""

    anchor: str
    math_string: str

    @property
    def is_now(self) -> bool:
        return self.anchor == NOW


def is_math_expression(text: Any) -> bool:
    """
    Содержит ли text относительную дату.

    True, если строка начинается с "now" или содержит "||".
    Не-строки (datetime и т.п.) дают False.

    Examples:
        >>> is_math_expression("now-1h")
        True
        >>> is_math_expression("2021-01-01")
        False
        >>> is_math_expression("2021-01-01||+1d")
        True
    """
    if not isinstance(text, str):
        return False
    return text.startswith(NOW) or SEPARATOR in text


def split_expression(text: str) -> SplitExpression:
    """
    Разделение текста на anchor и math string по первому "||".

    Текст без "||" и без "now" возвращается целиком как anchor с пустым
    math string (обычная дата, без date math).
    """
    if text.startswith(NOW):
        math_string = text[len(NOW):]
        if math_string.startswith(SEPARATOR):
            math_string = math_string[len(SEPARATOR):]
        return SplitExpression(anchor=NOW, math_string=math_string)

    anchor, _, math_string = text.partition(SEPARATOR)
    return SplitExpression(anchor=anchor, math_string=math_string)
