"""Parser — splitter and tokenizer for the date math mini-language."""

from .splitter import NOW, SEPARATOR, SplitExpression, is_math_expression, split_expression
from .tokenizer import (
    MAX_COUNT_LENGTH,
    OPERATOR_KINDS,
    UNIT_CODES,
    DateMathError,
    DateMathSyntaxError,
    is_number,
    strip_whitespace,
    tokenize,
)

__all__ = [
    # Splitter
    "NOW",
    "SEPARATOR",
    "SplitExpression",
    "is_math_expression",
    "split_expression",
    # Tokenizer
    "MAX_COUNT_LENGTH",
    "OPERATOR_KINDS",
    "UNIT_CODES",
    "DateMathError",
    "DateMathSyntaxError",
    "is_number",
    "strip_whitespace",
    "tokenize",
]
