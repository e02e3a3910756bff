"""
Operation — Модель одной операции date math

Грамматика операции: operator [count] ["f"] unit

- operator: "/" (округление), "+" (сдвиг вперёд), "-" (сдвиг назад)
- count: неотрицательное целое, по умолчанию 1
- "f": fiscal-модификатор (только для year и quarter)
- unit: y, Q, M, w, d, h, m, s

Immutable Pydantic модели. Порядок операций в MathExpression значим:
каждая операция применяется к результату предыдущей.
"""

from enum import Enum
from typing import Any, Dict, Final, Iterable

from pydantic import BaseModel, Field, model_validator

from datemath.contracts import validate_operation


# =============================================================================
# ENUMS
# =============================================================================


class OperationKind(str, Enum):
    """Тип операции"""

    ROUND = "round"
    ADD = "add"
    SUBTRACT = "subtract"


class Unit(str, Enum):
    """Единица времени (значение = однобуквенный код из грамматики)"""

    YEAR = "y"
    QUARTER = "Q"
    MONTH = "M"
    WEEK = "w"
    DAY = "d"
    HOUR = "h"
    MINUTE = "m"
    SECOND = "s"


# Символ оператора в исходном тексте
OPERATION_SYMBOLS: Final[dict[OperationKind, str]] = {
    OperationKind.ROUND: "/",
    OperationKind.ADD: "+",
    OperationKind.SUBTRACT: "-",
}

# Единицы, к которым применим fiscal-модификатор
FISCAL_UNITS: Final[frozenset[Unit]] = frozenset({Unit.YEAR, Unit.QUARTER})

FISCAL_MARKER: Final[str] = "f"


# =============================================================================
# MODELS
# =============================================================================


class Operation(BaseModel):
    """
    Одна операция (kind, count, unit).

    Инварианты:
    - ROUND допускает только count == 1 (округление до "2 месяцев" не определено)
    - fiscal допустим только для YEAR и QUARTER
    """

    kind: OperationKind = Field(..., description="Тип операции")
    count: int = Field(1, ge=0, description="Количество единиц")
    unit: Unit = Field(..., description="Единица времени")
    fiscal: bool = Field(False, description="Fiscal-модификатор")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_invariants(self) -> "Operation":
        """Проверка инвариантов round/fiscal"""
        if self.kind == OperationKind.ROUND and self.count != 1:
            raise ValueError(f"round operation requires count 1, got {self.count}")
        if self.fiscal and self.unit not in FISCAL_UNITS:
            raise ValueError(f"fiscal modifier is not supported for unit {self.unit.value!r}")
        return self

    def to_text(self) -> str:
        """
        Каноническая запись операции.

        Examples:
            >>> Operation(kind=OperationKind.ADD, count=2, unit=Unit.DAY).to_text()
            '+2d'
            >>> Operation(kind=OperationKind.ROUND, unit=Unit.QUARTER, fiscal=True).to_text()
            '/fQ'
        """
        count = "" if self.kind == OperationKind.ROUND else str(self.count)
        marker = FISCAL_MARKER if self.fiscal else ""
        return f"{OPERATION_SYMBOLS[self.kind]}{count}{marker}{self.unit.value}"

    def to_payload(self) -> Dict[str, Any]:
        """JSON представление (контракт operation)."""
        return self.model_dump(mode="json")

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Operation":
        """
        Создание Operation из JSON представления.

        Raises:
            jsonschema.ValidationError: Если payload не соответствует контракту operation
        """
        validate_operation(payload)
        return cls.model_validate(payload)


class MathExpression(BaseModel):
    """Упорядоченная последовательность операций. Пустая последовательность означает no-op."""

    operations: tuple[Operation, ...] = Field(default=(), description="Операции слева направо")

    model_config = {"frozen": True}

    @property
    def is_empty(self) -> bool:
        return not self.operations

    def to_text(self) -> str:
        return "".join(op.to_text() for op in self.operations)

    def to_payload(self) -> list[Dict[str, Any]]:
        return [op.to_payload() for op in self.operations]

    @classmethod
    def from_payload(cls, payload: Iterable[Dict[str, Any]]) -> "MathExpression":
        """
        Создание MathExpression из списка JSON операций (порядок сохраняется).

        Raises:
            jsonschema.ValidationError: Если операция не соответствует контракту operation
        """
        return cls(operations=tuple(Operation.from_payload(item) for item in payload))
