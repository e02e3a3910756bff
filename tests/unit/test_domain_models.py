"""
Тесты для доменных моделей: Operation, MathExpression, DateMathSettings

Проверяет:
1. Создание и валидацию моделей Pydantic
2. Инварианты операций (round count, fiscal unit)
3. Immutability (frozen=True)
4. Каноническую текстовую запись
5. Сериализацию в JSON
"""

import pytest
from jsonschema import ValidationError as ContractValidationError
from pydantic import ValidationError

from datemath.core.domain import (
    DateMathSettings,
    MathExpression,
    Operation,
    OperationKind,
    Unit,
)


# =============================================================================
# OPERATION TESTS
# =============================================================================


class TestOperation:
    """Тесты модели Operation"""

    def test_default_count_is_one(self) -> None:
        """count по умолчанию равен 1"""
        op = Operation(kind=OperationKind.ADD, unit=Unit.HOUR)
        assert op.count == 1
        assert op.fiscal is False

    def test_round_requires_count_one(self) -> None:
        """Округление до "2 дней" не определено"""
        with pytest.raises(ValidationError) as exc_info:
            Operation(kind=OperationKind.ROUND, count=2, unit=Unit.DAY)
        assert "round operation requires count 1" in str(exc_info.value)

    def test_negative_count_rejected(self) -> None:
        """count не может быть отрицательным"""
        with pytest.raises(ValidationError):
            Operation(kind=OperationKind.SUBTRACT, count=-1, unit=Unit.DAY)

    def test_zero_count_allowed_for_shift(self) -> None:
        """+0d — допустимая операция (no-op)"""
        op = Operation(kind=OperationKind.ADD, count=0, unit=Unit.DAY)
        assert op.count == 0

    @pytest.mark.parametrize("unit", [Unit.YEAR, Unit.QUARTER])
    def test_fiscal_allowed_for_year_and_quarter(self, unit: Unit) -> None:
        """fiscal допустим для year и quarter"""
        op = Operation(kind=OperationKind.ROUND, unit=unit, fiscal=True)
        assert op.fiscal is True

    @pytest.mark.parametrize("unit", [Unit.MONTH, Unit.WEEK, Unit.DAY, Unit.HOUR])
    def test_fiscal_rejected_for_other_units(self, unit: Unit) -> None:
        """fiscal недопустим для остальных единиц"""
        with pytest.raises(ValidationError) as exc_info:
            Operation(kind=OperationKind.ROUND, unit=unit, fiscal=True)
        assert "fiscal modifier is not supported" in str(exc_info.value)

    def test_operation_immutable(self) -> None:
        """Operation должна быть immutable (frozen=True)"""
        op = Operation(kind=OperationKind.ADD, count=3, unit=Unit.DAY)
        with pytest.raises(ValidationError):
            op.count = 5

    def test_operation_from_unit_codes(self) -> None:
        """Enum значения совпадают с кодами грамматики"""
        op = Operation(kind="subtract", count=6, unit="h")
        assert op.kind == OperationKind.SUBTRACT
        assert op.unit == Unit.HOUR

    def test_month_and_minute_are_distinct(self) -> None:
        """M — месяц, m — минута"""
        assert Unit("M") == Unit.MONTH
        assert Unit("m") == Unit.MINUTE

    def test_to_text(self) -> None:
        """Каноническая запись операций"""
        assert Operation(kind=OperationKind.ADD, count=2, unit=Unit.DAY).to_text() == "+2d"
        assert Operation(kind=OperationKind.SUBTRACT, unit=Unit.MONTH).to_text() == "-1M"
        assert Operation(kind=OperationKind.ROUND, unit=Unit.WEEK).to_text() == "/w"
        assert (
            Operation(kind=OperationKind.ROUND, unit=Unit.QUARTER, fiscal=True).to_text() == "/fQ"
        )

    def test_json_dump(self) -> None:
        """JSON сериализация использует коды единиц"""
        op = Operation(kind=OperationKind.ROUND, unit=Unit.DAY)
        assert op.model_dump(mode="json") == {
            "kind": "round",
            "count": 1,
            "unit": "d",
            "fiscal": False,
        }

    def test_payload_matches_contract(self) -> None:
        """to_payload проходит контракт operation и восстанавливается через from_payload"""
        op = Operation(kind=OperationKind.SUBTRACT, count=3, unit=Unit.QUARTER, fiscal=True)
        payload = op.to_payload()
        assert payload == {"kind": "subtract", "count": 3, "unit": "Q", "fiscal": True}
        assert Operation.from_payload(payload) == op

    @pytest.mark.parametrize(
        "payload",
        [
            {"kind": "add", "count": 1, "unit": "d"},
            {"kind": "add", "count": 1, "unit": "x", "fiscal": False},
            {"kind": "round", "count": 2, "unit": "d", "fiscal": False},
            {"kind": "add", "count": 1, "unit": "d", "fiscal": False, "extra": 1},
        ],
    )
    def test_from_payload_rejects_contract_violation(self, payload: dict) -> None:
        """Payload вне контракта отклоняется до создания модели"""
        with pytest.raises(ContractValidationError):
            Operation.from_payload(payload)


# =============================================================================
# MATH EXPRESSION TESTS
# =============================================================================


class TestMathExpression:
    """Тесты модели MathExpression"""

    def test_empty_expression(self) -> None:
        """Пустое выражение — no-op"""
        expr = MathExpression()
        assert expr.is_empty
        assert expr.to_text() == ""

    def test_order_preserved(self) -> None:
        """Порядок операций сохраняется"""
        expr = MathExpression(
            operations=(
                Operation(kind=OperationKind.SUBTRACT, unit=Unit.DAY),
                Operation(kind=OperationKind.ROUND, unit=Unit.DAY),
            )
        )
        assert not expr.is_empty
        assert expr.to_text() == "-1d/d"
        assert [op.kind for op in expr.operations] == [OperationKind.SUBTRACT, OperationKind.ROUND]

    def test_from_payload_preserves_order(self) -> None:
        """Выражение из JSON операций сохраняет порядок и текстовую запись"""
        payload = [
            {"kind": "subtract", "count": 1, "unit": "d", "fiscal": False},
            {"kind": "round", "count": 1, "unit": "d", "fiscal": False},
        ]
        expr = MathExpression.from_payload(payload)
        assert expr.to_text() == "-1d/d"
        assert expr.to_payload() == payload


# =============================================================================
# SETTINGS TESTS
# =============================================================================


class TestDateMathSettings:
    """Тесты конфигурации"""

    def test_defaults(self) -> None:
        """Значения по умолчанию: round down, локальная зона, январь, воскресенье"""
        settings = DateMathSettings()
        assert settings.round_up is False
        assert settings.timezone is None
        assert settings.fiscal_year_start_month == 0
        assert settings.week_start == 6

    @pytest.mark.parametrize("month", [-1, 12])
    def test_fiscal_month_out_of_range(self, month: int) -> None:
        """fiscal_year_start_month вне [0, 11] отклоняется"""
        with pytest.raises(ValidationError):
            DateMathSettings(fiscal_year_start_month=month)

    def test_week_start_out_of_range(self) -> None:
        """week_start вне [0, 6] отклоняется"""
        with pytest.raises(ValidationError):
            DateMathSettings(week_start=7)

    def test_settings_immutable(self) -> None:
        """Settings immutable (frozen=True)"""
        settings = DateMathSettings(timezone="utc")
        with pytest.raises(ValidationError):
            settings.timezone = "Europe/Berlin"
