"""
Fiscal Rounding — округление к границам fiscal year / fiscal quarter

Fiscal year начинается с месяца fiscal_year_start_month (0 = январь).

ФОРМУЛЫ:
    round down (year):    ts - ((month0 - fy_start) mod 12) месяцев, startOf(M)
    round down (quarter): ts - ((month0 - fy_start) mod 3) месяцев, startOf(M)
    round up:             round down + (period - 1) месяцев, endOf(M)

Round up ровно на один fiscal период позже round down (включая последний
момент периода). Рекурсия всегда глубины 1.
"""

from datetime import datetime
from typing import Final

from datemath.core.calendar import add, end_of, start_of, subtract
from datemath.core.domain.operation import Unit
from datemath.core.domain.settings import DEFAULT_FISCAL_YEAR_START_MONTH
from datemath.parser.tokenizer import DateMathError

# Длина fiscal периода в месяцах
FISCAL_PERIOD_MONTHS: Final[dict[Unit, int]] = {
    Unit.YEAR: 12,
    Unit.QUARTER: 3,
}


class FiscalRoundingError(DateMathError):
    """Fiscal округление не определено для единицы (только year и quarter)."""


def round_to_fiscal(
    timestamp: datetime,
    unit: Unit,
    round_up: bool = False,
    fiscal_year_start_month: int = DEFAULT_FISCAL_YEAR_START_MONTH,
) -> datetime:
    """
    Округление timestamp к началу/концу текущего fiscal year или quarter.

    Args:
        timestamp: исходный момент
        unit: Unit.YEAR или Unit.QUARTER
        round_up: True → последний момент периода, False → первый
        fiscal_year_start_month: месяц начала fiscal year [0, 11]

    Returns:
        Новый datetime на границе fiscal периода

    Raises:
        FiscalRoundingError: Если unit не year и не quarter

    Examples:
        2021-06-15, quarter, fy_start=3 (апрель) → 2021-04-01 00:00
        2021-06-15, year, fy_start=3, round_up → 2022-03-31 23:59:59.999999
    """
    period_months = FISCAL_PERIOD_MONTHS.get(unit)
    if period_months is None:
        raise FiscalRoundingError(f"Fiscal rounding is not supported for unit {unit.value!r}")

    if round_up:
        period_start = round_to_fiscal(timestamp, unit, False, fiscal_year_start_month)
        return end_of(add(period_start, period_months - 1, Unit.MONTH), Unit.MONTH)

    months_into_period = (timestamp.month - 1 - fiscal_year_start_month) % period_months
    return start_of(subtract(timestamp, months_into_period, Unit.MONTH), Unit.MONTH)
