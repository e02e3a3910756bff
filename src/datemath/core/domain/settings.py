"""
DateMathSettings — конфигурация разрешения выражений date math

Immutable Pydantic модель. Некорректная конфигурация является ошибкой вызывающего кода
(ValidationError), а не невалидное выражение.
"""

from typing import Final

from pydantic import BaseModel, Field


# Январь (месяцы нумеруются с 0)
DEFAULT_FISCAL_YEAR_START_MONTH: Final[int] = 0

# Воскресенье в нумерации datetime.weekday() (понедельник = 0)
DEFAULT_WEEK_START: Final[int] = 6


class DateMathSettings(BaseModel):
    """
    Параметры разрешения выражения.

    - round_up: округлять "/" к концу единицы (endOf) вместо начала (startOf)
    - timezone: None или "browser" (локальная зона), "utc" или IANA имя
    - fiscal_year_start_month: месяц начала fiscal year [0, 11]
    - week_start: первый день недели для "/w" [0, 6]
    """

    round_up: bool = Field(False, description="Округление к концу единицы")
    timezone: str | None = Field(None, description="Часовой пояс")
    fiscal_year_start_month: int = Field(
        DEFAULT_FISCAL_YEAR_START_MONTH, ge=0, le=11, description="Месяц начала fiscal year (0 = январь)"
    )
    week_start: int = Field(
        DEFAULT_WEEK_START, ge=0, le=6, description="Первый день недели (0 = понедельник)"
    )

    model_config = {"frozen": True}
