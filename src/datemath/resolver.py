"""
Resolver — разрешение выражения date math в конкретный момент времени

Поток:
    text → split_expression → anchor (now / ISO-8601) → evaluate_math → datetime

Невалидное выражение (грамматика, ISO anchor, выход за диапазон) → None.
Исключения наружу не выходят, кроме ошибок конфигурации (ValidationError).
"""

from datetime import date, datetime, time
from typing import Any, Dict, Optional

import structlog

from datemath.contracts import validate_resolve_request
from datemath.core.calendar import Clock, now, parse_iso, resolve_timezone
from datemath.core.domain.settings import (
    DEFAULT_FISCAL_YEAR_START_MONTH,
    DEFAULT_WEEK_START,
    DateMathSettings,
)
from datemath.evaluator import evaluate_math
from datemath.parser import split_expression

logger = structlog.get_logger(__name__)


class DateMathResolver:
    """
    Разрешение выражений date math с фиксированными настройками.

    Примеры выражений:
    - "now" → текущий момент
    - "now-6h" → 6 часов назад
    - "now/d" → начало (или конец при round_up) текущего дня
    - "2021-01-01||+1M/M" → начало февраля 2021
    """

    def __init__(
        self,
        settings: Optional[DateMathSettings] = None,
        clock: Optional[Clock] = None
    ):
        """
        Args:
            settings: параметры разрешения (по умолчанию DateMathSettings())
            clock: источник текущего момента (по умолчанию системные часы)
        """
        self.settings = settings or DateMathSettings()
        self.clock = clock

    def resolve(self, text: Any) -> Optional[datetime]:
        """
        Разрешение text в datetime.

        Args:
            text: выражение (str), datetime (возвращается как есть) или date
                (полночь в зоне настроек)

        Returns:
            datetime или None, если text невалиден
        """
        if isinstance(text, datetime):
            return text

        zone = resolve_timezone(self.settings.timezone)

        if isinstance(text, date):
            return datetime.combine(text, time.min, tzinfo=zone)

        if not isinstance(text, str) or text == "":
            return None

        split = split_expression(text)

        if split.is_now:
            anchor = now(zone, self.clock)
        else:
            try:
                anchor = parse_iso(split.anchor, zone)
            except (ValueError, OverflowError) as e:
                logger.debug("invalid_anchor", text=text, anchor=split.anchor, error=str(e))
                return None

        if split.math_string == "":
            return anchor

        return evaluate_math(
            split.math_string,
            anchor,
            round_up=self.settings.round_up,
            fiscal_year_start_month=self.settings.fiscal_year_start_month,
            week_start=self.settings.week_start,
        )

    def is_valid(self, text: Any) -> bool:
        """True, если text разрешается в datetime."""
        return self.resolve(text) is not None


def resolve(
    text: Any,
    round_up: bool = False,
    timezone: Optional[str] = None,
    fiscal_year_start_month: int = DEFAULT_FISCAL_YEAR_START_MONTH,
    *,
    week_start: int = DEFAULT_WEEK_START,
    clock: Optional[Clock] = None,
) -> Optional[datetime]:
    """
    Разрешение выражения date math.

    Args:
        text: выражение, например "now-1d/d" или "2021-06-15||/fQ"
        round_up: "/" округляет к концу единицы вместо начала
        timezone: None или "browser" (локальная зона), "utc" или IANA имя
        fiscal_year_start_month: месяц начала fiscal year [0, 11]
        week_start: первый день недели (0 = понедельник, 6 = воскресенье)
        clock: источник текущего момента для "now"

    Returns:
        datetime или None, если выражение невалидно

    Raises:
        pydantic.ValidationError: Некорректные настройки
    """
    settings = DateMathSettings(
        round_up=round_up,
        timezone=timezone,
        fiscal_year_start_month=fiscal_year_start_month,
        week_start=week_start,
    )
    return DateMathResolver(settings, clock).resolve(text)


def is_valid(text: Any, timezone: Optional[str] = None, *, clock: Optional[Clock] = None) -> bool:
    """True, если text является datetime или разрешимым выражением."""
    return resolve(text, timezone=timezone, clock=clock) is not None


def resolve_request(payload: Dict[str, Any], *, clock: Optional[Clock] = None) -> Optional[datetime]:
    """
    Разрешение выражения из JSON запроса (контракт resolve_request).

    Raises:
        jsonschema.ValidationError: Если payload не соответствует контракту
    """
    validate_resolve_request(payload)
    settings = DateMathSettings(**{key: value for key, value in payload.items() if key != "text"})
    return DateMathResolver(settings, clock).resolve(payload["text"])
