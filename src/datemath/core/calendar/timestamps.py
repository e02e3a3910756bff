"""
Calendar — арифметика и округление timestamp по единицам

Календарный слой, поверх которого работает date math:
- add/subtract: сдвиг на N единиц
- start_of/end_of: граница единицы (начало или последний момент)
- resolve_timezone/now: aware "сейчас" в нужном часовом поясе
- parse_iso: строгий ISO-8601

Все функции возвращают новый datetime (datetime immutable), входной timestamp
никогда не изменяется.

ПРАВИЛА АРИФМЕТИКИ:
1. y, Q, M, w, d: wall-clock арифметика (relativedelta), день месяца зажимается
   (2021-01-31 +1M = 2021-02-28)
2. h, m, s: сдвиг абсолютного времени через UTC (корректно через переходы DST)
3. Несуществующее wall-clock время (DST gap) разрешается через tz.resolve_imaginary
"""

from datetime import datetime, timedelta, tzinfo
from typing import Callable, Final, Optional

import structlog
from dateutil import tz
from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

from datemath.core.domain.operation import Unit
from datemath.core.domain.settings import DEFAULT_WEEK_START

logger = structlog.get_logger(__name__)

# Источник "сейчас": принимает tzinfo, возвращает aware datetime
Clock = Callable[[tzinfo], datetime]

# Имена, означающие локальную зону процесса
LOCAL_TIMEZONE_NAMES: Final[frozenset[str]] = frozenset({"", "browser", "local"})

# Единицы с фиксированной длительностью (секунды)
CLOCK_UNIT_SECONDS: Final[dict[Unit, int]] = {
    Unit.HOUR: 3600,
    Unit.MINUTE: 60,
    Unit.SECOND: 1,
}

# Последний представимый момент секунды (точность datetime: микросекунды)
LAST_MICROSECOND: Final[int] = 999999


# =============================================================================
# ЧАСОВЫЕ ПОЯСА И "СЕЙЧАС"
# =============================================================================


def resolve_timezone(name: Optional[str]) -> tzinfo:
    """
    Разрешение имени часового пояса.

    Args:
        name: None, "browser" дают локальную зону; "utc" (любой регистр) даёт UTC;
            иначе IANA имя (например, "Europe/Moscow")

    Returns:
        tzinfo. Неизвестное имя → локальная зона (с warning в лог)
    """
    if name is None or name.strip().lower() in LOCAL_TIMEZONE_NAMES:
        return tz.tzlocal()

    if name.strip().lower() == "utc":
        return tz.UTC

    zone = tz.gettz(name)
    if zone is None:
        logger.warning("unknown_timezone_fallback_to_local", timezone=name)
        return tz.tzlocal()
    return zone


def system_clock(zone: tzinfo) -> datetime:
    return datetime.now(zone)


def now(zone: tzinfo, clock: Optional[Clock] = None) -> datetime:
    """Текущий момент в зоне zone. Каждый вызов возвращает независимое значение."""
    current = (clock or system_clock)(zone)
    if current.tzinfo is None:
        return current.replace(tzinfo=zone)
    return current.astimezone(zone)


def parse_iso(text: str, zone: tzinfo) -> datetime:
    """
    Строгий разбор ISO-8601.

    Args:
        text: ISO-8601 дата или дата-время
        zone: зона для naive значений и для приведения aware значений

    Returns:
        Aware datetime в зоне zone

    Raises:
        ValueError: Если text не является ISO-8601
    """
    parsed = isoparse(text)
    if parsed.tzinfo is None:
        return _normalize(parsed.replace(tzinfo=zone))
    return parsed.astimezone(zone)


# =============================================================================
# СДВИГИ
# =============================================================================


def add(timestamp: datetime, count: int, unit: Unit) -> datetime:
    """
    Сдвиг timestamp вперёд на count единиц.

    Raises:
        OverflowError, ValueError: Если результат вне диапазона datetime
    """
    seconds = CLOCK_UNIT_SECONDS.get(unit)
    if seconds is not None:
        return _shift_absolute(timestamp, timedelta(seconds=seconds * count))
    return _normalize(timestamp + _calendar_delta(count, unit))


def subtract(timestamp: datetime, count: int, unit: Unit) -> datetime:
    """Сдвиг timestamp назад на count единиц."""
    return add(timestamp, -count, unit)


def _calendar_delta(count: int, unit: Unit) -> relativedelta:
    if unit == Unit.YEAR:
        return relativedelta(years=count)
    if unit == Unit.QUARTER:
        return relativedelta(months=3 * count)
    if unit == Unit.MONTH:
        return relativedelta(months=count)
    if unit == Unit.WEEK:
        return relativedelta(weeks=count)
    if unit == Unit.DAY:
        return relativedelta(days=count)
    raise ValueError(f"Unit {unit!r} has no calendar delta")


def _shift_absolute(timestamp: datetime, delta: timedelta) -> datetime:
    if timestamp.tzinfo is None:
        return timestamp + delta
    shifted = timestamp.astimezone(tz.UTC) + delta
    return shifted.astimezone(timestamp.tzinfo)


def _normalize(timestamp: datetime) -> datetime:
    if timestamp.tzinfo is None:
        return timestamp
    return tz.resolve_imaginary(timestamp)


# =============================================================================
# ГРАНИЦЫ ЕДИНИЦ
# =============================================================================


def start_of(timestamp: datetime, unit: Unit, week_start: int = DEFAULT_WEEK_START) -> datetime:
    """
    Первый момент единицы, содержащей timestamp.

    Кварталы начинаются в январе, апреле, июле и октябре.
    Неделя начинается с week_start (нумерация datetime.weekday()).

    Examples:
        2021-06-15 13:45 /Q → 2021-04-01 00:00
        2021-06-15 13:45 /h → 2021-06-15 13:00
    """
    if unit == Unit.SECOND:
        return timestamp.replace(microsecond=0)
    if unit == Unit.MINUTE:
        return timestamp.replace(second=0, microsecond=0)
    if unit == Unit.HOUR:
        return timestamp.replace(minute=0, second=0, microsecond=0)

    midnight = timestamp.replace(hour=0, minute=0, second=0, microsecond=0, fold=0)

    if unit == Unit.DAY:
        snapped = midnight
    elif unit == Unit.WEEK:
        snapped = midnight - relativedelta(days=(timestamp.weekday() - week_start) % 7)
    elif unit == Unit.MONTH:
        snapped = midnight.replace(day=1)
    elif unit == Unit.QUARTER:
        snapped = midnight.replace(month=(timestamp.month - 1) // 3 * 3 + 1, day=1)
    elif unit == Unit.YEAR:
        snapped = midnight.replace(month=1, day=1)
    else:
        raise ValueError(f"Unsupported unit: {unit!r}")

    return _normalize(snapped)


def end_of(timestamp: datetime, unit: Unit, week_start: int = DEFAULT_WEEK_START) -> datetime:
    """
    Последний момент единицы, содержащей timestamp (включительно).

    Последний день единицы строится напрямую, без перехода к следующей
    единице, поэтому последний период диапазона datetime (9999-12-31)
    тоже округляется вверх.

    Examples:
        2021-06-15 13:45 /d (round up) → 2021-06-15 23:59:59.999999
        9999-06-15 /y (round up) → 9999-12-31 23:59:59.999999
    """
    if unit == Unit.SECOND:
        return timestamp.replace(microsecond=LAST_MICROSECOND)
    if unit == Unit.MINUTE:
        return timestamp.replace(second=59, microsecond=LAST_MICROSECOND)
    if unit == Unit.HOUR:
        return timestamp.replace(minute=59, second=59, microsecond=LAST_MICROSECOND)

    if unit == Unit.DAY:
        last_day = timestamp
    elif unit == Unit.WEEK:
        last_day = timestamp + relativedelta(days=6 - (timestamp.weekday() - week_start) % 7)
    elif unit == Unit.MONTH:
        last_day = timestamp + relativedelta(day=31)
    elif unit == Unit.QUARTER:
        last_day = timestamp + relativedelta(month=(timestamp.month - 1) // 3 * 3 + 3, day=31)
    elif unit == Unit.YEAR:
        last_day = timestamp + relativedelta(month=12, day=31)
    else:
        raise ValueError(f"Unsupported unit: {unit!r}")

    # fold=1: при повторе часа в конце дня берётся второе вхождение
    last_moment = last_day.replace(
        hour=23, minute=59, second=59, microsecond=LAST_MICROSECOND, fold=1
    )
    return _normalize(last_moment)