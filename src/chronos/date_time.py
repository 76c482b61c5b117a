"""
DateTime — Immutable значение "instant + зона отображения"

DateTime хранит ровно два поля:
- instant_ns: наносекунды от Unix epoch (абсолютный instant)
- zone: Timezone, в которой выводятся civil-поля

Civil-поля (year..nanosecond, weekday) каждый раз выводятся из instant
в своей зоне и никогда не хранятся отдельно.

Календарная математика делегирована хосту:
- datetime/timedelta: нормализация overflow при конструировании
  (month=13 → январь следующего года, day=0 → последний день предыдущего месяца)
- dateutil.relativedelta: сдвиг по годам/месяцам (31 янв + 1 месяц → 28/29 фев)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Все операции возвращают новый DateTime, исходный не меняется
2. Равенство: тот же instant И та же зона (по имени)
3. Сдвиги hour..nanosecond — чистое прибавление к instant
4. Сдвиги year/month/day — по civil-полям в зоне значения
5. Порядок в shift(): years → months → days → hours → minutes → seconds → nanoseconds
"""

import time
from dataclasses import dataclass
from datetime import datetime, timedelta
from datetime import timezone as _py_timezone
from datetime import tzinfo
from enum import IntEnum
from typing import TYPE_CHECKING, Final, Optional, Tuple
from zoneinfo import ZoneInfo

from dateutil import tz as dateutil_tz
from dateutil.relativedelta import relativedelta

from src.chronos.errors import ParseError
from src.chronos.formatting.engine import format_from_time, parse_to_time
from src.chronos.formatting.formats import CTIME, ISO8601, ISO8601_TZ
from src.chronos.timezone import UTC, Timezone

if TYPE_CHECKING:
    from src.chronos.contracts.snapshot import DateTimeSnapshot


# =============================================================================
# CONSTANTS
# =============================================================================

NS_PER_MICROSECOND: Final[int] = 1_000
NS_PER_MILLISECOND: Final[int] = 1_000_000
NS_PER_SECOND: Final[int] = 1_000_000_000
NS_PER_MINUTE: Final[int] = 60 * NS_PER_SECOND
NS_PER_HOUR: Final[int] = 60 * NS_PER_MINUTE

# Максимальные значения полей для ceil_*
LAST_HOUR: Final[int] = 23
LAST_MINUTE: Final[int] = 59
LAST_SECOND: Final[int] = 59
LAST_NANOSECOND: Final[int] = NS_PER_SECOND - 1

_UNIX_EPOCH: Final[datetime] = datetime(1970, 1, 1, tzinfo=_py_timezone.utc)
_ONE_MICROSECOND: Final[timedelta] = timedelta(microseconds=1)


class Weekday(IntEnum):
    """День недели (нумерация как у datetime.weekday(): понедельник = 0)."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6


# =============================================================================
# CONFIGURATION
# =============================================================================


@dataclass(frozen=True)
class DateTimeDefaults:
    """
    Значения по умолчанию.

    - timezone: зона для parse() без явной зоны
    - string_format: символьный формат для str(DateTime)
    """

    timezone: Timezone = UTC
    string_format: str = ISO8601_TZ


DEFAULTS: Final[DateTimeDefaults] = DateTimeDefaults()


# =============================================================================
# HOST CONVERSIONS
# =============================================================================


def civil_to_instant(
    year: int,
    month: int,
    day: int,
    hour: int,
    minute: int,
    second: int,
    nanosecond: int,
    location: tzinfo,
) -> int:
    """
    Civil-поля в зоне → наносекунды от epoch.

    Поля вне диапазона переносятся в старшие единицы (overflow normalization):
    месяц через divmod, остальные через timedelta от первого дня месяца.
    """
    year_carry, month_index = divmod(month - 1, 12)
    microsecond, sub_microsecond = divmod(nanosecond, NS_PER_MICROSECOND)
    civil = datetime(year + year_carry, month_index + 1, 1) + timedelta(
        days=day - 1,
        hours=hour,
        minutes=minute,
        seconds=second,
        microseconds=microsecond,
    )
    elapsed = civil.replace(tzinfo=location) - _UNIX_EPOCH
    return (elapsed // _ONE_MICROSECOND) * NS_PER_MICROSECOND + sub_microsecond


def instant_of(value: datetime) -> int:
    """aware datetime → наносекунды от epoch."""
    return ((value - _UNIX_EPOCH) // _ONE_MICROSECOND) * NS_PER_MICROSECOND


def instant_to_civil(instant_ns: int, location: tzinfo) -> Tuple[datetime, int]:
    """
    Наносекунды от epoch → (aware datetime в зоне, остаток < 1 мкс в нс).
    """
    microseconds, sub_microsecond = divmod(instant_ns, NS_PER_MICROSECOND)
    moment = (_UNIX_EPOCH + timedelta(microseconds=microseconds)).astimezone(location)
    return moment, sub_microsecond


def timezone_of(value: datetime) -> Timezone:
    """
    Timezone для datetime хоста.

    - naive datetime и dateutil tzlocal → "Local"
    - ZoneInfo → ключ зоны
    - UTC → "UTC"
    - фиксированный offset в целых часах → "Etc/GMT±N"

    Raises:
        ValueError: если зоне нельзя сопоставить имя
    """
    location = value.tzinfo
    if location is None or isinstance(location, dateutil_tz.tzlocal):
        return Timezone.local()
    if isinstance(location, ZoneInfo) and location.key is not None:
        return Timezone(location.key)
    if location is _py_timezone.utc or location == dateutil_tz.UTC:
        return UTC

    offset = value.utcoffset()
    if isinstance(location, _py_timezone) and offset is not None:
        hours, remainder = divmod(offset, timedelta(hours=1))
        if not remainder:
            if hours == 0:
                return UTC
            # Etc/GMT использует инвертированный знак: UTC+2 == Etc/GMT-2
            return Timezone(f"Etc/GMT{-hours:+d}")
    raise ValueError(f"Cannot derive a named time zone from tzinfo {location!r}")


# =============================================================================
# DATETIME
# =============================================================================


@dataclass(frozen=True, repr=False)
class DateTime:
    """
    Абсолютный instant с зоной отображения.

    Immutable (frozen=True). Сравнения <, <=, >, >= — только по instant;
    равенство учитывает и зону.
    """

    instant_ns: int
    zone: Timezone

    def __post_init__(self) -> None:
        if not isinstance(self.instant_ns, int) or isinstance(self.instant_ns, bool):
            raise TypeError(f"instant_ns must be int, got {type(self.instant_ns).__name__}")
        if not isinstance(self.zone, Timezone):
            raise TypeError(f"zone must be Timezone, got {type(self.zone).__name__}")

    # -------------------------------------------------------------------------
    # Civil view
    # -------------------------------------------------------------------------

    def _civil(self) -> Tuple[datetime, int]:
        return instant_to_civil(self.instant_ns, self.zone.location())

    def to_datetime(self) -> datetime:
        """aware datetime хоста (точность — микросекунды)."""
        return self._civil()[0]

    @property
    def year(self) -> int:
        return self.to_datetime().year

    @property
    def month(self) -> int:
        return self.to_datetime().month

    @property
    def day(self) -> int:
        return self.to_datetime().day

    @property
    def hour(self) -> int:
        return self.to_datetime().hour

    @property
    def minute(self) -> int:
        return self.to_datetime().minute

    @property
    def second(self) -> int:
        return self.to_datetime().second

    @property
    def nanosecond(self) -> int:
        moment, sub_microsecond = self._civil()
        return moment.microsecond * NS_PER_MICROSECOND + sub_microsecond

    @property
    def timezone(self) -> Timezone:
        return self.zone

    @property
    def weekday(self) -> Weekday:
        return Weekday(self.to_datetime().weekday())

    def fields(self) -> Tuple[int, int, int, int, int, int, int]:
        """(year, month, day, hour, minute, second, nanosecond) за одно разрешение зоны."""
        moment, sub_microsecond = self._civil()
        return (
            moment.year,
            moment.month,
            moment.day,
            moment.hour,
            moment.minute,
            moment.second,
            moment.microsecond * NS_PER_MICROSECOND + sub_microsecond,
        )

    def iso_calendar(self) -> Tuple[int, int, int]:
        """(year, month, day)."""
        year, month, day = self.fields()[:3]
        return year, month, day

    def unix_timestamp(self) -> int:
        """Секунды от Unix epoch."""
        return self.instant_ns // NS_PER_SECOND

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self.instant_ns < other.instant_ns

    def __le__(self, other: object) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self.instant_ns <= other.instant_ns

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self.instant_ns > other.instant_ns

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self.instant_ns >= other.instant_ns

    def is_between(self, start: "DateTime", end: "DateTime") -> bool:
        """
        Строгое сравнение: start < self < end.

        Границы исключены; dt.is_between(dt, x) всегда False.
        """
        return start.instant_ns < self.instant_ns < end.instant_ns

    # -------------------------------------------------------------------------
    # Timezone
    # -------------------------------------------------------------------------

    def in_timezone(self, timezone: Timezone) -> "DateTime":
        """
        Тот же instant в другой зоне отображения.

        Raises:
            UnknownTimeZone: если зона не разрешается
        """
        timezone.location()
        return DateTime(self.instant_ns, timezone)

    # -------------------------------------------------------------------------
    # Formatting
    # -------------------------------------------------------------------------

    def format(self, format: str) -> str:
        """Форматирование символьным форматом (например, "DD.MM.YYYY")."""
        return format_from_time(self.to_datetime(), format)

    def iso_format(self) -> str:
        """Пример: 2017-07-14T02:40:00.000000"""
        return self.format(ISO8601)

    def iso_format_tz(self) -> str:
        """Пример: 2017-07-14T02:40:00.000000+0200"""
        return self.format(ISO8601_TZ)

    def ctime_format(self) -> str:
        """Пример: Sat Feb 15 12:12:12 2020"""
        return self.format(CTIME)

    def __str__(self) -> str:
        return self.format(DEFAULTS.string_format)

    def __repr__(self) -> str:
        return f"DateTime({self.iso_format_tz()!r}, {self.zone.name!r})"

    # -------------------------------------------------------------------------
    # Copy / Replace
    # -------------------------------------------------------------------------

    def copy(self) -> "DateTime":
        """Новый DateTime, собранный из civil-полей и зоны текущего."""
        return new_date_time(*self.fields(), self.zone)

    def replace(
        self,
        year: Optional[int] = None,
        month: Optional[int] = None,
        day: Optional[int] = None,
        hour: Optional[int] = None,
        minute: Optional[int] = None,
        second: Optional[int] = None,
        nanosecond: Optional[int] = None,
    ) -> "DateTime":
        """
        Замена civil-полей (None — оставить текущее значение).

        Результат собирается одним вызовом конструктора с полным набором полей,
        поэтому невалидные комбинации (31 февраля) переносятся так же,
        как при конструировании, а не вызывают ошибку.
        """
        current = self.fields()
        replaced = tuple(
            value if value is not None else existing
            for value, existing in zip((year, month, day, hour, minute, second, nanosecond), current)
        )
        return new_date_time(*replaced, self.zone)

    def replace_year(self, year: int) -> "DateTime":
        return self.replace(year=year)

    def replace_month(self, month: int) -> "DateTime":
        return self.replace(month=month)

    def replace_day(self, day: int) -> "DateTime":
        return self.replace(day=day)

    def replace_hour(self, hour: int) -> "DateTime":
        return self.replace(hour=hour)

    def replace_minute(self, minute: int) -> "DateTime":
        return self.replace(minute=minute)

    def replace_second(self, second: int) -> "DateTime":
        return self.replace(second=second)

    def replace_nanosecond(self, nanosecond: int) -> "DateTime":
        return self.replace(nanosecond=nanosecond)

    # -------------------------------------------------------------------------
    # Shift
    # -------------------------------------------------------------------------

    def _shift_civil(self, delta: relativedelta) -> "DateTime":
        location = self.zone.location()
        moment, sub_microsecond = instant_to_civil(self.instant_ns, location)
        shifted = moment.replace(tzinfo=None) + delta
        return new_date_time(
            shifted.year,
            shifted.month,
            shifted.day,
            shifted.hour,
            shifted.minute,
            shifted.second,
            shifted.microsecond * NS_PER_MICROSECOND + sub_microsecond,
            self.zone,
        )

    def _shift_instant(self, nanoseconds: int) -> "DateTime":
        return DateTime(self.instant_ns + nanoseconds, self.zone)

    def shift_years(self, years: int) -> "DateTime":
        """Сдвиг на years лет (29 фев + 1 год → 28 фев)."""
        return self._shift_civil(relativedelta(years=years))

    def shift_months(self, months: int) -> "DateTime":
        """Сдвиг на months месяцев (31 янв + 1 месяц → последний день февраля)."""
        return self._shift_civil(relativedelta(months=months))

    def shift_days(self, days: int) -> "DateTime":
        """Сдвиг на days календарных дней (civil-время сохраняется)."""
        return self._shift_civil(relativedelta(days=days))

    def shift_hours(self, hours: int) -> "DateTime":
        return self._shift_instant(hours * NS_PER_HOUR)

    def shift_minutes(self, minutes: int) -> "DateTime":
        return self._shift_instant(minutes * NS_PER_MINUTE)

    def shift_seconds(self, seconds: int) -> "DateTime":
        return self._shift_instant(seconds * NS_PER_SECOND)

    def shift_milliseconds(self, milliseconds: int) -> "DateTime":
        return self._shift_instant(milliseconds * NS_PER_MILLISECOND)

    def shift_microseconds(self, microseconds: int) -> "DateTime":
        return self._shift_instant(microseconds * NS_PER_MICROSECOND)

    def shift_nanoseconds(self, nanoseconds: int) -> "DateTime":
        return self._shift_instant(nanoseconds)

    def shift(
        self,
        years: int = 0,
        months: int = 0,
        days: int = 0,
        hours: int = 0,
        minutes: int = 0,
        seconds: int = 0,
        nanoseconds: int = 0,
    ) -> "DateTime":
        """
        Комбинированный сдвиг.

        Применяется строго по порядку years → months → days → hours →
        minutes → seconds → nanoseconds, каждый шаг к результату предыдущего.
        """
        return (
            self.shift_years(years)
            .shift_months(months)
            .shift_days(days)
            .shift_hours(hours)
            .shift_minutes(minutes)
            .shift_seconds(seconds)
            .shift_nanoseconds(nanoseconds)
        )

    # -------------------------------------------------------------------------
    # Floor / Ceil / Span
    # -------------------------------------------------------------------------

    def floor_year(self) -> "DateTime":
        """2012-12-12 12:12:12.123456789 → 2012-01-01 00:00:00.000000000"""
        return self.replace(month=1, day=1, hour=0, minute=0, second=0, nanosecond=0)

    def floor_month(self) -> "DateTime":
        """2012-12-12 12:12:12.123456789 → 2012-12-01 00:00:00.000000000"""
        return self.replace(day=1, hour=0, minute=0, second=0, nanosecond=0)

    def floor_day(self) -> "DateTime":
        """2012-12-12 12:12:12.123456789 → 2012-12-12 00:00:00.000000000"""
        return self.replace(hour=0, minute=0, second=0, nanosecond=0)

    def floor_hour(self) -> "DateTime":
        """2012-12-12 12:12:12.123456789 → 2012-12-12 12:00:00.000000000"""
        return self.replace(minute=0, second=0, nanosecond=0)

    def floor_minute(self) -> "DateTime":
        """2012-12-12 12:12:12.123456789 → 2012-12-12 12:12:00.000000000"""
        return self.replace(second=0, nanosecond=0)

    def floor_second(self) -> "DateTime":
        """2012-12-12 12:12:12.123456789 → 2012-12-12 12:12:12.000000000"""
        return self.replace(nanosecond=0)

    def ceil_year(self) -> "DateTime":
        """2012-05-12 12:12:12.123456789 → 2012-12-31 23:59:59.999999999"""
        return self.replace(
            month=12,
            day=31,
            hour=LAST_HOUR,
            minute=LAST_MINUTE,
            second=LAST_SECOND,
            nanosecond=LAST_NANOSECOND,
        )

    def ceil_month(self) -> "DateTime":
        """
        2020-02-15 12:12:12.123456789 → 2020-02-29 23:59:59.999999999

        Последний день месяца: первое число следующего месяца минус один день.
        """
        last_day = self.floor_month().shift_months(1).shift_days(-1).day
        return self.replace(
            day=last_day,
            hour=LAST_HOUR,
            minute=LAST_MINUTE,
            second=LAST_SECOND,
            nanosecond=LAST_NANOSECOND,
        )

    def ceil_day(self) -> "DateTime":
        """2012-12-12 12:12:12.123456789 → 2012-12-12 23:59:59.999999999"""
        return self.replace(
            hour=LAST_HOUR, minute=LAST_MINUTE, second=LAST_SECOND, nanosecond=LAST_NANOSECOND
        )

    def ceil_hour(self) -> "DateTime":
        """2012-12-12 12:12:12.123456789 → 2012-12-12 12:59:59.999999999"""
        return self.replace(minute=LAST_MINUTE, second=LAST_SECOND, nanosecond=LAST_NANOSECOND)

    def ceil_minute(self) -> "DateTime":
        """2012-12-12 12:12:12.123456789 → 2012-12-12 12:12:59.999999999"""
        return self.replace(second=LAST_SECOND, nanosecond=LAST_NANOSECOND)

    def ceil_second(self) -> "DateTime":
        """2012-12-12 12:12:12.123456789 → 2012-12-12 12:12:12.999999999"""
        return self.replace(nanosecond=LAST_NANOSECOND)

    def span_year(self) -> Tuple["DateTime", "DateTime"]:
        return self.floor_year(), self.ceil_year()

    def span_month(self) -> Tuple["DateTime", "DateTime"]:
        return self.floor_month(), self.ceil_month()

    def span_day(self) -> Tuple["DateTime", "DateTime"]:
        return self.floor_day(), self.ceil_day()

    def span_hour(self) -> Tuple["DateTime", "DateTime"]:
        return self.floor_hour(), self.ceil_hour()

    def span_minute(self) -> Tuple["DateTime", "DateTime"]:
        return self.floor_minute(), self.ceil_minute()

    def span_second(self) -> Tuple["DateTime", "DateTime"]:
        return self.floor_second(), self.ceil_second()

    # -------------------------------------------------------------------------
    # Snapshot
    # -------------------------------------------------------------------------

    def to_snapshot(self) -> "DateTimeSnapshot":
        """JSON-совместимый снапшот (см. contracts.snapshot)."""
        from src.chronos.contracts.snapshot import DateTimeSnapshot

        return DateTimeSnapshot(
            iso=self.iso_format_tz(),
            timezone=self.zone.name,
            unix_nanoseconds=self.instant_ns,
        )

    @staticmethod
    def from_snapshot(snapshot: "DateTimeSnapshot") -> "DateTime":
        """Восстановление по снапшоту: instant и зона, iso — только для чтения человеком."""
        timezone = Timezone(snapshot.timezone)
        timezone.location()
        return DateTime(snapshot.unix_nanoseconds, timezone)


# =============================================================================
# CONSTRUCTION
# =============================================================================


def new_date_time(
    year: int,
    month: int,
    day: int,
    hour: int,
    minute: int,
    second: int,
    nanosecond: int,
    timezone: Timezone,
) -> DateTime:
    """
    DateTime из civil-полей в зоне.

    Поля вне диапазона нормализуются (month=13 → январь следующего года).

    Raises:
        UnknownTimeZone: если зона не разрешается
    """
    instant_ns = civil_to_instant(
        year, month, day, hour, minute, second, nanosecond, timezone.location()
    )
    return DateTime(instant_ns, timezone)


def new_utc_date_time(
    year: int, month: int, day: int, hour: int, minute: int, second: int, nanosecond: int
) -> DateTime:
    return new_date_time(year, month, day, hour, minute, second, nanosecond, UTC)


def new_local_date_time(
    year: int, month: int, day: int, hour: int, minute: int, second: int, nanosecond: int
) -> DateTime:
    return new_date_time(year, month, day, hour, minute, second, nanosecond, Timezone.local())


def from_time(value: datetime) -> DateTime:
    """
    DateTime из datetime хоста.

    naive datetime трактуется как локальное время хоста.
    """
    timezone = timezone_of(value)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.location())
    return DateTime(instant_of(value), timezone)


def from_unix_timestamp(timestamp: int) -> DateTime:
    """DateTime по Unix timestamp (секунды), всегда в UTC."""
    return DateTime(timestamp * NS_PER_SECOND, UTC)


def now() -> DateTime:
    """Текущий момент в локальной зоне хоста."""
    return DateTime(time.time_ns(), Timezone.local())


def utc_now() -> DateTime:
    return now().in_timezone(UTC)


def now_in_timezone(timezone: Timezone) -> DateTime:
    return now().in_timezone(timezone)


# =============================================================================
# PARSING
# =============================================================================


@dataclass(frozen=True)
class ParseResult:
    """Результат try_parse: ровно одно из value / error заполнено."""

    value: Optional[DateTime]
    error: Optional[ParseError]

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_in_timezone(value: str, format: str, timezone: Timezone) -> DateTime:
    """
    Разбор строки символьным форматом в зоне timezone.

    Raises:
        ParseError: если value не соответствует формату
        UnknownTimeZone: если зона не разрешается
    """
    return from_parsed(parse_to_time(value, format, timezone), timezone)


def parse(value: str, format: str) -> DateTime:
    """Разбор строки в зоне по умолчанию (UTC)."""
    return parse_in_timezone(value, format, DEFAULTS.timezone)


def try_parse(value: str, format: str, timezone: Optional[Timezone] = None) -> ParseResult:
    """
    Разбор без исключения для ошибок входных данных.

    ParseError возвращается в ParseResult.error; UnknownTimeZone и
    UnmappedFormatToken по-прежнему прерывают операцию.
    """
    try:
        parsed = parse_in_timezone(value, format, timezone or DEFAULTS.timezone)
    except ParseError as e:
        return ParseResult(value=None, error=e)
    return ParseResult(value=parsed, error=None)


def from_parsed(value: datetime, timezone: Timezone) -> DateTime:
    """DateTime из aware datetime, возвращённого parse_to_time."""
    return DateTime(instant_of(value), timezone)
