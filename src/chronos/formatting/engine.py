"""
Directive Engine — Parse/Format через native-директивы

Связка: символьный формат → translate_format → native-формат → strftime/strptime.

strftime платформы исполняет стандартные директивы. GNU-расширения
исполняются здесь, чтобы результат не зависел от libc:
- %-m %-d %-I %-M %-S: без zero-padding
- %P: am/pm в нижнем регистре
- %Y: всегда 4 цифры (год 999 → "0999")
- %z, %:z: ISO-8601 offset, нулевой offset печатается как "Z"

Для strptime расширения сводятся к стандартным директивам
(%m принимает и "4", и "04"; %z принимает "Z", "+0200" и "+02:00").
%Z strptime понимает только UTC/GMT и имена из time.tzname, поэтому
аббревиатура зоны (CEST, JST, +03) разбирается здесь и сверяется с зоной
результата.
"""

import logging
import re
from datetime import datetime, timedelta
from datetime import timezone as _py_timezone
from datetime import tzinfo
from typing import FrozenSet, Final, Mapping, Optional, Tuple

from src.chronos.errors import ParseError
from src.chronos.formatting.translator import translate_format
from src.chronos.timezone import Timezone

logger = logging.getLogger(__name__)


# =============================================================================
# NATIVE DIRECTIVE SCANNING
# =============================================================================

# "%%" стоит первым: литеральный процент поглощается целиком
NATIVE_DIRECTIVE_PATTERN: Final[re.Pattern[str]] = re.compile(r"%%|%-[dmIMS]|%:z|%[A-Za-z]")

# Расширения → эквивалент для strptime
STRPTIME_EQUIVALENTS: Final[Mapping[str, str]] = {
    "%-m": "%m",
    "%-d": "%d",
    "%-I": "%I",
    "%-M": "%M",
    "%-S": "%S",
    "%P": "%p",
    "%:z": "%z",
}

ISO8601_UTC_DESIGNATOR: Final[str] = "Z"

ZONE_ABBREVIATION_DIRECTIVE: Final[str] = "%Z"

# Буквенные аббревиатуры и числовые, которые tzdata даёт зонам без букв (+03)
ZONE_ABBREVIATION_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"(?<![A-Za-z])[A-Za-z]{2,6}(?![A-Za-z])|[+-][0-9]{2,4}"
)

# Аббревиатуры UTC, понятные в любой зоне
UTC_ABBREVIATIONS: Final[FrozenSet[str]] = frozenset({"UTC", "GMT"})

# Литерал-заглушка на месте %Z, не встречающийся во входных строках
_ABBREVIATION_SLOT: Final[str] = "\x00"


# =============================================================================
# FORMATTING
# =============================================================================


def iso8601_offset(moment: datetime, colon: bool) -> str:
    """
    ISO-8601 offset для aware datetime.

    Examples:
        +0200, +02:00, -0330, Z (нулевой offset); "" для naive datetime
    """
    offset = moment.utcoffset()
    if offset is None:
        return ""
    if offset == timedelta(0):
        return ISO8601_UTC_DESIGNATOR

    sign = "-" if offset < timedelta(0) else "+"
    total_seconds = int(abs(offset).total_seconds())
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    separator = ":" if colon else ""
    rendered = f"{sign}{hours:02d}{separator}{minutes:02d}"
    if seconds:
        rendered += f"{separator}{seconds:02d}"
    return rendered


def render_directive(moment: datetime, directive: str) -> str:
    """Рендер одной native-директивы."""
    if directive == "%%":
        return "%"
    if directive == "%Y":
        # glibc не дополняет год нулями, strptime требует 4 цифры
        return f"{moment.year:04d}"
    if directive.startswith("%-"):
        return moment.strftime("%" + directive[2:]).lstrip("0") or "0"
    if directive == "%P":
        return moment.strftime("%p").lower()
    if directive == "%z":
        return iso8601_offset(moment, colon=False)
    if directive == "%:z":
        return iso8601_offset(moment, colon=True)
    return moment.strftime(directive)


def render(moment: datetime, native_format: str) -> str:
    """
    Рендер datetime по native-формату.

    Тотален для валидного datetime: ошибок форматирования нет.
    """

    def substitute(match: re.Match[str]) -> str:
        return render_directive(moment, match.group(0))

    return NATIVE_DIRECTIVE_PATTERN.sub(substitute, native_format)


def format_from_time(value: datetime, format: str) -> str:
    """
    Форматирование datetime символьным форматом.

    Args:
        value: datetime хоста (aware или naive)
        format: Символьный формат (например, "YYYY-MM-DD HH:mm:ss")

    Returns:
        Отформатированная строка
    """
    return render(value, translate_format(format))


# =============================================================================
# PARSING
# =============================================================================


def to_strptime_format(native_format: str) -> str:
    """Сведение GNU-расширений к директивам strptime."""

    def substitute(match: re.Match[str]) -> str:
        directive = match.group(0)
        return STRPTIME_EQUIVALENTS.get(directive, directive)

    return NATIVE_DIRECTIVE_PATTERN.sub(substitute, native_format)


def _abbreviation_slots(strptime_format: str) -> Tuple[str, int]:
    """%Z → заглушка; возвращает (формат, число заменённых %Z)."""
    count = 0

    def substitute(match: re.Match[str]) -> str:
        nonlocal count
        if match.group(0) != ZONE_ABBREVIATION_DIRECTIVE:
            return match.group(0)
        count += 1
        return _ABBREVIATION_SLOT

    return NATIVE_DIRECTIVE_PATTERN.sub(substitute, strptime_format), count


def strptime_with_abbreviation(value: str, strptime_format: str) -> Tuple[datetime, Optional[str]]:
    """
    strptime с разбором аббревиатуры зоны на месте %Z.

    Кандидаты перебираются слева направо; первый, при котором остаток
    строки соответствует формату, считается аббревиатурой.

    Returns:
        (datetime из strptime, аббревиатура или None, если %Z в формате нет)

    Raises:
        ValueError: если ни один кандидат не подходит
    """
    slotted_format, slots = _abbreviation_slots(strptime_format)
    if not slots:
        return datetime.strptime(value, strptime_format), None

    for match in ZONE_ABBREVIATION_PATTERN.finditer(value):
        abbreviation = match.group(0)
        if slots == 1:
            slotted_value = value[: match.start()] + _ABBREVIATION_SLOT + value[match.end():]
        else:
            slotted_value = value.replace(abbreviation, _ABBREVIATION_SLOT)
        try:
            return datetime.strptime(slotted_value, slotted_format), abbreviation
        except ValueError:
            continue
    raise ValueError(f"time data {value!r} does not match format {strptime_format!r}")


def anchor_abbreviated(civil: datetime, abbreviation: str, location: tzinfo) -> datetime:
    """
    Привязка naive civil-времени к зоне с учётом разобранной аббревиатуры.

    - аббревиатура зоны (с учётом fold: 02:30 CET и 02:30 CEST в ночь
      перевода часов различаются) → соответствующий instant
    - UTC/GMT → civil-время в UTC, спроецированное в зону
    - чужая аббревиатура → civil-время в зоне, аббревиатура игнорируется
    """
    for fold in (0, 1):
        candidate = civil.replace(tzinfo=location, fold=fold)
        if candidate.tzname() == abbreviation:
            return candidate
    if abbreviation in UTC_ABBREVIATIONS:
        return civil.replace(tzinfo=_py_timezone.utc).astimezone(location)
    logger.debug("Zone abbreviation %r does not belong to %r, anchoring in the zone", abbreviation, location)
    return civil.replace(tzinfo=location)


def parse_to_time(value: str, format: str, timezone: Timezone) -> datetime:
    """
    Разбор строки символьным форматом в aware datetime.

    Строка без offset интерпретируется как civil-время в timezone.
    Строка с offset задаёт instant, который проецируется в timezone.
    Аббревиатура зоны (ZZZ) выбирает между зимним и летним временем
    timezone; аббревиатура другой зоны игнорируется.

    Args:
        value: Строка для разбора
        format: Символьный формат
        timezone: Зона, к которой привязывается результат

    Returns:
        aware datetime в зоне timezone

    Raises:
        ParseError: если value не соответствует формату (восстановимая ошибка)
        UnknownTimeZone: если timezone не разрешается (ошибка конфигурации)
        UnmappedFormatToken: при рассинхронизации таблицы токенов
    """
    layout = translate_format(format)
    location = timezone.location()

    try:
        parsed, abbreviation = strptime_with_abbreviation(value, to_strptime_format(layout))
    except ValueError as e:
        logger.debug("Failed to parse %r with format %r (%r): %s", value, format, layout, e)
        raise ParseError(value, format, str(e)) from e

    if parsed.tzinfo is not None:
        return parsed.astimezone(location)
    if abbreviation is not None:
        return anchor_abbreviated(parsed, abbreviation, location)
    return parsed.replace(tzinfo=location)
