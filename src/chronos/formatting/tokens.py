"""
Format Tokens — Таблица символьных токенов формата

Фиксированный словарь символьных токенов (YYYY, MM, HH, ...) и тотальное
отображение каждого токена в native-директиву движка strftime/strptime.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Словарь закрыт: 24 токена, таблица строится один раз при импорте
2. Отображение тотально: каждый FormatToken имеет ровно одну директиву
3. Порядок членов FormatToken = порядок альтернатив в pattern:
   длинный токен всегда стоит раньше своего префикса (DDDD → DD → D)

Ограничение: escape-синтаксиса нет. Литеральный текст, совпадающий
с токеном (например, буква "a" или "m"), будет заменён директивой.
"""

import re
from enum import Enum
from types import MappingProxyType
from typing import Final, Mapping, Tuple


# =============================================================================
# SYMBOLIC TOKENS
# =============================================================================


class FormatToken(str, Enum):
    """
    Символьный токен формата.

    Порядок объявления значим: pattern пробует токены именно в этом порядке.
    """

    YEAR_FULL = "YYYY"
    YEAR_SHORT = "YY"

    MONTH_FULL = "MMMM"
    MONTH_ABBR = "MMM"
    MONTH_ZERO_PADDED = "MM"
    MONTH_SHORT = "M"

    DAY_OF_YEAR_ZERO_PADDED = "DDDD"
    DAY_OF_MONTH_ZERO_PADDED = "DD"
    DAY_OF_MONTH_SHORT = "D"

    DAY_OF_WEEK_FULL_NAME = "dddd"
    DAY_OF_WEEK_ABBR = "ddd"

    TWENTY_FOUR_HOUR_ZERO_PADDED = "HH"
    TWELVE_HOUR_ZERO_PADDED = "hh"
    TWELVE_HOUR = "h"

    AM_PM_UPPER = "A"
    AM_PM_LOWER = "a"

    MINUTE_ZERO_PADDED = "mm"
    MINUTE = "m"

    SECOND_ZERO_PADDED = "ss"
    SECOND = "s"
    MICROSECOND = "S"

    TIMEZONE_FULL_NAME = "ZZZ"
    TIMEZONE_WITH_COLON = "zz"
    TIMEZONE_WITHOUT_COLON = "Z"


# =============================================================================
# NATIVE DIRECTIVES
# =============================================================================


class NativeDirective(str, Enum):
    """
    Директивы движка strftime/strptime.

    Флаг "-" (без zero-padding), %P и %:z — GNU-расширения, которые
    исполняет сам движок (см. formatting.engine), а не strftime платформы.
    """

    LONG_YEAR = "%Y"
    YEAR = "%y"
    LONG_MONTH = "%B"
    MONTH = "%b"
    ZERO_MONTH = "%m"
    NUM_MONTH = "%-m"
    ZERO_YEAR_DAY = "%j"
    ZERO_DAY = "%d"
    DAY = "%-d"
    LONG_WEEKDAY = "%A"
    WEEKDAY = "%a"
    HOUR = "%H"
    ZERO_HOUR12 = "%I"
    HOUR12 = "%-I"
    PM = "%p"
    PM_LOWER = "%P"
    ZERO_MINUTE = "%M"
    MINUTE = "%-M"
    ZERO_SECOND = "%S"
    SECOND = "%-S"
    MICROSECOND = "%f"
    TZ_NAME = "%Z"
    ISO8601_COLON_TZ = "%:z"
    ISO8601_TZ = "%z"


# =============================================================================
# TRANSLATION TABLE
# =============================================================================

FORMAT_TOKEN_MAP: Final[Mapping[FormatToken, NativeDirective]] = MappingProxyType(
    {
        FormatToken.YEAR_FULL: NativeDirective.LONG_YEAR,
        FormatToken.YEAR_SHORT: NativeDirective.YEAR,
        FormatToken.MONTH_FULL: NativeDirective.LONG_MONTH,
        FormatToken.MONTH_ABBR: NativeDirective.MONTH,
        FormatToken.MONTH_ZERO_PADDED: NativeDirective.ZERO_MONTH,
        FormatToken.MONTH_SHORT: NativeDirective.NUM_MONTH,
        FormatToken.DAY_OF_YEAR_ZERO_PADDED: NativeDirective.ZERO_YEAR_DAY,
        FormatToken.DAY_OF_MONTH_ZERO_PADDED: NativeDirective.ZERO_DAY,
        FormatToken.DAY_OF_MONTH_SHORT: NativeDirective.DAY,
        FormatToken.DAY_OF_WEEK_FULL_NAME: NativeDirective.LONG_WEEKDAY,
        FormatToken.DAY_OF_WEEK_ABBR: NativeDirective.WEEKDAY,
        FormatToken.TWENTY_FOUR_HOUR_ZERO_PADDED: NativeDirective.HOUR,
        FormatToken.TWELVE_HOUR_ZERO_PADDED: NativeDirective.ZERO_HOUR12,
        FormatToken.TWELVE_HOUR: NativeDirective.HOUR12,
        FormatToken.AM_PM_UPPER: NativeDirective.PM,
        FormatToken.AM_PM_LOWER: NativeDirective.PM_LOWER,
        FormatToken.MINUTE_ZERO_PADDED: NativeDirective.ZERO_MINUTE,
        FormatToken.MINUTE: NativeDirective.MINUTE,
        FormatToken.SECOND_ZERO_PADDED: NativeDirective.ZERO_SECOND,
        FormatToken.SECOND: NativeDirective.SECOND,
        FormatToken.MICROSECOND: NativeDirective.MICROSECOND,
        FormatToken.TIMEZONE_FULL_NAME: NativeDirective.TZ_NAME,
        FormatToken.TIMEZONE_WITH_COLON: NativeDirective.ISO8601_COLON_TZ,
        FormatToken.TIMEZONE_WITHOUT_COLON: NativeDirective.ISO8601_TZ,
    }
)

ALL_FORMAT_TOKENS: Final[Tuple[FormatToken, ...]] = tuple(FormatToken)


def format_token_regex(tokens: Tuple[FormatToken, ...] = ALL_FORMAT_TOKENS) -> str:
    """
    Regex-альтернация по словарю токенов.

    Альтернация в re — leftmost-first: при одинаковой позиции побеждает
    первая подходящая альтернатива, поэтому порядок tokens обязан ставить
    длинный токен раньше его префикса.

    Examples:
        >>> format_token_regex((FormatToken.MINUTE_ZERO_PADDED, FormatToken.MINUTE))
        'mm|m'
    """
    return "|".join(re.escape(token.value) for token in tokens)


FORMAT_TOKEN_PATTERN: Final[re.Pattern[str]] = re.compile(format_token_regex())
