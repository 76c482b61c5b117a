"""
chronos — дата и время с символьным языком форматов.

Содержит:
- Timezone: именованная зона, разрешаемая базой зон хоста
- formatting: токены YYYY/MM/DD/... и их трансляция в strftime/strptime
- DateTime: immutable instant + зона с календарными операциями
  (shift, replace, floor, ceil, span)
"""

from src.chronos.date_time import (
    DEFAULTS,
    DateTime,
    DateTimeDefaults,
    ParseResult,
    Weekday,
    from_time,
    from_unix_timestamp,
    new_date_time,
    new_local_date_time,
    new_utc_date_time,
    now,
    now_in_timezone,
    parse,
    parse_in_timezone,
    try_parse,
    utc_now,
)
from src.chronos.errors import (
    ChronosError,
    ParseError,
    UnknownTimeZone,
    UnmappedFormatToken,
)
from src.chronos.formatting import (
    CTIME,
    ISO8601,
    ISO8601_TZ,
    FormatToken,
    translate_format,
)
from src.chronos.timezone import (
    AMERICA_LOS_ANGELES,
    AMERICA_NEW_YORK,
    ASIA_TOKYO,
    AUSTRALIA_SYDNEY,
    EUROPE_BERLIN,
    EUROPE_LONDON,
    UTC,
    Timezone,
    available_timezones,
    local,
)

__all__ = [
    # DateTime
    "DateTime",
    "DateTimeDefaults",
    "DEFAULTS",
    "ParseResult",
    "Weekday",
    "new_date_time",
    "new_utc_date_time",
    "new_local_date_time",
    "from_time",
    "from_unix_timestamp",
    "now",
    "utc_now",
    "now_in_timezone",
    "parse",
    "parse_in_timezone",
    "try_parse",
    # Errors
    "ChronosError",
    "ParseError",
    "UnknownTimeZone",
    "UnmappedFormatToken",
    # Formatting
    "ISO8601",
    "ISO8601_TZ",
    "CTIME",
    "FormatToken",
    "translate_format",
    # Timezone
    "Timezone",
    "local",
    "available_timezones",
    "UTC",
    "EUROPE_BERLIN",
    "EUROPE_LONDON",
    "AMERICA_NEW_YORK",
    "AMERICA_LOS_ANGELES",
    "ASIA_TOKYO",
    "AUSTRALIA_SYDNEY",
]
