"""
Formatting — символьный язык форматов и его трансляция в strftime/strptime.
"""

from src.chronos.formatting.engine import (
    format_from_time,
    iso8601_offset,
    parse_to_time,
    render,
    to_strptime_format,
)
from src.chronos.formatting.formats import CTIME, ISO8601, ISO8601_TZ
from src.chronos.formatting.tokens import (
    ALL_FORMAT_TOKENS,
    FORMAT_TOKEN_MAP,
    FORMAT_TOKEN_PATTERN,
    FormatToken,
    NativeDirective,
    format_token_regex,
)
from src.chronos.formatting.translator import (
    FormatSegment,
    native_directive,
    split_format,
    translate_format,
)

__all__ = [
    # Formats
    "ISO8601",
    "ISO8601_TZ",
    "CTIME",
    # Tokens
    "FormatToken",
    "NativeDirective",
    "ALL_FORMAT_TOKENS",
    "FORMAT_TOKEN_MAP",
    "FORMAT_TOKEN_PATTERN",
    "format_token_regex",
    # Translator
    "FormatSegment",
    "split_format",
    "native_directive",
    "translate_format",
    # Engine
    "format_from_time",
    "parse_to_time",
    "render",
    "to_strptime_format",
    "iso8601_offset",
]
