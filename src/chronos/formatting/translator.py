"""
Format Translator — Трансляция символьного формата в native-директивы

Алгоритм:
1. Сканирование слева направо одним скомпилированным pattern
   (альтернация по всему словарю, длинные токены раньше коротких)
2. Каждое совпадение заменяется директивой из таблицы
3. Текст между совпадениями — литерал, проходит без изменений
   (единственное преобразование: "%" → "%%", иначе strftime примет его
   за начало директивы)

Совпадение pattern без записи в таблице → UnmappedFormatToken.
Функция чистая: одинаковый вход всегда даёт одинаковый выход.
"""

import logging
import re
from functools import lru_cache
from typing import List, Mapping, NamedTuple, Tuple

from src.chronos.errors import UnmappedFormatToken
from src.chronos.formatting.tokens import (
    FORMAT_TOKEN_MAP,
    FORMAT_TOKEN_PATTERN,
    NativeDirective,
)

logger = logging.getLogger(__name__)


class FormatSegment(NamedTuple):
    """Отрезок символьного формата: токен или литерал."""

    text: str
    is_token: bool


# =============================================================================
# SCANNING
# =============================================================================


def split_format(format: str, pattern: re.Pattern[str] = FORMAT_TOKEN_PATTERN) -> Tuple[FormatSegment, ...]:
    """
    Разбиение формата на чередующиеся отрезки токенов и литералов.

    Args:
        format: Символьный формат (например, "DD.MM.YYYY")
        pattern: Pattern распознавания токенов

    Returns:
        Отрезки в исходном порядке; конкатенация их text == format

    Examples:
        >>> [s.text for s in split_format("DD.MM")]
        ['DD', '.', 'MM']
    """
    if not isinstance(format, str):
        raise TypeError(f"format must be str, got {type(format).__name__}")

    segments: List[FormatSegment] = []
    position = 0
    for match in pattern.finditer(format):
        if match.start() > position:
            segments.append(FormatSegment(format[position:match.start()], False))
        segments.append(FormatSegment(match.group(0), True))
        position = match.end()
    if position < len(format):
        segments.append(FormatSegment(format[position:], False))
    return tuple(segments)


# =============================================================================
# TRANSLATION
# =============================================================================


def native_directive(token: str, token_map: Mapping[str, NativeDirective] = FORMAT_TOKEN_MAP) -> str:
    """
    Native-директива для одного токена.

    Raises:
        UnmappedFormatToken: если токена нет в таблице
    """
    directive = token_map.get(token)
    if directive is None:
        logger.error("Format token %r matched the token pattern but is not mapped", token)
        raise UnmappedFormatToken(token)
    return str(directive.value) if isinstance(directive, NativeDirective) else str(directive)


def escape_literal(text: str) -> str:
    """Литерал для native-формата: "%" удваивается."""
    return text.replace("%", "%%")


def translate_format(
    format: str,
    token_map: Mapping[str, NativeDirective] = FORMAT_TOKEN_MAP,
    pattern: re.Pattern[str] = FORMAT_TOKEN_PATTERN,
) -> str:
    """
    Трансляция символьного формата в native-формат strftime/strptime.

    Args:
        format: Символьный формат (например, "YYYY-MM-DD HH:mm:ss")
        token_map: Таблица токен → директива
        pattern: Pattern распознавания токенов (должен быть согласован с token_map)

    Returns:
        Native-формат (например, "%Y-%m-%d %H:%M:%S")

    Raises:
        UnmappedFormatToken: если pattern распознал токен, которого нет в token_map
        TypeError: если format не строка

    Examples:
        >>> translate_format("DD.MM.YYYY HH:mm:ss")
        '%d.%m.%Y %H:%M:%S'
        >>> translate_format("mm")
        '%M'
    """
    if token_map is FORMAT_TOKEN_MAP and pattern is FORMAT_TOKEN_PATTERN:
        return _translate_default(format)
    return _translate(format, token_map, pattern)


def _translate(format: str, token_map: Mapping[str, NativeDirective], pattern: re.Pattern[str]) -> str:
    return "".join(
        native_directive(segment.text, token_map) if segment.is_token else escape_literal(segment.text)
        for segment in split_format(format, pattern)
    )


@lru_cache(maxsize=256)
def _translate_default(format: str) -> str:
    return _translate(format, FORMAT_TOKEN_MAP, FORMAT_TOKEN_PATTERN)
