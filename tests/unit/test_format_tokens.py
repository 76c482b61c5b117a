"""
Тесты для таблицы токенов формата

Проверяет:
1. Закрытость и тотальность словаря
2. Порядок альтернатив: длинный токен раньше своего префикса
3. Согласованность pattern и таблицы
"""

import pytest

from src.chronos.formatting.tokens import (
    ALL_FORMAT_TOKENS,
    FORMAT_TOKEN_MAP,
    FORMAT_TOKEN_PATTERN,
    FormatToken,
    NativeDirective,
    format_token_regex,
)


class TestTokenTable:
    """Тесты таблицы трансляции"""

    def test_vocabulary_size(self) -> None:
        """Словарь содержит 24 токена"""
        assert len(ALL_FORMAT_TOKENS) == 24

    def test_mapping_is_total(self) -> None:
        """Каждый токен имеет директиву"""
        assert set(FORMAT_TOKEN_MAP) == set(FormatToken)

    def test_directives_are_distinct(self) -> None:
        """Разные токены → разные директивы"""
        assert len(set(FORMAT_TOKEN_MAP.values())) == len(FORMAT_TOKEN_MAP)

    def test_mapping_is_read_only(self) -> None:
        """Таблица не изменяется после импорта"""
        with pytest.raises(TypeError):
            FORMAT_TOKEN_MAP[FormatToken.YEAR_FULL] = NativeDirective.YEAR  # type: ignore[index]

    def test_lookup_by_plain_string(self) -> None:
        """Поиск по строке токена (str-Enum)"""
        assert FORMAT_TOKEN_MAP.get("YYYY") is NativeDirective.LONG_YEAR
        assert FORMAT_TOKEN_MAP.get("mm") is NativeDirective.ZERO_MINUTE

    @pytest.mark.parametrize(
        "token, directive",
        [
            ("YYYY", "%Y"),
            ("MMMM", "%B"),
            ("M", "%-m"),
            ("DDDD", "%j"),
            ("D", "%-d"),
            ("a", "%P"),
            ("S", "%f"),
            ("ZZZ", "%Z"),
            ("zz", "%:z"),
            ("Z", "%z"),
        ],
    )
    def test_selected_directives(self, token: str, directive: str) -> None:
        assert FORMAT_TOKEN_MAP[FormatToken(token)].value == directive


class TestTokenOrdering:
    """Тесты порядка альтернатив"""

    def test_longer_token_precedes_its_prefix(self) -> None:
        """Если токен — префикс другого, он стоит позже"""
        order = [token.value for token in ALL_FORMAT_TOKENS]
        for i, shorter in enumerate(order):
            for longer in order[i + 1:]:
                assert not (longer.startswith(shorter) and len(longer) > len(shorter)), (
                    f"{longer!r} must precede {shorter!r}"
                )

    def test_regex_follows_declaration_order(self) -> None:
        assert format_token_regex((FormatToken.MINUTE_ZERO_PADDED, FormatToken.MINUTE)) == "mm|m"
        assert FORMAT_TOKEN_PATTERN.pattern.startswith("YYYY|YY|MMMM|MMM|MM|M|DDDD|DD|D")

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("mm", "mm"),
            ("DDDD", "DDDD"),
            ("MMMM", "MMMM"),
            ("dddd", "dddd"),
            ("ZZZ", "ZZZ"),
            ("ss", "ss"),
        ],
    )
    def test_longest_token_wins(self, text: str, expected: str) -> None:
        """Pattern выбирает самый длинный токен в позиции"""
        assert FORMAT_TOKEN_PATTERN.match(text).group(0) == expected

    def test_every_match_is_mapped(self) -> None:
        """Любое совпадение pattern присутствует в таблице"""
        sample = " ".join(token.value for token in ALL_FORMAT_TOKENS)
        for match in FORMAT_TOKEN_PATTERN.finditer(sample):
            assert match.group(0) in FORMAT_TOKEN_MAP
