"""
Errors — Таксономия ошибок chronos

Три класса ошибок с разной политикой распространения:
- UnknownTimeZone: имя зоны не найдено в базе зон хоста (ошибка конфигурации)
- UnmappedFormatToken: pattern токенов и таблица трансляции рассинхронизированы
- ParseError: строка не соответствует формату (восстановимая ошибка входных данных)

UnknownTimeZone и UnmappedFormatToken внутри библиотеки не перехватываются.
ParseError перехватывается только в try_parse и возвращается как ParseResult.
"""


class ChronosError(Exception):
    """Базовый класс всех ошибок chronos."""

    pass


class UnknownTimeZone(ChronosError, LookupError):
    """
    Имя зоны отсутствует в базе зон хоста.

    Вызывающий код держит невалидное имя зоны — это ошибка конфигурации,
    а не плохие входные данные. Операция прерывается.
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"unknown time zone {name}")


class UnmappedFormatToken(ChronosError, RuntimeError):
    """
    Токен распознан pattern'ом, но отсутствует в таблице трансляции.

    Недостижимо при согласованных таблице и pattern; срабатывание означает
    внутреннюю ошибку библиотеки.
    """

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"FormatToken: {token} is not mapped")


class ParseError(ChronosError, ValueError):
    """
    Строка не соответствует транслированному формату.

    Диагностика хоста (ValueError из strptime) доступна через __cause__.
    """

    def __init__(self, value: str, layout: str, reason: str):
        self.value = value
        self.layout = layout
        self.reason = reason
        super().__init__(f"cannot parse {value!r} as {layout!r}: {reason}")
