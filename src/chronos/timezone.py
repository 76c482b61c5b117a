"""
Timezone — Именованная зона и её разрешение через базу зон хоста

Timezone хранит только имя зоны ("UTC", "Europe/Berlin", "Local").
Разрешение в tzinfo выполняется при каждом вызове location():
- именованные зоны: zoneinfo.ZoneInfo (tzdata при отсутствии системной базы)
- псевдо-зона "Local": dateutil.tz.gettz() — учитывает переменную TZ,
  результат не кэшируется

Равенство двух Timezone — по имени, не по текущему offset.
"""

import logging
from dataclasses import dataclass
from datetime import tzinfo
from typing import Final, FrozenSet
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from zoneinfo import available_timezones as _zoneinfo_available_timezones

from dateutil import tz

from src.chronos.errors import UnknownTimeZone

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

# Имя псевдо-зоны локального времени хоста
LOCAL_ZONE_NAME: Final[str] = "Local"


# =============================================================================
# HOST LOOKUP
# =============================================================================


def load_location(name: str) -> tzinfo:
    """
    Загрузка именованной зоны из базы зон хоста.

    Args:
        name: IANA имя зоны (например, "Europe/Berlin")

    Returns:
        tzinfo зоны

    Raises:
        UnknownTimeZone: если имя не найдено или синтаксически невалидно
    """
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise UnknownTimeZone(name) from e


def load_local_location() -> tzinfo:
    """
    Локальная зона хоста на момент вызова.

    gettz() без имени читает TZ и /etc/localtime; при нераспознанном TZ
    возвращает None — тогда берутся правила модуля time (tzlocal).
    """
    return tz.gettz() or tz.tzlocal()


def available_timezones() -> FrozenSet[str]:
    """Все имена зон, известные базе хоста (без псевдо-зоны "Local")."""
    return frozenset(_zoneinfo_available_timezones())


# =============================================================================
# TIMEZONE
# =============================================================================


@dataclass(frozen=True)
class Timezone:
    """
    Идентификатор зоны по имени.

    Immutable. Разрешение в tzinfo откладывается до location(),
    поэтому Timezone("notexist") создаётся без ошибки.
    """

    name: str

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            raise TypeError(f"Timezone name must be str, got {type(self.name).__name__}")

    @staticmethod
    def local() -> "Timezone":
        """Псевдо-зона локального времени хоста."""
        return Timezone(LOCAL_ZONE_NAME)

    @property
    def is_local(self) -> bool:
        return self.name == LOCAL_ZONE_NAME

    def location(self) -> tzinfo:
        """
        Разрешение зоны в tzinfo.

        Returns:
            tzinfo, пригодный для datetime

        Raises:
            UnknownTimeZone: если зона не существует (ошибка конфигурации)
        """
        if self.is_local:
            return load_local_location()
        try:
            location = load_location(self.name)
        except UnknownTimeZone:
            logger.error("Time zone %r is not in the host zone database", self.name)
            raise
        logger.debug("Resolved time zone %r", self.name)
        return location

    def exists(self) -> bool:
        """Проверка без исключения: разрешается ли зона."""
        if self.is_local:
            return True
        try:
            load_location(self.name)
        except UnknownTimeZone:
            return False
        return True

    def __str__(self) -> str:
        return self.name


def local() -> Timezone:
    """Псевдо-зона "Local"."""
    return Timezone.local()


# =============================================================================
# COMMON ZONES
# =============================================================================

UTC: Final[Timezone] = Timezone("UTC")
EUROPE_BERLIN: Final[Timezone] = Timezone("Europe/Berlin")
EUROPE_LONDON: Final[Timezone] = Timezone("Europe/London")
AMERICA_NEW_YORK: Final[Timezone] = Timezone("America/New_York")
AMERICA_LOS_ANGELES: Final[Timezone] = Timezone("America/Los_Angeles")
ASIA_TOKYO: Final[Timezone] = Timezone("Asia/Tokyo")
AUSTRALIA_SYDNEY: Final[Timezone] = Timezone("Australia/Sydney")
