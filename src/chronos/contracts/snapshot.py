"""
DateTimeSnapshot — JSON-представление DateTime

Immutable Pydantic модель, совместимая с JSON Schema
(src/chronos/contracts/schema/datetime_snapshot.json).

Источник истины при восстановлении — unix_nanoseconds и timezone;
iso хранится для чтения человеком и для внешних потребителей.
"""

from pydantic import BaseModel, Field, field_validator

from src.chronos.timezone import Timezone


class DateTimeSnapshot(BaseModel):
    """
    Снапшот DateTime.

    Immutable модель (frozen=True).
    """

    iso: str = Field(
        ...,
        min_length=1,
        description="ISO-8601 с offset (например, 2017-07-14T02:40:00.000000+0200)",
    )
    timezone: str = Field(..., min_length=1, description="Имя зоны (IANA или Local)")
    unix_nanoseconds: int = Field(..., description="Наносекунды от Unix epoch")

    model_config = {"frozen": True}

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Зона должна разрешаться базой зон хоста."""
        if not Timezone(v).exists():
            raise ValueError(f"unknown time zone {v}")
        return v
