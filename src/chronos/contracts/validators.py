"""
JSON Schema Contract Validators

Валидация JSON-снапшотов chronos по JSON Schema (Draft 2020-12).

Схемы поставляются внутри пакета (src/chronos/contracts/schema/) и читаются
через importlib.resources, поэтому доступны и после обычной установки.
Загрузчик по умолчанию создаётся при первом обращении, а не при импорте.

Схемы:
- datetime_snapshot.json (DateTimeSnapshot)
"""

import json
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema
from jsonschema import Draft202012Validator

# Каталог схем внутри пакета
SCHEMA_PACKAGE_DIR = "schema"


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    schema_dir — каталог со схемами; по умолчанию каталог schema/ пакета.
    Загруженные схемы кэшируются.
    """

    def __init__(self, schema_dir: Optional[Path] = None):
        if schema_dir is None:
            schema_dir = resources.files(__package__).joinpath(SCHEMA_PACKAGE_DIR)
        if not schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {schema_dir}")
        self._schema_dir = schema_dir
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema по имени без расширения (например, 'datetime_snapshot').

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-validation
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir.joinpath(f"{schema_name}.json")
        if not schema_path.is_file():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        schema = json.loads(schema_path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


@lru_cache(maxsize=None)
def default_schema_loader() -> SchemaLoader:
    """Загрузчик схем пакета (один на процесс)."""
    return SchemaLoader()


class ContractValidator:
    """Валидатор данных по одной схеме."""

    def __init__(self, schema_name: str, loader: Optional[SchemaLoader] = None):
        self.schema_name = schema_name
        self.schema = (loader or default_schema_loader()).load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)


class DateTimeSnapshotValidator(ContractValidator):
    """Валидатор для datetime_snapshot контракта."""

    def __init__(self, loader: Optional[SchemaLoader] = None):
        super().__init__("datetime_snapshot", loader)


def validate_date_time_snapshot(data: Dict[str, Any]) -> None:
    """
    Валидация datetime_snapshot данных.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    DateTimeSnapshotValidator().validate(data)
