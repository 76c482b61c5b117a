"""
Contract Validation Module

JSON-контракты chronos: Pydantic модели и их JSON Schema.
"""

from .snapshot import DateTimeSnapshot
from .validators import (
    ContractValidator,
    DateTimeSnapshotValidator,
    SchemaLoader,
    default_schema_loader,
    validate_date_time_snapshot,
)

__all__ = [
    # Models
    "DateTimeSnapshot",
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "DateTimeSnapshotValidator",
    # Functions
    "default_schema_loader",
    "validate_date_time_snapshot",
]
