"""Domain layer: errors and schemas."""

from .errors import ErrorCodes, TableAsserterError
from .schemas import (
    AssertionOutcome,
    AssertionState,
    ComparisonResult,
    Table,
    ValueKind,
)

__all__ = [
    "ErrorCodes",
    "TableAsserterError",
    "AssertionOutcome",
    "AssertionState",
    "ComparisonResult",
    "Table",
    "ValueKind",
]
