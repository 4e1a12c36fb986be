"""
Cell → property value conversion.

Dispatch is on ValueKind:
- custom converter: used exclusively, result trusted, errors propagate
- text / number / boolean / temporal: standard parse of the declared type
- enum: exact member name, normalized member name, then member value
- sequence: compared to the joined actual elements (sets joined sorted)
- empty cell: absence sentinel (None), never a conversion error
"""

import collections.abc
import types
import typing
from collections.abc import Iterable, Mapping
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any

from table_asserter.config import AsserterConfig, get_default_config
from table_asserter.core.names import names_match, normalize_name
from table_asserter.domain.errors import (
    CannotConvertColumnValueToPropertyTypeError,
    CannotParseEnumToEnumValueError,
)
from table_asserter.domain.schemas import ValueKind

NUMBER_TYPES = (int, float, Decimal)
TEMPORAL_TYPES = (datetime, date, time)  # datetime before date (subclass)

# Hint origins treated as sequences (sets compare in sorted order)
SEQUENCE_ORIGINS = (
    list,
    tuple,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Iterable,
    collections.abc.Collection,
    collections.abc.Set,
)


# =============================================================================
# Type classification
# =============================================================================

def unwrap_optional(declared_type: Any) -> Any:
    """Optional[X] / X | None → X. Other unions are returned unchanged."""
    origin = typing.get_origin(declared_type)
    if origin is typing.Union or origin is types.UnionType:
        args = [arg for arg in typing.get_args(declared_type) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return declared_type


def is_sequence_value(value: Any) -> bool:
    """Non-text, non-mapping iterable."""
    return isinstance(value, Iterable) and not isinstance(value, (str, bytes, Mapping))


def classify_type(declared_type: Any) -> ValueKind | None:
    """
    ValueKind for a declared type hint.

    Returns:
        None when the type is not convertible from a cell
    """
    declared_type = unwrap_optional(declared_type)

    origin = typing.get_origin(declared_type)
    if origin is not None:
        return ValueKind.SEQUENCE if origin in SEQUENCE_ORIGINS else None

    if not isinstance(declared_type, type):
        return None
    if issubclass(declared_type, Enum):
        return ValueKind.ENUM
    if issubclass(declared_type, bool):
        return ValueKind.BOOLEAN
    if issubclass(declared_type, NUMBER_TYPES):
        return ValueKind.NUMBER
    if issubclass(declared_type, TEMPORAL_TYPES):
        return ValueKind.TEMPORAL
    if issubclass(declared_type, str):
        return ValueKind.TEXT
    if declared_type in SEQUENCE_ORIGINS:
        return ValueKind.SEQUENCE
    return None


def classify_value(value: Any) -> ValueKind | None:
    """ValueKind inferred from an actual value (no usable type hint)."""
    if value is None:
        return ValueKind.TEXT
    if isinstance(value, Enum):
        return ValueKind.ENUM
    if isinstance(value, (str, bytes)):
        return ValueKind.TEXT
    if is_sequence_value(value):
        return ValueKind.SEQUENCE
    return classify_type(type(value))


def type_display_name(declared_type: Any) -> str:
    """Name used in diagnostics: int, Decimal, list[str], ..."""
    declared_type = unwrap_optional(declared_type)
    if isinstance(declared_type, type) and typing.get_origin(declared_type) is None:
        return declared_type.__name__
    return str(declared_type).replace("typing.", "")


# =============================================================================
# Formatting / comparison
# =============================================================================

def format_value(value: Any, separator: str = ", ") -> str:
    """Stringify an actual value for messages and sequence comparison."""
    if value is None:
        return ""
    if isinstance(value, Enum):
        return value.name
    if isinstance(value, str):
        return value
    if isinstance(value, collections.abc.Set):
        # unordered: sorted by element text so the result is stable
        return separator.join(sorted(format_value(item, separator) for item in value))
    if is_sequence_value(value):
        return separator.join(format_value(item, separator) for item in value)
    return str(value)


def values_match(expected: Any, actual: Any, kind: ValueKind, separator: str = ", ") -> bool:
    """
    Compare a converted cell with the actual property value.

    Args:
        expected: output of ValueConverter.convert
        actual: property value (iterators already materialized)
        kind: ValueKind of the binding
        separator: sequence separator

    Returns:
        True when equivalent
    """
    if kind is ValueKind.CUSTOM:
        if is_sequence_value(expected) and is_sequence_value(actual):
            if isinstance(actual, collections.abc.Set):
                return sorted(map(format_value, expected)) == sorted(map(format_value, actual))
            # order and length sensitive
            return list(expected) == list(actual)
        return bool(expected == actual)

    if expected is None:
        if actual is None:
            return True
        if kind is ValueKind.TEXT:
            return actual == ""
        if kind is ValueKind.SEQUENCE:
            return is_sequence_value(actual) and len(list(actual)) == 0
        return False

    if kind is ValueKind.SEQUENCE:
        return is_sequence_value(actual) and expected == format_value(actual, separator)

    return bool(expected == actual)


# =============================================================================
# Converter
# =============================================================================

class ValueConverter:
    """
    Convert raw table cells to property values.

    Usage:
        converter = ValueConverter()
        value = converter.convert("100", int, ValueKind.NUMBER, "Temperature.value")
    """

    def __init__(self, config: AsserterConfig | None = None):
        """
        Args:
            config: boolean tokens, enum value matching (None = defaults)
        """
        self.config = config or get_default_config()

    def convert(
        self,
        raw: str,
        declared_type: Any,
        kind: ValueKind | None,
        qualified_name: str,
    ) -> Any:
        """
        Convert one cell.

        Args:
            raw: cell text
            declared_type: property type (hint or runtime type)
            kind: ValueKind of declared_type (None = unsupported)
            qualified_name: Type.property for diagnostics

        Returns:
            Converted value; None for an empty cell

        Raises:
            CannotConvertColumnValueToPropertyTypeError: parse failure
            CannotParseEnumToEnumValueError: no enum member matches
        """
        if raw == "":
            return None

        declared_type = unwrap_optional(declared_type)

        if kind is ValueKind.TEXT or kind is ValueKind.SEQUENCE:
            return raw

        if kind is ValueKind.ENUM:
            return self.parse_enum(raw, declared_type)

        if kind is ValueKind.BOOLEAN:
            return self._parse_bool(raw, declared_type, qualified_name)

        if kind is ValueKind.NUMBER:
            try:
                return declared_type(raw)
            except (ValueError, ArithmeticError) as e:
                raise CannotConvertColumnValueToPropertyTypeError(
                    raw, type_display_name(declared_type), qualified_name
                ) from e

        if kind is ValueKind.TEMPORAL:
            try:
                return declared_type.fromisoformat(raw)
            except ValueError as e:
                raise CannotConvertColumnValueToPropertyTypeError(
                    raw, type_display_name(declared_type), qualified_name
                ) from e

        raise CannotConvertColumnValueToPropertyTypeError(
            raw, type_display_name(declared_type), qualified_name
        )

    def parse_enum(self, raw: str, enum_type: type[Enum]) -> Enum:
        """
        Resolve a cell to an enum member.

        Order: exact name, normalized name, then (if enabled) value.
        """
        members = enum_type.__members__

        if raw in members:
            return members[raw]

        for name, member in members.items():
            if names_match(raw, name):
                return member

        if self.config.enum_match_values:
            for member in enum_type:
                if str(member.value) == raw:
                    return member
            for member in enum_type:
                # punctuation-only values normalize to ""
                if normalize_name(str(member.value)) and names_match(raw, str(member.value)):
                    return member

        raise CannotParseEnumToEnumValueError(raw, enum_type.__name__)

    def _parse_bool(self, raw: str, declared_type: Any, qualified_name: str) -> bool:
        token = raw.strip().lower()
        if token in self.config.boolean_true_values:
            return True
        if token in self.config.boolean_false_values:
            return False
        raise CannotConvertColumnValueToPropertyTypeError(
            raw, type_display_name(declared_type), qualified_name
        )
