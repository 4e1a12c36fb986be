"""
Property bindings: which property is checked against which column(s).

Rules:
- A binding accepts its configured column names, else the property name
- Same property + same (normalized) column-name set twice → rejected
- Bindings that differ only by converter are still duplicates
"""

import logging
import operator
import typing
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, replace
from typing import Any

from table_asserter.config import AsserterConfig, get_default_config
from table_asserter.core.convert import (
    ValueConverter,
    classify_type,
    classify_value,
    format_value,
    values_match,
)
from table_asserter.core.names import names_match, normalize_name
from table_asserter.domain.errors import (
    MemberNameNotFoundOnExpressionError,
    MissingColumnDefinitionError,
    PropertyDefinitionAlreadyExistsError,
    PropertyNotReadableError,
)
from table_asserter.domain.schemas import ComparisonResult, ValueKind

logger = logging.getLogger(__name__)

Accessor = str | Callable[[Any], Any]
ColumnValueConverter = Callable[[str], Any]


# =============================================================================
# Configuration
# =============================================================================

@dataclass(frozen=True)
class PropertyConfiguration:
    """
    Per-binding options. Immutable: each call returns a new configuration.

    Usage:
        lambda o: o.compared_to_column("Name").with_column_value_conversion(int)
    """
    column_names: tuple[str, ...] = ()
    converter: ColumnValueConverter | None = None

    def compared_to_column(self, *column_names: str) -> "PropertyConfiguration":
        """Accept these column names instead of the property name."""
        return replace(self, column_names=self.column_names + tuple(column_names))

    def with_column_value_conversion(
        self, converter: ColumnValueConverter
    ) -> "PropertyConfiguration":
        """Convert cells with `converter` instead of the built-in parsing."""
        return replace(self, converter=converter)


DEFAULT_CONFIGURATION = PropertyConfiguration()


# =============================================================================
# Member name extraction
# =============================================================================

class _MemberRecorder:
    """Stand-in object that records attribute reads made by an accessor."""

    def __init__(self) -> None:
        object.__setattr__(self, "_recorded", [])

    def __getattr__(self, name: str) -> "_MemberRecorder":
        object.__getattribute__(self, "_recorded").append(name)
        return self


def member_name_of(accessor: Accessor) -> str:
    """
    Member name reached by an accessor.

    Args:
        accessor: attribute name, or a callable reading exactly one attribute
                  (lambda p: p.first_name, operator.attrgetter("first_name"))

    Raises:
        MemberNameNotFoundOnExpressionError: no single direct member read
    """
    if isinstance(accessor, str):
        if not accessor.isidentifier():
            raise MemberNameNotFoundOnExpressionError(accessor, "not a valid attribute name")
        return accessor

    if not callable(accessor):
        raise MemberNameNotFoundOnExpressionError(
            accessor, "expected an attribute name or a callable"
        )

    recorder = _MemberRecorder()
    try:
        result = accessor(recorder)
    except Exception as e:
        raise MemberNameNotFoundOnExpressionError(accessor, str(e)) from e

    recorded: list[str] = object.__getattribute__(recorder, "_recorded")
    if result is not recorder or len(recorded) != 1:
        raise MemberNameNotFoundOnExpressionError(
            accessor, f"expected a single member access, got {recorded}"
        )
    return recorded[0]


def resolve_type_hints(owner_type: type | None) -> dict[str, Any]:
    """Type hints of the owner type; {} when they cannot be evaluated."""
    if owner_type is None:
        return {}
    try:
        return typing.get_type_hints(owner_type)
    except (NameError, TypeError) as e:
        logger.debug(f"Type hints unavailable for {owner_type!r}, using runtime types: {e}")
        return {}


# =============================================================================
# PropertyBinding
# =============================================================================

class PropertyBinding:
    """
    One property of the target type compared to one or more columns.

    Usage:
        binding = PropertyBinding.create(Person, "Person", "first_name")
        result = binding.assert_equivalent("John", person)
    """

    def __init__(
        self,
        type_name: str,
        property_name: str,
        reader: Callable[[Any], Any],
        declared_type: Any = None,
        configuration: PropertyConfiguration = DEFAULT_CONFIGURATION,
        config: AsserterConfig | None = None,
    ):
        """
        Args:
            type_name: owner type name (diagnostics)
            property_name: member name
            reader: reads the property from an object element
            declared_type: type hint (None = infer from the actual value)
            configuration: column names / custom converter
            config: asserter settings
        """
        self.type_name = type_name
        self.property_name = property_name
        self.declared_type = declared_type
        self.column_names: tuple[str, ...] = configuration.column_names or (property_name,)
        self.custom_converter = configuration.converter
        self.config = config or get_default_config()
        self._reader = reader
        self._converter = ValueConverter(self.config)

    @classmethod
    def create(
        cls,
        owner_type: type | None,
        type_name: str,
        accessor: Accessor,
        configuration: PropertyConfiguration = DEFAULT_CONFIGURATION,
        config: AsserterConfig | None = None,
        type_hints: Mapping[str, Any] | None = None,
    ) -> "PropertyBinding":
        """Build a binding from an accessor (name or callable)."""
        property_name = member_name_of(accessor)
        reader = operator.attrgetter(accessor) if isinstance(accessor, str) else accessor
        hints = type_hints if type_hints is not None else resolve_type_hints(owner_type)

        return cls(
            type_name=type_name,
            property_name=property_name,
            reader=reader,
            declared_type=hints.get(property_name),
            configuration=configuration,
            config=config,
        )

    @property
    def qualified_name(self) -> str:
        return f"{self.type_name}.{self.property_name}"

    @property
    def definition_key(self) -> tuple[str, frozenset[str]]:
        """Identity used for duplicate detection."""
        return self.property_name, frozenset(normalize_name(n) for n in self.column_names)

    def is_mapped_to(self, column_name: str) -> bool:
        return any(names_match(column_name, name) for name in self.column_names)

    def read_value(self, element: Any) -> Any:
        """
        Actual property value (mapping key or attribute).

        Raises:
            PropertyNotReadableError: key/attribute missing on the element
        """
        try:
            if isinstance(element, Mapping):
                value = element[self.property_name]
            else:
                value = self._reader(element)
        except (KeyError, AttributeError) as e:
            raise PropertyNotReadableError(self.qualified_name, type(element).__name__) from e
        if isinstance(value, Iterator):
            value = list(value)
        return value

    def resolve_kind(self, actual: Any) -> tuple[Any, ValueKind | None]:
        """(declared type, ValueKind) for built-in conversion; falls back to the runtime type."""
        if self.declared_type is not None:
            kind = classify_type(self.declared_type)
            if kind is not None:
                return self.declared_type, kind

        kind = classify_value(actual)
        declared_type = str if actual is None else type(actual)
        if kind is None and self.declared_type is not None:
            declared_type = self.declared_type
        return declared_type, kind

    def assert_equivalent(self, expected_value: str, element: Any) -> ComparisonResult:
        """
        Compare one raw cell with this property on `element`.

        Raises:
            ConversionError: the cell cannot be converted
            Exception: anything raised by a custom converter, unwrapped
        """
        actual = self.read_value(element)
        separator = self.config.sequence_separator

        kind: ValueKind | None
        if self.custom_converter is not None:
            kind = ValueKind.CUSTOM
            expected = self.custom_converter(expected_value)
        else:
            declared_type, kind = self.resolve_kind(actual)
            expected = self._converter.convert(
                expected_value, declared_type, kind, self.qualified_name
            )

        # unsupported kinds only get here with an empty cell
        if values_match(expected, actual, kind or ValueKind.TEXT, separator):
            return ComparisonResult.success(self.property_name)

        return ComparisonResult.failure(self.property_name, format_value(actual, separator))

    def __str__(self) -> str:
        return f"{self.qualified_name} -> [{', '.join(self.column_names)}]"

    def __repr__(self) -> str:
        return f"PropertyBinding({self})"


# =============================================================================
# BindingSet
# =============================================================================

class BindingSet:
    """
    Ordered bindings plus ignored column names for one assertion.

    Validation stops at the first column nobody maps.
    """

    def __init__(self, type_name: str):
        self.type_name = type_name
        self._bindings: list[PropertyBinding] = []
        self._ignored_columns: list[str] = []

    @property
    def ignored_columns(self) -> tuple[str, ...]:
        return tuple(self._ignored_columns)

    def add(self, binding: PropertyBinding) -> None:
        """
        Raises:
            PropertyDefinitionAlreadyExistsError: same property and column names
        """
        for existing in self._bindings:
            if existing.definition_key == binding.definition_key:
                raise PropertyDefinitionAlreadyExistsError(str(binding))

        self._bindings.append(binding)
        logger.debug(f"Bound {binding}")

    def ignore(self, column_name: str) -> None:
        self._ignored_columns.append(column_name)

    def is_ignored(self, column_name: str) -> bool:
        return any(names_match(column_name, ignored) for ignored in self._ignored_columns)

    def bindings_for(self, column_name: str) -> list[PropertyBinding]:
        """Bindings accepting a column, in declaration order."""
        if self.is_ignored(column_name):
            return []
        return [b for b in self._bindings if b.is_mapped_to(column_name)]

    def first_unmapped(self, column_names: Iterable[str]) -> str | None:
        for column_name in column_names:
            if self.is_ignored(column_name):
                continue
            if not any(b.is_mapped_to(column_name) for b in self._bindings):
                return column_name
        return None

    def validate(self, column_names: Iterable[str]) -> None:
        """
        Raises:
            MissingColumnDefinitionError: first unmapped column in order
        """
        unmapped = self.first_unmapped(column_names)
        if unmapped is not None:
            raise MissingColumnDefinitionError(self.type_name, unmapped)

    def __iter__(self) -> Iterator[PropertyBinding]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)
