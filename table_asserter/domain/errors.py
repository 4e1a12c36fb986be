"""
Error definitions for table equivalence assertions.

Rules:
- First detected problem halts the assertion (no accumulation)
- Messages are deterministic strings; tests assert on the exact text
- Every error carries a stable code and its context for logs
"""

from typing import Any


class TableAsserterError(Exception):
    """
    Base error for every failure raised by the asserters.

    Usage:
        raise MissingColumnDefinitionError("Person", "Test")
    """

    code = "TABLE_ASSERTER_ERROR"

    def __init__(self, message: str, **context: Any) -> None:
        self.context = context
        super().__init__(message)

    @property
    def message(self) -> str:
        return str(self)

    def to_dict(self) -> dict[str, Any]:
        """For logs/JSON serialization."""
        return {
            "code": self.code,
            "message": self.message,
            **self.context,
        }


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """Error code constants. Each error class exposes one of these as `code`."""

    # === Input shape ===
    NULL_INPUT = "NULL_INPUT"
    INSTANCE_IS_COLLECTION = "INSTANCE_IS_COLLECTION"
    INVALID_FIELD_VALUE_TABLE = "INVALID_FIELD_VALUE_TABLE"

    # === Binding definitions ===
    MISSING_COLUMN_DEFINITION = "MISSING_COLUMN_DEFINITION"
    DUPLICATE_PROPERTY_DEFINITION = "DUPLICATE_PROPERTY_DEFINITION"
    MEMBER_NAME_NOT_FOUND = "MEMBER_NAME_NOT_FOUND"
    PROPERTY_NOT_READABLE = "PROPERTY_NOT_READABLE"

    # === Comparison ===
    CARDINALITY_MISMATCH = "CARDINALITY_MISMATCH"
    CANNOT_CONVERT_VALUE = "CANNOT_CONVERT_VALUE"
    CANNOT_PARSE_ENUM = "CANNOT_PARSE_ENUM"
    VALUE_MISMATCH = "VALUE_MISMATCH"

    # === Lifecycle ===
    INVALID_STATE = "INVALID_STATE"


# =============================================================================
# Input shape
# =============================================================================

class InputShapeError(TableAsserterError):
    """The values handed to an asserter do not have the expected shape."""


class NullInputError(InputShapeError, ValueError):
    """A required input is None."""

    code = ErrorCodes.NULL_INPUT

    def __init__(self, parameter: str, message: str = "Value cannot be null.") -> None:
        super().__init__(f"{message} (Parameter '{parameter}')", parameter=parameter)


class InstanceToAssertCannotBeACollectionError(InputShapeError):
    """A collection was given where a single object was expected."""

    code = ErrorCodes.INSTANCE_IS_COLLECTION

    def __init__(self, instance_entry: str, collection_entry: str) -> None:
        super().__init__(
            f"You cannot call '{instance_entry}' with a collection. "
            f"Make sure it is a simple object or use '{collection_entry}' "
            "to assert your collection of items.",
            instance_entry=instance_entry,
            collection_entry=collection_entry,
        )


class InvalidFieldValueTableError(InputShapeError):
    """A single-object table does not have exactly a field and a value column."""

    code = ErrorCodes.INVALID_FIELD_VALUE_TABLE

    def __init__(self, header: tuple[str, ...]) -> None:
        super().__init__(
            f"A table compared to a single object must have exactly 2 columns "
            f"(field and value) but has {len(header)}: {list(header)}.",
            header=list(header),
        )


# =============================================================================
# Binding definitions
# =============================================================================

class MissingColumnDefinitionError(TableAsserterError):
    """A table column is not mapped by any property binding."""

    code = ErrorCodes.MISSING_COLUMN_DEFINITION

    def __init__(self, type_name: str, column_name: str) -> None:
        self.type_name = type_name
        self.column_name = column_name
        super().__init__(
            f"The column '{column_name}' has not been mapped to any property "
            f"of class '{type_name}'.",
            type_name=type_name,
            column_name=column_name,
        )


class PropertyDefinitionAlreadyExistsError(TableAsserterError):
    """The same property was bound twice to the same column names."""

    code = ErrorCodes.DUPLICATE_PROPERTY_DEFINITION

    def __init__(self, definition: str) -> None:
        super().__init__(
            f"The same property definition exists: {definition}",
            definition=definition,
        )


class MemberNameNotFoundOnExpressionError(TableAsserterError):
    """No single member name could be read from a property accessor."""

    code = ErrorCodes.MEMBER_NAME_NOT_FOUND

    def __init__(self, accessor: Any, reason: str = "") -> None:
        message = f"Unable to find a member name for accessor {accessor!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, accessor=repr(accessor))


class PropertyNotReadableError(TableAsserterError):
    """A bound property is missing on an element (attribute or mapping key)."""

    code = ErrorCodes.PROPERTY_NOT_READABLE

    def __init__(self, qualified_name: str, element_type: str) -> None:
        self.qualified_name = qualified_name
        self.element_type = element_type
        super().__init__(
            f"The property '{qualified_name}' cannot be read from an element "
            f"of type '{element_type}'.",
            property=qualified_name,
            element_type=element_type,
        )


# =============================================================================
# Comparison
# =============================================================================

class CardinalityMismatchError(TableAsserterError, AssertionError):
    """Row count and element count differ."""

    code = ErrorCodes.CARDINALITY_MISMATCH


class TableRowCountIsDifferentThanElementCountError(CardinalityMismatchError):
    def __init__(self, type_name: str, row_count: int, element_count: int) -> None:
        self.type_name = type_name
        self.row_count = row_count
        self.element_count = element_count
        super().__init__(
            f"Table row count ({row_count}) is different than "
            f"'{type_name}' count ({element_count})",
            type_name=type_name,
            row_count=row_count,
            element_count=element_count,
        )


class ConversionError(TableAsserterError):
    """A cell cannot be converted to the declared property type."""


class CannotConvertColumnValueToPropertyTypeError(ConversionError):
    code = ErrorCodes.CANNOT_CONVERT_VALUE

    def __init__(self, value: str, type_name: str, qualified_name: str) -> None:
        self.value = value
        self.type_name = type_name
        self.qualified_name = qualified_name
        super().__init__(
            f"The value '{value}' cannot be converted to type '{type_name}' "
            f"of property '{qualified_name}'",
            value=value,
            type_name=type_name,
            property=qualified_name,
        )


class CannotParseEnumToEnumValueError(ConversionError):
    code = ErrorCodes.CANNOT_PARSE_ENUM

    def __init__(self, value: str, enum_name: str) -> None:
        self.value = value
        self.enum_name = enum_name
        super().__init__(
            f"'{value}' cannot be parsed to any enum value of type {enum_name}.",
            value=value,
            enum_name=enum_name,
        )


class ValueMismatchError(TableAsserterError, AssertionError):
    """
    A converted cell differs from the actual property value.

    Carries the full location so the message is self-sufficient.
    """

    code = ErrorCodes.VALUE_MISMATCH

    def __init__(
        self,
        message: str,
        member_name: str,
        actual_value: str,
        column_name: str,
        expected_value: str,
        qualified_name: str = "",
        **context: Any,
    ) -> None:
        self.member_name = member_name
        self.actual_value = actual_value
        self.column_name = column_name
        self.expected_value = expected_value
        self.qualified_name = qualified_name
        super().__init__(
            message,
            member_name=member_name,
            actual_value=actual_value,
            column_name=column_name,
            expected_value=expected_value,
            qualified_name=qualified_name,
            **context,
        )


class ExpectedTableNotEquivalentToCollectionItemError(ValueMismatchError):
    def __init__(
        self,
        row_index: int,
        member_name: str,
        actual_value: str,
        column_name: str,
        expected_value: str,
        qualified_name: str = "",
    ) -> None:
        self.row_index = row_index
        super().__init__(
            f"At index {row_index}, '{member_name}' actual data is '{actual_value}' "
            f"but should be '{expected_value}' from column '{column_name}'.",
            member_name,
            actual_value,
            column_name,
            expected_value,
            qualified_name,
            row_index=row_index,
        )


class ExpectedTableNotEquivalentToDataError(ExpectedTableNotEquivalentToCollectionItemError):
    """Raised by the table-first direction (`table_should_match`)."""


class ExpectedTableNotEquivalentToObjectError(ValueMismatchError):
    def __init__(
        self,
        member_name: str,
        actual_value: str,
        column_name: str,
        expected_value: str,
        qualified_name: str = "",
    ) -> None:
        super().__init__(
            f"'{member_name}' actual data is '{actual_value}' "
            f"but should be '{expected_value}' from column '{column_name}'.",
            member_name,
            actual_value,
            column_name,
            expected_value,
            qualified_name,
        )


# =============================================================================
# Lifecycle
# =============================================================================

class AsserterStateError(TableAsserterError, RuntimeError):
    """An asserter was reconfigured or re-run after its assertion completed."""

    code = ErrorCodes.INVALID_STATE

    def __init__(self, operation: str, state: str) -> None:
        super().__init__(
            f"Cannot call '{operation}' on an asserter in state '{state}'.",
            operation=operation,
            state=state,
        )
