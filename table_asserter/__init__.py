"""
table-asserter: compare test-data tables with objects.

Usage:
    from table_asserter import Table, should_be_equivalent_to_table

    table = Table("First name", "Last name")
    table.add_row("John", "Doe")

    should_be_equivalent_to_table(persons, table) \
        .with_property("first_name") \
        .with_property("last_name") \
        .assert_equivalent()
"""

from .asserters import (
    instance_should_be_equivalent_to_table,
    should_be_equivalent_to_table,
    table_should_match,
)
from .config import AsserterConfig, get_default_config, load_config
from .core.properties import PropertyConfiguration
from .domain.errors import (
    AsserterStateError,
    CannotConvertColumnValueToPropertyTypeError,
    CannotParseEnumToEnumValueError,
    CardinalityMismatchError,
    ConversionError,
    ErrorCodes,
    ExpectedTableNotEquivalentToCollectionItemError,
    ExpectedTableNotEquivalentToDataError,
    ExpectedTableNotEquivalentToObjectError,
    InputShapeError,
    InstanceToAssertCannotBeACollectionError,
    InvalidFieldValueTableError,
    MemberNameNotFoundOnExpressionError,
    MissingColumnDefinitionError,
    NullInputError,
    PropertyDefinitionAlreadyExistsError,
    PropertyNotReadableError,
    TableAsserterError,
    TableRowCountIsDifferentThanElementCountError,
    ValueMismatchError,
)
from .domain.schemas import AssertionOutcome, AssertionState, Table, ValueKind

__version__ = "0.1.0"

__all__ = [
    # Entry points
    "should_be_equivalent_to_table",
    "instance_should_be_equivalent_to_table",
    "table_should_match",
    # Model
    "Table",
    "PropertyConfiguration",
    "AssertionOutcome",
    "AssertionState",
    "ValueKind",
    # Config
    "AsserterConfig",
    "load_config",
    "get_default_config",
    # Errors
    "ErrorCodes",
    "TableAsserterError",
    "InputShapeError",
    "NullInputError",
    "InstanceToAssertCannotBeACollectionError",
    "InvalidFieldValueTableError",
    "MissingColumnDefinitionError",
    "PropertyDefinitionAlreadyExistsError",
    "PropertyNotReadableError",
    "MemberNameNotFoundOnExpressionError",
    "CardinalityMismatchError",
    "TableRowCountIsDifferentThanElementCountError",
    "ConversionError",
    "CannotConvertColumnValueToPropertyTypeError",
    "CannotParseEnumToEnumValueError",
    "ValueMismatchError",
    "ExpectedTableNotEquivalentToCollectionItemError",
    "ExpectedTableNotEquivalentToDataError",
    "ExpectedTableNotEquivalentToObjectError",
    "AsserterStateError",
]
