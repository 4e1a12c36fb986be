"""
Asserters: entry points of the fluent API.

- should_be_equivalent_to_table(elements, table)   collection → table
- instance_should_be_equivalent_to_table(obj, table) single object → table
- table_should_match(table, elements)              table → collection

Each returns an AsserterInitialization; declare at least one property
with with_property() before ignoring_column()/assert_equivalent().
"""

from collections.abc import Iterable, Mapping
from typing import Any

from table_asserter.config import AsserterConfig
from table_asserter.domain.errors import (
    InstanceToAssertCannotBeACollectionError,
    NullInputError,
)
from table_asserter.domain.schemas import Table

from .base import AsserterInitialization, FluentAsserter
from .collection import CollectionAsserter
from .instance import InstanceAsserter
from .table import TableAsserter


def _is_collection(value: Any) -> bool:
    return isinstance(value, Iterable) and not isinstance(value, (str, bytes, Mapping))


def should_be_equivalent_to_table(
    actual_elements: Iterable[Any],
    table: Table,
    element_type: type | None = None,
    config: AsserterConfig | None = None,
) -> AsserterInitialization[CollectionAsserter]:
    """
    Assert a collection against a table (one row per element).

    Args:
        actual_elements: elements to check, in row order
        table: expected rows
        element_type: owner type (None = type of the first element)
        config: asserter settings (None = defaults)

    Raises:
        NullInputError: actual_elements is None
    """
    if actual_elements is None:
        raise NullInputError("actual_elements")

    return AsserterInitialization(
        CollectionAsserter(table, list(actual_elements), element_type, config)
    )


def instance_should_be_equivalent_to_table(
    actual_element: Any,
    table: Table,
    config: AsserterConfig | None = None,
) -> AsserterInitialization[InstanceAsserter]:
    """
    Assert one object against a field/value table.

    Raises:
        NullInputError: actual_element is None
        InstanceToAssertCannotBeACollectionError: actual_element is a collection
    """
    if actual_element is None:
        raise NullInputError("actual_element", "Provided object cannot be null.")

    if _is_collection(actual_element):
        raise InstanceToAssertCannotBeACollectionError(
            instance_should_be_equivalent_to_table.__name__,
            should_be_equivalent_to_table.__name__,
        )

    return AsserterInitialization(InstanceAsserter(table, actual_element, config))


def table_should_match(
    table: Table,
    actual_elements: Iterable[Any],
    element_type: type | None = None,
    config: AsserterConfig | None = None,
) -> AsserterInitialization[TableAsserter]:
    """
    Assert a table against a collection (table-first wording).

    Raises:
        NullInputError: actual_elements is None
    """
    if actual_elements is None:
        raise NullInputError("actual_elements")

    return AsserterInitialization(
        TableAsserter(table, list(actual_elements), element_type, config)
    )


__all__ = [
    "AsserterInitialization",
    "CollectionAsserter",
    "FluentAsserter",
    "InstanceAsserter",
    "TableAsserter",
    "instance_should_be_equivalent_to_table",
    "should_be_equivalent_to_table",
    "table_should_match",
]
