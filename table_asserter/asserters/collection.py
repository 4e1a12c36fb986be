"""
Collection mode: one table row per element, one column per bound property.

Order of checks:
1. every non-ignored header is mapped (first unmapped header fails)
2. row count == element count
3. row by row, binding by binding, first mismatch fails
"""

import logging
from collections.abc import Sequence
from typing import Any

from table_asserter.config import AsserterConfig
from table_asserter.domain.errors import (
    ExpectedTableNotEquivalentToCollectionItemError,
    TableRowCountIsDifferentThanElementCountError,
)
from table_asserter.domain.schemas import AssertionOutcome, Table

from .base import FluentAsserter, failure_outcome

logger = logging.getLogger(__name__)


class CollectionAsserter(FluentAsserter):
    """
    Compare table rows with a sequence of elements.

    Usage:
        should_be_equivalent_to_table(persons, table) \\
            .with_property("first_name") \\
            .with_property(lambda p: p.last_name) \\
            .assert_equivalent()
    """

    mismatch_error: type[ExpectedTableNotEquivalentToCollectionItemError] = (
        ExpectedTableNotEquivalentToCollectionItemError
    )

    def __init__(
        self,
        table: Table,
        elements: Sequence[Any],
        element_type: type | None = None,
        config: AsserterConfig | None = None,
    ):
        """
        Args:
            table: expected rows
            elements: actual elements (read only)
            element_type: owner type for hints/diagnostics
                          (None = type of the first element)
            config: asserter settings
        """
        self.elements = tuple(elements)
        if element_type is None and self.elements:
            element_type = type(self.elements[0])
        super().__init__(table, element_type, config)

    def _validate(self) -> None:
        self._bindings.validate(self.table.header)

        if self.table.row_count != len(self.elements):
            raise TableRowCountIsDifferentThanElementCountError(
                self.type_name, self.table.row_count, len(self.elements)
            )

    def _compare(self) -> AssertionOutcome:
        header = self.table.header
        compared_columns = [
            (index, name) for index, name in enumerate(header)
            if not self._bindings.is_ignored(name)
        ]
        logger.debug(
            f"Comparing {len(self.elements)} '{self.type_name}' element(s) "
            f"on {len(compared_columns)} column(s)"
        )

        for row_index, (row, element) in enumerate(zip(self.table.rows, self.elements)):
            for binding in self._bindings:
                for column_index, column_name in compared_columns:
                    if not binding.is_mapped_to(column_name):
                        continue

                    expected_value = row[column_index]
                    result = binding.assert_equivalent(expected_value, element)
                    if not result.is_success:
                        return failure_outcome(
                            row_index, binding, result.actual_value, expected_value, column_name
                        )

        return AssertionOutcome(success=True)

    def _mismatch_error(
        self, outcome: AssertionOutcome
    ) -> ExpectedTableNotEquivalentToCollectionItemError:
        return self.mismatch_error(
            row_index=outcome.index or 0,
            member_name=outcome.member_name or "",
            actual_value=outcome.actual_value or "",
            column_name=outcome.column_name or "",
            expected_value=outcome.expected_value or "",
            qualified_name=outcome.qualified_name or "",
        )
