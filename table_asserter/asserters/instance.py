"""
Single-object mode: one row per property, two columns (field, value).

| Field     | Value |
| FirstName | John  |
| LastName  | Doe   |
"""

import logging
from typing import Any

from table_asserter.config import AsserterConfig
from table_asserter.domain.errors import (
    ExpectedTableNotEquivalentToObjectError,
    InvalidFieldValueTableError,
)
from table_asserter.domain.schemas import AssertionOutcome, Table

from .base import FluentAsserter, failure_outcome

logger = logging.getLogger(__name__)

FIELD_VALUE_COLUMN_COUNT = 2


class InstanceAsserter(FluentAsserter):
    """
    Compare a field/value table with the properties of one object.

    Field names are matched like column headers (exact, then normalized);
    each row is checked against every binding accepting its field name.
    """

    def __init__(
        self,
        table: Table,
        instance: Any,
        config: AsserterConfig | None = None,
    ):
        self.instance = instance
        super().__init__(table, type(instance), config)

    @property
    def field_names(self) -> list[str]:
        return [row[0] for row in self.table.rows]

    def _validate(self) -> None:
        if len(self.table.header) != FIELD_VALUE_COLUMN_COUNT:
            raise InvalidFieldValueTableError(self.table.header)

        self._bindings.validate(self.field_names)

    def _compare(self) -> AssertionOutcome:
        logger.debug(f"Comparing {self.table.row_count} field(s) of '{self.type_name}'")

        for row_index, (field_name, expected_value) in enumerate(self.table.rows):
            for binding in self._bindings.bindings_for(field_name):
                result = binding.assert_equivalent(expected_value, self.instance)
                if not result.is_success:
                    return failure_outcome(
                        row_index, binding, result.actual_value, expected_value, field_name
                    )

        return AssertionOutcome(success=True)

    def _mismatch_error(self, outcome: AssertionOutcome) -> ExpectedTableNotEquivalentToObjectError:
        return ExpectedTableNotEquivalentToObjectError(
            member_name=outcome.member_name or "",
            actual_value=outcome.actual_value or "",
            column_name=outcome.column_name or "",
            expected_value=outcome.expected_value or "",
            qualified_name=outcome.qualified_name or "",
        )
