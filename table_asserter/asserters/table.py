"""Table-first direction: table_should_match(table, elements)."""

from table_asserter.domain.errors import ExpectedTableNotEquivalentToDataError

from .collection import CollectionAsserter


class TableAsserter(CollectionAsserter):
    """Same rules as CollectionAsserter; mismatches raise ExpectedTableNotEquivalentToDataError."""

    mismatch_error = ExpectedTableNotEquivalentToDataError
