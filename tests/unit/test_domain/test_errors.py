"""
test_errors.py - error taxonomy tests

DoD:
- messages are exact, deterministic strings
- every error exposes a code and its context
- value/cardinality mismatches are AssertionErrors for test runners
"""

from table_asserter.domain.errors import (
    AsserterStateError,
    CardinalityMismatchError,
    ErrorCodes,
    ExpectedTableNotEquivalentToCollectionItemError,
    ExpectedTableNotEquivalentToDataError,
    ExpectedTableNotEquivalentToObjectError,
    InputShapeError,
    InstanceToAssertCannotBeACollectionError,
    NullInputError,
    PropertyNotReadableError,
    TableAsserterError,
    TableRowCountIsDifferentThanElementCountError,
    ValueMismatchError,
)


class TestErrorMessages:
    """Exact message tests."""

    def test_cardinality(self):
        error = TableRowCountIsDifferentThanElementCountError("Person", 2, 1)

        assert str(error) == "Table row count (2) is different than 'Person' count (1)"
        assert isinstance(error, CardinalityMismatchError)
        assert isinstance(error, AssertionError)

    def test_collection_item_mismatch(self):
        error = ExpectedTableNotEquivalentToCollectionItemError(0, "first_name", "Jonathan", "FirstName", "John")

        assert str(error) == (
            "At index 0, 'first_name' actual data is 'Jonathan' but should be 'John' from column 'FirstName'."
        )
        assert error.row_index == 0
        assert isinstance(error, ValueMismatchError)

    def test_data_mismatch_is_collection_mismatch(self):
        error = ExpectedTableNotEquivalentToDataError(1, "last_name", "Doe", "Last name", "Roe")

        assert isinstance(error, ExpectedTableNotEquivalentToCollectionItemError)
        assert str(error).startswith("At index 1, 'last_name'")

    def test_object_mismatch(self):
        error = ExpectedTableNotEquivalentToObjectError("first_name", "john", "FirstName", "John")

        assert str(error) == "'first_name' actual data is 'john' but should be 'John' from column 'FirstName'."

    def test_null_input(self):
        error = NullInputError("actual_elements")

        assert str(error) == "Value cannot be null. (Parameter 'actual_elements')"
        assert isinstance(error, ValueError)
        assert isinstance(error, InputShapeError)

    def test_instance_is_collection(self):
        error = InstanceToAssertCannotBeACollectionError(
            "instance_should_be_equivalent_to_table", "should_be_equivalent_to_table"
        )

        assert str(error) == (
            "You cannot call 'instance_should_be_equivalent_to_table' with a collection. "
            "Make sure it is a simple object or use 'should_be_equivalent_to_table' "
            "to assert your collection of items."
        )


class TestErrorContext:
    """Code/context tests."""

    def test_to_dict(self):
        error = ExpectedTableNotEquivalentToCollectionItemError(3, "value", "100", "Value", "101")

        data = error.to_dict()

        assert data["code"] == ErrorCodes.VALUE_MISMATCH
        assert data["row_index"] == 3
        assert data["expected_value"] == "101"
        assert data["message"] == str(error)

    def test_all_errors_share_base(self):
        assert issubclass(AsserterStateError, TableAsserterError)
        assert issubclass(AsserterStateError, RuntimeError)
        assert AsserterStateError("with_property", "succeeded").code == ErrorCodes.INVALID_STATE

    def test_mismatch_carries_qualified_name(self):
        error = ExpectedTableNotEquivalentToObjectError(
            "first_name", "john", "FirstName", "John", qualified_name="Person.first_name"
        )

        assert error.qualified_name == "Person.first_name"
        assert error.to_dict()["qualified_name"] == "Person.first_name"

    def test_property_not_readable(self):
        error = PropertyNotReadableError("Person.email", "dict")

        assert error.code == ErrorCodes.PROPERTY_NOT_READABLE
        assert str(error) == (
            "The property 'Person.email' cannot be read from an element of type 'dict'."
        )
