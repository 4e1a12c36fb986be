"""
test_properties.py - property binding tests

DoD:
- member names come from attribute names or single-attribute accessors
- bindings accept the property name unless columns are configured
- duplicate property + column-name sets are rejected
- validation reports only the first unmapped column
"""

import operator
from dataclasses import dataclass
from enum import Enum

import pytest

from table_asserter.core.properties import (
    BindingSet,
    PropertyBinding,
    PropertyConfiguration,
    member_name_of,
)
from table_asserter.domain.errors import (
    MemberNameNotFoundOnExpressionError,
    MissingColumnDefinitionError,
    PropertyDefinitionAlreadyExistsError,
    PropertyNotReadableError,
)
from table_asserter.domain.schemas import ValueKind


class TemperatureType(Enum):
    Celsius = "C"
    Kelvin = "K"


@dataclass
class Temperature:
    value: int
    type: TemperatureType


@dataclass
class Person:
    first_name: str
    last_name: str


def bind(accessor, configuration: PropertyConfiguration = PropertyConfiguration()) -> PropertyBinding:
    return PropertyBinding.create(Person, "Person", accessor, configuration)


# =============================================================================
# member_name_of tests
# =============================================================================


class TestMemberNameOf:
    """member_name_of tests."""

    def test_attribute_name(self):
        assert member_name_of("first_name") == "first_name"

    def test_lambda(self):
        assert member_name_of(lambda p: p.first_name) == "first_name"

    def test_attrgetter(self):
        assert member_name_of(operator.attrgetter("last_name")) == "last_name"

    def test_nested_member_rejected(self):
        with pytest.raises(MemberNameNotFoundOnExpressionError):
            member_name_of(lambda p: p.address.city)

    def test_computed_value_rejected(self):
        """Accessor that does arithmetic on the member."""
        with pytest.raises(MemberNameNotFoundOnExpressionError) as exc_info:
            member_name_of(lambda p: p.value + 1)

        assert exc_info.value.__cause__ is not None

    def test_no_member_rejected(self):
        with pytest.raises(MemberNameNotFoundOnExpressionError):
            member_name_of(lambda p: 42)

    def test_invalid_name_rejected(self):
        with pytest.raises(MemberNameNotFoundOnExpressionError):
            member_name_of("first name")

    def test_non_callable_rejected(self):
        with pytest.raises(MemberNameNotFoundOnExpressionError):
            member_name_of(42)  # type: ignore[arg-type]


# =============================================================================
# PropertyConfiguration tests
# =============================================================================


class TestPropertyConfiguration:
    """PropertyConfiguration tests."""

    def test_immutable_updates(self):
        base = PropertyConfiguration()
        configured = base.compared_to_column("Name").with_column_value_conversion(str.upper)

        assert base.column_names == ()
        assert base.converter is None
        assert configured.column_names == ("Name",)
        assert configured.converter is str.upper

    def test_multiple_columns(self):
        configured = PropertyConfiguration().compared_to_column("From", "Sender")

        assert configured.column_names == ("From", "Sender")


# =============================================================================
# PropertyBinding tests
# =============================================================================


class TestPropertyBinding:
    """PropertyBinding tests."""

    def test_defaults_to_property_name(self):
        binding = bind("first_name")

        assert binding.column_names == ("first_name",)
        assert binding.qualified_name == "Person.first_name"
        assert str(binding) == "Person.first_name -> [first_name]"

    @pytest.mark.parametrize("header", ["First Name", "first name", "firstname", "FIRST NAME", "FirstName"])
    def test_human_equivalent_headers(self, header):
        assert bind("first_name").is_mapped_to(header)

    def test_configured_column_replaces_property_name(self):
        binding = bind("first_name", PropertyConfiguration().compared_to_column("MyFirstName"))

        assert binding.is_mapped_to("my first name")
        assert not binding.is_mapped_to("first name")

    def test_declared_type_from_hints(self):
        binding = PropertyBinding.create(Temperature, "Temperature", "type")

        assert binding.declared_type is TemperatureType
        assert binding.resolve_kind(TemperatureType.Kelvin) == (TemperatureType, ValueKind.ENUM)

    def test_runtime_type_without_hints(self):
        binding = PropertyBinding.create(None, "object", "value")

        assert binding.resolve_kind(12) == (int, ValueKind.NUMBER)

    def test_compare_success(self):
        result = bind("first_name").assert_equivalent("John", Person("John", "Doe"))

        assert result.is_success
        assert result.member_name == "first_name"

    def test_compare_failure_carries_actual(self):
        result = bind("first_name").assert_equivalent("John", Person("Jonathan", "Doe"))

        assert not result.is_success
        assert result.actual_value == "Jonathan"

    def test_enum_compare(self):
        binding = PropertyBinding.create(Temperature, "Temperature", lambda t: t.type)

        assert binding.assert_equivalent("kelvin", Temperature(1, TemperatureType.Kelvin)).is_success
        assert binding.assert_equivalent("K", Temperature(1, TemperatureType.Kelvin)).is_success

    def test_mapping_element(self):
        binding = PropertyBinding.create(None, "dict", "first_name")

        assert binding.assert_equivalent("John", {"first_name": "John"}).is_success

    def test_missing_mapping_key(self):
        binding = PropertyBinding.create(None, "dict", "name")

        with pytest.raises(PropertyNotReadableError) as exc_info:
            binding.read_value({"other": 1})

        assert str(exc_info.value) == (
            "The property 'dict.name' cannot be read from an element of type 'dict'."
        )
        assert isinstance(exc_info.value.__cause__, KeyError)

    def test_missing_attribute(self):
        binding = bind("first_name")

        with pytest.raises(PropertyNotReadableError) as exc_info:
            binding.assert_equivalent("John", Temperature(1, TemperatureType.Kelvin))

        assert exc_info.value.to_dict()["property"] == "Person.first_name"
        assert exc_info.value.element_type == "Temperature"

    def test_custom_converter_errors_propagate(self):
        def explode(raw: str) -> int:
            raise RuntimeError(f"cannot read {raw}")

        binding = PropertyBinding.create(
            Temperature,
            "Temperature",
            "value",
            PropertyConfiguration().with_column_value_conversion(explode),
        )

        with pytest.raises(RuntimeError, match="cannot read hundred"):
            binding.assert_equivalent("hundred", Temperature(100, TemperatureType.Celsius))

    def test_iterator_property_materialized(self):
        @dataclass
        class Details:
            names: object

        binding = PropertyBinding.create(Details, "Details", "names")
        result = binding.assert_equivalent("a, b", Details(iter(["a", "b"])))

        assert result.is_success


# =============================================================================
# BindingSet tests
# =============================================================================


class TestBindingSet:
    """BindingSet tests."""

    def test_duplicate_rejected(self):
        bindings = BindingSet("Person")
        bindings.add(bind("first_name"))

        with pytest.raises(PropertyDefinitionAlreadyExistsError) as exc_info:
            bindings.add(bind(lambda p: p.first_name))

        assert str(exc_info.value) == "The same property definition exists: Person.first_name -> [first_name]"

    @pytest.mark.parametrize("column", ["first_name", "First name"])
    def test_duplicate_by_normalized_column(self, column):
        bindings = BindingSet("Person")
        bindings.add(bind("first_name"))

        with pytest.raises(PropertyDefinitionAlreadyExistsError):
            bindings.add(bind("first_name", PropertyConfiguration().compared_to_column(column)))

    def test_duplicate_ignores_converter(self):
        """Bindings differing only by converter are duplicates."""
        bindings = BindingSet("Person")
        bindings.add(bind("first_name"))

        with pytest.raises(PropertyDefinitionAlreadyExistsError):
            bindings.add(bind("first_name", PropertyConfiguration().with_column_value_conversion(str)))

    def test_same_property_other_column_allowed(self):
        bindings = BindingSet("Person")
        bindings.add(bind("first_name"))
        bindings.add(bind("first_name", PropertyConfiguration().compared_to_column("FirstName2")))

        assert len(bindings) == 2

    def test_first_unmapped_in_header_order(self):
        bindings = BindingSet("Person")
        bindings.add(bind("first_name"))

        with pytest.raises(MissingColumnDefinitionError) as exc_info:
            bindings.validate(["First name", "Age", "Email"])

        assert exc_info.value.column_name == "Age"
        assert str(exc_info.value) == "The column 'Age' has not been mapped to any property of class 'Person'."

    def test_ignored_columns_skip_validation(self):
        bindings = BindingSet("Person")
        bindings.add(bind("first_name"))
        bindings.ignore("Age")

        bindings.validate(["first_name", "age"])

        assert bindings.bindings_for("Age") == []
        assert bindings.ignored_columns == ("Age",)

    def test_bindings_for_keeps_declaration_order(self):
        bindings = BindingSet("Person")
        first = bind("first_name", PropertyConfiguration().compared_to_column("Name"))
        last = bind("last_name", PropertyConfiguration().compared_to_column("Name"))
        bindings.add(first)
        bindings.add(last)

        assert bindings.bindings_for("name") == [first, last]
