"""
Shared asserter lifecycle.

configuring → validating → comparing → succeeded | failed

- Bindings and ignored columns can only be declared while configuring
- One assertion per asserter; the first failure is terminal
"""

import logging
from collections.abc import Callable
from typing import Generic, TypeVar

from table_asserter.config import AsserterConfig, get_default_config
from table_asserter.core.properties import (
    DEFAULT_CONFIGURATION,
    Accessor,
    BindingSet,
    PropertyBinding,
    PropertyConfiguration,
    resolve_type_hints,
)
from table_asserter.domain.errors import AsserterStateError, ValueMismatchError
from table_asserter.domain.schemas import AssertionOutcome, AssertionState, Table

logger = logging.getLogger(__name__)

Configure = Callable[[PropertyConfiguration], PropertyConfiguration]
A = TypeVar("A", bound="FluentAsserter")


class FluentAsserter:
    """
    Base class: bindings, ignores and the assertion state machine.

    Subclasses implement _validate (fail fast, no cell read),
    _compare (first mismatch as an AssertionOutcome) and _mismatch_error.
    """

    def __init__(
        self,
        table: Table,
        owner_type: type | None,
        config: AsserterConfig | None = None,
    ):
        self.table = table
        self.owner_type = owner_type
        self.type_name = owner_type.__name__ if owner_type is not None else "object"
        self.config = config or get_default_config()
        self.state = AssertionState.CONFIGURING
        self._bindings = BindingSet(self.type_name)
        self._type_hints = resolve_type_hints(owner_type)

    @property
    def bindings(self) -> BindingSet:
        return self._bindings

    def with_property(self: A, accessor: Accessor, configure: Configure | None = None) -> A:
        """
        Declare a property to compare.

        Args:
            accessor: attribute name or callable (lambda p: p.first_name)
            configure: receives and returns a PropertyConfiguration

        Raises:
            PropertyDefinitionAlreadyExistsError: duplicate declaration
            MemberNameNotFoundOnExpressionError: accessor reads no single member
        """
        self._ensure_configuring("with_property")

        configuration = DEFAULT_CONFIGURATION
        if configure is not None:
            configuration = configure(DEFAULT_CONFIGURATION)
            if not isinstance(configuration, PropertyConfiguration):
                raise TypeError(
                    f"configure must return a PropertyConfiguration, got {configuration!r}"
                )

        binding = PropertyBinding.create(
            self.owner_type,
            self.type_name,
            accessor,
            configuration=configuration,
            config=self.config,
            type_hints=self._type_hints,
        )
        self._bindings.add(binding)
        return self

    def ignoring_column(self: A, column_name: str) -> A:
        """Exclude a column from validation and comparison."""
        self._ensure_configuring("ignoring_column")
        self._bindings.ignore(column_name)
        return self

    def assert_equivalent(self) -> None:
        """
        Run the assertion; return normally on full equivalence.

        Raises:
            TableAsserterError: first problem found (subclass per kind)
        """
        outcome = self._run("assert_equivalent")
        if not outcome.success:
            error = self._mismatch_error(outcome)
            logger.warning(f"Assertion failed [{error.code}]: {error}")
            raise error

    def evaluate(self) -> AssertionOutcome:
        """
        Run the assertion, returning the first mismatch instead of raising it.

        Validation and conversion problems still raise.
        """
        return self._run("evaluate")

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def _ensure_configuring(self, operation: str) -> None:
        if self.state is not AssertionState.CONFIGURING:
            raise AsserterStateError(operation, self.state.value)

    def _run(self, operation: str) -> AssertionOutcome:
        self._ensure_configuring(operation)

        self.state = AssertionState.VALIDATING
        try:
            self._validate()
            self.state = AssertionState.COMPARING
            outcome = self._compare()
        except Exception as e:
            self.state = AssertionState.FAILED
            logger.warning(f"Assertion aborted for '{self.type_name}': {e}")
            raise

        if outcome.success:
            self.state = AssertionState.SUCCEEDED
            logger.info(
                f"Table ({self.table.row_count} row(s)) equivalent to '{self.type_name}' "
                f"with {len(self._bindings)} binding(s)"
            )
        else:
            self.state = AssertionState.FAILED
        return outcome

    # -------------------------------------------------------------------------
    # Subclass hooks
    # -------------------------------------------------------------------------

    def _validate(self) -> None:
        raise NotImplementedError

    def _compare(self) -> AssertionOutcome:
        raise NotImplementedError

    def _mismatch_error(self, outcome: AssertionOutcome) -> ValueMismatchError:
        raise NotImplementedError


class AsserterInitialization(Generic[A]):
    """
    What the entry functions return: only with_property is available.

    An assertion without any declared property cannot be run.
    """

    def __init__(self, asserter: A):
        self._asserter = asserter

    def with_property(self, accessor: Accessor, configure: Configure | None = None) -> A:
        return self._asserter.with_property(accessor, configure)

    def __repr__(self) -> str:
        return f"AsserterInitialization({type(self._asserter).__name__}, '{self._asserter.type_name}')"


def failure_outcome(
    index: int,
    binding: PropertyBinding,
    actual_value: str,
    expected_value: str,
    column_name: str,
) -> AssertionOutcome:
    """AssertionOutcome for the first mismatch."""
    return AssertionOutcome(
        success=False,
        index=index,
        member_name=binding.property_name,
        qualified_name=binding.qualified_name,
        actual_value=actual_value,
        expected_value=expected_value,
        column_name=column_name,
    )