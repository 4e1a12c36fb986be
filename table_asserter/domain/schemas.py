"""
Data schemas for table equivalence assertions.

Rules:
- Table cells are text; every row is as long as the header
- Inputs are only read by the asserters, never mutated
"""

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

# =============================================================================
# Table
# =============================================================================


class Table:
    """
    Ordered header plus ordered rows of string cells.

    Usage:
        table = Table("FirstName", "LastName")
        table.add_row("John", "Doe")
    """

    def __init__(self, *header: str) -> None:
        self._header: tuple[str, ...] = tuple(str(name) for name in header)
        self._rows: list[tuple[str, ...]] = []

    @classmethod
    def from_rows(
        cls,
        header: Sequence[str],
        rows: Iterable[Sequence[Any]] = (),
    ) -> "Table":
        """Build a table from a header and row sequences."""
        table = cls(*header)
        for row in rows:
            table.add_row(*row)
        return table

    @property
    def header(self) -> tuple[str, ...]:
        return self._header

    @property
    def rows(self) -> tuple[tuple[str, ...], ...]:
        return tuple(self._rows)

    @property
    def row_count(self) -> int:
        return len(self._rows)

    def add_row(self, *cells: Any) -> None:
        """
        Append one row.

        Raises:
            ValueError: cell count differs from the header length
        """
        if len(cells) != len(self._header):
            raise ValueError(
                f"Row has {len(cells)} cell(s) but the header has "
                f"{len(self._header)} column(s): {list(self._header)}"
            )
        self._rows.append(tuple("" if cell is None else str(cell) for cell in cells))

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[tuple[str, ...]]:
        return iter(self._rows)

    def __repr__(self) -> str:
        return f"Table(header={list(self._header)!r}, rows={len(self._rows)})"


# =============================================================================
# Value kinds / assertion state
# =============================================================================

class ValueKind(str, Enum):
    """
    Closed set of convertible-value kinds.

    Conversion and comparison dispatch on this tag.
    """
    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    TEMPORAL = "temporal"      # date / datetime / time
    ENUM = "enum"
    SEQUENCE = "sequence"      # ordered, compared element by element
    CUSTOM = "custom"          # user supplied converter


class AssertionState(str, Enum):
    """Lifecycle of one asserter: declare bindings, then assert once."""
    CONFIGURING = "configuring"
    VALIDATING = "validating"
    COMPARING = "comparing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


# =============================================================================
# Results
# =============================================================================

@dataclass(frozen=True)
class ComparisonResult:
    """Result of comparing one cell to one property."""
    is_success: bool
    member_name: str
    actual_value: str = ""

    @classmethod
    def success(cls, member_name: str) -> "ComparisonResult":
        return cls(is_success=True, member_name=member_name)

    @classmethod
    def failure(cls, member_name: str, actual_value: str) -> "ComparisonResult":
        return cls(is_success=False, member_name=member_name, actual_value=actual_value)


@dataclass(frozen=True)
class AssertionOutcome:
    """
    Outcome of one assertion call.

    On failure it holds the full location of the first mismatch:
    row (or field) index, property, column, actual and expected values.
    """
    success: bool
    index: int | None = None
    member_name: str | None = None
    qualified_name: str | None = None
    actual_value: str | None = None
    expected_value: str | None = None
    column_name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """For logs/JSON serialization."""
        return {
            "success": self.success,
            "index": self.index,
            "member_name": self.member_name,
            "qualified_name": self.qualified_name,
            "actual_value": self.actual_value,
            "expected_value": self.expected_value,
            "column_name": self.column_name,
        }
