"""
Pytest fixtures for the table-asserter tests.

Shared table builders and config fixtures; model classes live in the
test modules that use them.
"""

from collections.abc import Callable
from pathlib import Path

import pytest
import yaml

from table_asserter import AsserterConfig, Table, load_config

# =============================================================================
# Table Fixtures
# =============================================================================


@pytest.fixture
def field_value_table() -> Callable[..., Table]:
    """
    Builder for single-object tables.

    Usage:
        table = field_value_table(("FirstName", "John"), ("LastName", "Doe"))
    """
    def build(*field_values: tuple[str, str]) -> Table:
        return Table.from_rows(("Field", "Value"), field_values)

    return build


@pytest.fixture
def person_table() -> Table:
    """FirstName/LastName table without rows."""
    return Table("FirstName", "LastName")


# =============================================================================
# Config Fixtures
# =============================================================================


@pytest.fixture
def default_config() -> AsserterConfig:
    """Packaged defaults."""
    return load_config()


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[dict], Path]:
    """Write a YAML config file and return its path."""
    def write(data: dict) -> Path:
        config_path = tmp_path / "table_asserter.yaml"
        with open(config_path, "w", encoding="utf-8") as f:
            yaml.dump(data, f, allow_unicode=True)
        return config_path

    return write
