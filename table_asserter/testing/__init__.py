"""
Test-fixture helpers.

Loads expected tables from spreadsheets so a scenario's data can be kept
next to the test instead of inline.
"""

from .xlsx_table import cell_to_text, load_table_from_xlsx, read_table

__all__ = [
    "cell_to_text",
    "load_table_from_xlsx",
    "read_table",
]
