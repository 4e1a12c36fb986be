"""
Core layer: comparison building blocks.

Roles:
- name normalization, cell conversion, property bindings
"""

from .convert import ValueConverter, format_value, values_match
from .names import names_match, normalize_name
from .properties import (
    BindingSet,
    PropertyBinding,
    PropertyConfiguration,
    member_name_of,
)

__all__ = [
    # names
    "normalize_name",
    "names_match",
    # convert
    "ValueConverter",
    "format_value",
    "values_match",
    # properties
    "BindingSet",
    "PropertyBinding",
    "PropertyConfiguration",
    "member_name_of",
]
