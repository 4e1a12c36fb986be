"""
Human-friendly name matching.

"First Name", "first name", "firstname", "FIRST NAME" and the attribute
first_name all denote the same column.
"""

import re

# whitespace, punctuation and "_" separators
_SEPARATORS = re.compile(r"[\W_]+")


def normalize_name(text: str) -> str:
    """Strip separators and lower-case the remainder."""
    return _SEPARATORS.sub("", text).lower()


def names_match(left: str, right: str) -> bool:
    """Exact match first, then normalized match."""
    if left == right:
        return True
    return normalize_name(left) == normalize_name(right)
