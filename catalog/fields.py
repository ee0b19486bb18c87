"""
Defensive field access for recipe payloads.

Recipe documents come from a user-editable backend, so fields can be missing,
null, or the wrong shape (for example an ingredient list containing numbers or
nested objects). These helpers always return a well-formed value and never
raise, so one malformed record cannot break a search over the whole collection.
"""

from typing import Any, Iterable, List


def as_text(value: Any) -> str:
    """
    Coerce a scalar field to a string.

    None and non-string values become "" (a present-but-empty field).

    Examples:
        >>> as_text("Apple Pie")
        'Apple Pie'
        >>> as_text(None)
        ''
    """
    if isinstance(value, str):
        return value
    return ""


def as_int(value: Any, default: int = 0) -> int:
    """
    Coerce a numeric field to an int.

    Accepts ints and numeric strings. Booleans, floats with a fractional part
    and anything unparseable return `default`.
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return default
    return default


def string_entries(value: Any) -> List[str]:
    """
    Return only the well-formed entries of a list field.

    Non-list values yield []. Entries that are not strings, or are empty or
    whitespace-only, are dropped. Order is preserved.

    Examples:
        >>> string_entries(["garlic", None, 3, "", "onion"])
        ['garlic', 'onion']
        >>> string_entries("not a list")
        []
    """
    if not isinstance(value, (list, tuple)):
        return []
    return [entry for entry in value if isinstance(entry, str) and entry.strip()]


def any_contains(entries: Iterable[str], needle_lower: str) -> bool:
    """
    Check whether any entry contains `needle_lower` case-insensitively.

    Args:
        entries: Well-formed strings (see string_entries)
        needle_lower: Already lower-cased substring to look for
    """
    return any(needle_lower in entry.lower() for entry in entries)
