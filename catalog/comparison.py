"""
Sorting utilities for recipes.

Supported sort fields:
- "id": numeric by display_id
- "title": case-insensitive, accent-insensitive, numeric-aware title order
  ("Item 9" before "Item 10")

Sorting is stable in both directions (recipes that compare equal keep their
input order) and never mutates the input.
"""

import re
import unicodedata
from enum import Enum
from functools import cmp_to_key
from typing import Iterable, List, Tuple, Union

from catalog.models import Recipe

_DIGITS = re.compile(r"(\d+)")


class SortField(str, Enum):
    ID = "id"
    TITLE = "title"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


def _fold(text: str) -> str:
    # Strip accents so "é" collates with "e", then casefold
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()


def natural_key(text: str) -> Tuple[Union[str, int], ...]:
    """
    Build a collation key for human-friendly string ordering.

    Digit runs compare as numbers and everything else compares case- and
    accent-insensitively. re.split with a capturing group alternates text and
    digit chunks, so keys of different strings never compare str against int.

    Examples:
        >>> natural_key("Item 10") > natural_key("item 9")
        True
        >>> natural_key("Apple Pie") == natural_key("apple pie")
        True
    """
    chunks = _DIGITS.split(text or "")
    return tuple(int(chunk) if i % 2 else _fold(chunk) for i, chunk in enumerate(chunks))


def compare_recipes(a: Recipe, b: Recipe, field: Union[SortField, str] = SortField.ID) -> int:
    """
    Compare two recipes by the given field.

    Returns:
        Negative if a sorts first, positive if b sorts first, 0 if they tie.
        For "id" this is plain display_id subtraction.
    """
    if SortField(field) is SortField.ID:
        return a.display_id - b.display_id
    key_a, key_b = natural_key(a.title), natural_key(b.title)
    return (key_a > key_b) - (key_a < key_b)


def sort_recipes(
    recipes: Iterable[Recipe],
    field: Union[SortField, str] = SortField.ID,
    order: Union[SortOrder, str] = SortOrder.ASC,
) -> List[Recipe]:
    """
    Sort recipes by display_id or title.

    Args:
        recipes: Recipes to sort (not mutated)
        field: SortField.ID or SortField.TITLE
        order: SortOrder.ASC or SortOrder.DESC; DESC flips the comparison

    Returns:
        New sorted list. Ties keep their input order for both orders.

    Examples:
        >>> recipes = [Recipe(_id="b", id=2), Recipe(_id="a", id=1)]
        >>> [r.display_id for r in sort_recipes(recipes, "id", "asc")]
        [1, 2]
    """
    sort_field = SortField(field)
    sign = -1 if SortOrder(order) is SortOrder.DESC else 1

    def signed(a: Recipe, b: Recipe) -> int:
        return sign * compare_recipes(a, b, sort_field)

    return sorted(recipes, key=cmp_to_key(signed))
