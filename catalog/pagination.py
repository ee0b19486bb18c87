"""
Client-side pagination helpers.

Page indices are 0-based everywhere in the code and in the URL; only the
pagination widget shows 1-based page numbers to the user.
"""

import math
from typing import List, Optional, Sequence, TypeVar

from catalog.config import DEFAULT_PAGE_SIZE

T = TypeVar("T")


def get_page(items: Sequence[T], page_index: int, page_size: int = DEFAULT_PAGE_SIZE) -> List[T]:
    """
    Return the window [page_index * page_size, (page_index + 1) * page_size).

    Out-of-range or negative page indices and non-positive page sizes yield
    an empty list rather than an error. Callers clamp the index with
    clamp_page() when they need a valid page.

    Examples:
        >>> get_page([1, 2, 3, 4, 5], 1, 2)
        [3, 4]
        >>> get_page([1, 2, 3], 5, 2)
        []
    """
    if page_index < 0 or page_size <= 0:
        return []
    start = page_index * page_size
    return list(items[start:start + page_size])


def total_pages(total: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    """Number of pages needed for `total` items (0 when there are none)."""
    if total <= 0 or page_size <= 0:
        return 0
    return math.ceil(total / page_size)


def clamp_page(page_index: int, total: int, page_size: int = DEFAULT_PAGE_SIZE) -> int:
    """
    Clamp a page index into [0, total_pages - 1].

    Returns 0 when there are no items.
    """
    pages = total_pages(total, page_size)
    if pages == 0:
        return 0
    return min(max(page_index, 0), pages - 1)


def parse_page_input(text: str, pages: int) -> Optional[int]:
    """
    Parse a 1-based "go to page" input.

    Args:
        text: What the user typed
        pages: Total number of pages

    Returns:
        The 0-based page index, or None if the input is not a whole number
        between 1 and `pages`.

    Examples:
        >>> parse_page_input("3", 5)
        2
        >>> parse_page_input("0", 5) is None
        True
    """
    try:
        number = int(str(text).strip())
    except ValueError:
        return None
    if 1 <= number <= pages:
        return number - 1
    return None


def page_label(page_index: int, pages: int) -> str:
    """Human-readable position, e.g. "Page 2 / 7"."""
    return f"Page {page_index + 1} / {max(pages, 1)}"
