"""
Query state for the browsing pages, kept in sync with the URL.

Each browsing page owns a small, immutable state object and a sync object
bound to the page's query parameters (st.query_params in the app, a plain dict
in tests). The state is the single source of truth:

- On construction the state is parsed from the query parameters. Missing or
  invalid values fall back to the defaults without raising.
- After every mutation the query parameters are rewritten with only the
  non-default fields, so URLs stay minimal and canonical.
- Any change to the candidate set (search text, search mode, sort, selected
  tags) resets the page to 0.
- Page changes are announced to listeners as PageChanged events; the UI uses
  this to scroll back to the top.

URL parameters:
- List page: search, mode (title|ingredient), sort (id|title), order (asc|desc), page
- Gallery page: ingredients (comma-separated), page

`page` holds the 0-based page index; the pagination widget shows it 1-based.
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Dict, Iterable, List, Mapping, MutableMapping, Optional, Tuple, Type, TypeVar, Union

from catalog.comparison import SortField, SortOrder
from catalog.search import SearchMode

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

PARAM_PAGE = "page"
PARAM_SEARCH = "search"
PARAM_MODE = "mode"
PARAM_SORT = "sort"
PARAM_ORDER = "order"
PARAM_INGREDIENTS = "ingredients"


def _read(params: Mapping[str, str], key: str) -> Optional[str]:
    value = params.get(key)
    if isinstance(value, list):
        # Repeated keys: the last value wins, as in st.query_params
        value = value[-1] if value else None
    return value if isinstance(value, str) else None


def parse_page(value: Optional[str]) -> int:
    """
    Parse a page parameter.

    Returns:
        The page index if `value` is a whole number >= 0, otherwise 0.
    """
    if value is None:
        return 0
    try:
        page = int(value.strip())
    except ValueError:
        logger.debug(f"Ignoring invalid page parameter {value!r}")
        return 0
    return page if page >= 0 else 0


def parse_enum(enum_cls: Type[E], value: Optional[str], default: E) -> E:
    """Parse an enum parameter, falling back to `default` for unknown values."""
    if value is None:
        return default
    try:
        return enum_cls(value)
    except ValueError:
        logger.debug(f"Ignoring invalid {enum_cls.__name__} parameter {value!r}")
        return default


def parse_tags(value: Optional[str]) -> Tuple[str, ...]:
    """
    Parse a comma-separated tag list.

    Whitespace around tags is stripped, empty entries are dropped and
    duplicates (compared case-insensitively) collapse to their first
    occurrence.

    Examples:
        >>> parse_tags("chicken,garlic,,chicken")
        ('chicken', 'garlic')
        >>> parse_tags(None)
        ()
    """
    if not value:
        return ()
    return normalize_tags(value.split(","))


def same_tag(a: str, b: str) -> bool:
    """Tags match case-insensitively, like the ingredient filter itself."""
    return a.casefold() == b.casefold()


def normalize_tags(tags: Iterable[str]) -> Tuple[str, ...]:
    seen: List[str] = []
    for tag in tags:
        cleaned = tag.strip()
        if cleaned and not any(same_tag(cleaned, kept) for kept in seen):
            seen.append(cleaned)
    return tuple(seen)


@dataclass(frozen=True)
class PageChanged:
    """Emitted whenever a page change is requested."""
    page: int


@dataclass(frozen=True)
class ListViewState:
    """Query state of the list page (free-text search with sorting)."""
    page: int = 0
    search: str = ""
    search_mode: SearchMode = SearchMode.TITLE
    sort_field: SortField = SortField.ID
    sort_order: SortOrder = SortOrder.ASC

    @classmethod
    def from_query_params(cls, params: Mapping[str, str]) -> "ListViewState":
        return cls(
            page=parse_page(_read(params, PARAM_PAGE)),
            search=_read(params, PARAM_SEARCH) or "",
            search_mode=parse_enum(SearchMode, _read(params, PARAM_MODE), SearchMode.TITLE),
            sort_field=parse_enum(SortField, _read(params, PARAM_SORT), SortField.ID),
            sort_order=parse_enum(SortOrder, _read(params, PARAM_ORDER), SortOrder.ASC),
        )

    def to_query_params(self) -> Dict[str, str]:
        """Serialize the non-default fields."""
        params: Dict[str, str] = {}
        if self.search:
            params[PARAM_SEARCH] = self.search
        if self.page > 0:
            params[PARAM_PAGE] = str(self.page)
        if self.search_mode is not SearchMode.TITLE:
            params[PARAM_MODE] = self.search_mode.value
        if self.sort_field is not SortField.ID:
            params[PARAM_SORT] = self.sort_field.value
        if self.sort_order is not SortOrder.ASC:
            params[PARAM_ORDER] = self.sort_order.value
        return params


@dataclass(frozen=True)
class GalleryViewState:
    """Query state of the gallery page (multi-tag ingredient filter)."""
    page: int = 0
    selected_tags: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_query_params(cls, params: Mapping[str, str]) -> "GalleryViewState":
        return cls(
            page=parse_page(_read(params, PARAM_PAGE)),
            selected_tags=parse_tags(_read(params, PARAM_INGREDIENTS)),
        )

    def to_query_params(self) -> Dict[str, str]:
        params: Dict[str, str] = {}
        if self.selected_tags:
            params[PARAM_INGREDIENTS] = ",".join(self.selected_tags)
        if self.page > 0:
            params[PARAM_PAGE] = str(self.page)
        return params

    def is_selected(self, tag: str) -> bool:
        return any(same_tag(tag, selected) for selected in self.selected_tags)


PageListener = Callable[[PageChanged], None]
ViewState = Union[ListViewState, GalleryViewState]


class _QueryParamSync:
    """
    Shared plumbing: owns the current state and mirrors it into the params.

    Only the keys a page flavor owns are written or removed; other query
    parameters in the mapping are left alone.
    """
    owned_keys: Tuple[str, ...] = ()

    def __init__(self, params: MutableMapping[str, str], state: ViewState) -> None:
        self._params = params
        self._state = state
        self._listeners: List[PageListener] = []
        self._write()

    def add_page_listener(self, listener: PageListener) -> None:
        """Register a callback invoked with a PageChanged event on every set_page."""
        self._listeners.append(listener)

    def _write(self) -> None:
        serialized = self._state.to_query_params()
        for key in self.owned_keys:
            if key in serialized:
                if _read(self._params, key) != serialized[key]:
                    self._params[key] = serialized[key]
            elif key in self._params:
                del self._params[key]

    def _update(self, **changes) -> None:
        self._state = replace(self._state, **changes)
        self._write()

    def set_page(self, page: int) -> PageChanged:
        """
        Move to another page.

        Negative pages are clamped to 0. The caller clamps the upper bound
        against the current result count.

        Returns:
            The PageChanged event that was sent to the listeners.
        """
        page = max(int(page), 0)
        self._update(page=page)
        event = PageChanged(page=page)
        for listener in self._listeners:
            listener(event)
        return event


class ListViewSync(_QueryParamSync):
    """Query state of the list page, mirrored into the URL."""
    owned_keys = (PARAM_SEARCH, PARAM_PAGE, PARAM_MODE, PARAM_SORT, PARAM_ORDER)

    def __init__(self, params: MutableMapping[str, str]) -> None:
        super().__init__(params, ListViewState.from_query_params(params))

    @property
    def state(self) -> ListViewState:
        return self._state

    def set_search(self, text: str) -> None:
        self._update(search=text or "", page=0)

    def set_search_mode(self, mode: Union[SearchMode, str]) -> None:
        self._update(search_mode=SearchMode(mode), page=0)

    def set_sort_field(self, sort_field: Union[SortField, str]) -> None:
        self._update(sort_field=SortField(sort_field), page=0)

    def set_sort_order(self, order: Union[SortOrder, str]) -> None:
        self._update(sort_order=SortOrder(order), page=0)


class GalleryViewSync(_QueryParamSync):
    """Query state of the gallery page, mirrored into the URL."""
    owned_keys = (PARAM_INGREDIENTS, PARAM_PAGE)

    def __init__(self, params: MutableMapping[str, str]) -> None:
        super().__init__(params, GalleryViewState.from_query_params(params))

    @property
    def state(self) -> GalleryViewState:
        return self._state

    def toggle_tag(self, tag: str) -> None:
        """
        Add `tag` if it is not selected, remove it if it is.

        Tags compare case-insensitively, so "chicken" removes a selected
        "Chicken". Selection order is kept for display and for the URL.
        """
        tag = tag.strip()
        if not tag:
            return
        current = self._state.selected_tags
        if self._state.is_selected(tag):
            selected = tuple(t for t in current if not same_tag(t, tag))
        else:
            selected = current + (tag,)
        self._update(selected_tags=selected, page=0)

    def clear_tags(self) -> None:
        self._update(selected_tags=(), page=0)
