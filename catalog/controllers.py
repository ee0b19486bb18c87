"""
Page controllers for the browsing pages.

Controllers are the composition layer between the shared RecordStore, the
pure query functions and a page's view-state sync:

    page(sort(search_or_filter(snapshot)))

They hold no recipe data of their own. Each controller has a mount
generation: load() remembers the generation it started in and discards its
outcome if the page was unmounted (or mounted again) while the fetch was
running, so a late response is never applied to a page that is gone.

- ListPageController: free-text search by title or ingredient, sortable
- GalleryPageController: multi-tag ingredient filter (AND), backend order
- DetailController: single recipe by id plus its favorite status
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence, Union

from catalog.comparison import sort_recipes
from catalog.config import DEFAULT_PAGE_SIZE
from catalog.exceptions import FavoritesAuthError, FavoritesError, RecordFetchError
from catalog.favorites import FavoritesClient
from catalog.models import Recipe
from catalog.pagination import clamp_page, get_page, total_pages
from catalog.search import filter_by_tags, search_recipes
from catalog.store import RecordStore
from catalog.view_state import GalleryViewSync, ListViewSync, PageChanged

logger = logging.getLogger(__name__)

# Quick-filter palette shown on the gallery page
COMMON_INGREDIENTS = [
    "chicken", "beef", "pork", "fish", "shrimp",
    "rice", "noodles", "pasta", "bread",
    "tomato", "onion", "garlic", "potato", "carrot",
    "cheese", "egg", "milk", "butter",
]


class LoadStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class LoadState:
    """
    Outcome of loading the collection, as seen by a page.

    Separates "the backend has no recipes" (READY with record_count 0) from
    "the fetch failed" (FAILED with an error message).
    """
    status: LoadStatus
    record_count: int = 0
    error_message: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.status is LoadStatus.READY and self.record_count == 0


@dataclass(frozen=True)
class PageView:
    """
    One rendered page of results.

    Attributes:
        items: Recipes on the current page
        total: Number of recipes matching the current query
        page: Page index actually shown (clamped into range)
        pages: Total number of pages
    """
    items: List[Recipe] = field(default_factory=list)
    total: int = 0
    page: int = 0
    pages: int = 0

    @property
    def is_empty(self) -> bool:
        return self.total == 0


class _BrowsingController(ABC):
    """Load/mount handling and pagination shared by list and gallery pages."""

    def __init__(
        self,
        store: RecordStore,
        sync: Union[ListViewSync, GalleryViewSync],
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self.store = store
        self.sync = sync
        self.page_size = page_size
        self._generation = 0
        self._mounted = False
        self._load_state = LoadState(status=LoadStatus.LOADING)

    @property
    def is_mounted(self) -> bool:
        return self._mounted

    @property
    def load_state(self) -> LoadState:
        return self._load_state

    def mount(self) -> int:
        """Mark the page as mounted and start a new generation."""
        self._generation += 1
        self._mounted = True
        return self._generation

    def unmount(self) -> None:
        """Mark the page as gone. In-flight loads will be discarded."""
        self._generation += 1
        self._mounted = False

    def _is_current(self, generation: int) -> bool:
        return self._mounted and self._generation == generation

    def load(self) -> Optional[LoadState]:
        """
        Make sure the collection is loaded.

        Returns:
            The new LoadState, or None if the page was unmounted before the
            fetch finished (the outcome is discarded).
        """
        generation = self._generation
        if not self._mounted:
            return None

        try:
            records = self.store.fetch_all()
            state = LoadState(status=LoadStatus.READY, record_count=len(records))
        except RecordFetchError as e:
            state = LoadState(status=LoadStatus.FAILED, error_message=str(e))

        if not self._is_current(generation):
            logger.debug(f"Discarding load result for unmounted {type(self).__name__}")
            return None
        self._load_state = state
        return state

    @abstractmethod
    def matching_recipes(self) -> Sequence[Recipe]:
        """Recipes matching the current view state, in display order."""

    def view(self) -> PageView:
        """Derive the current page from the store snapshot and the view state."""
        matched = self.matching_recipes()
        total = len(matched)
        page = clamp_page(self.sync.state.page, total, self.page_size)
        return PageView(
            items=get_page(matched, page, self.page_size),
            total=total,
            page=page,
            pages=total_pages(total, self.page_size),
        )

    def go_to_page(self, page: int) -> PageChanged:
        """
        Request another page, clamped to the pages of the current result.

        Returns:
            The PageChanged event emitted by the view-state sync.
        """
        total = len(self.matching_recipes())
        return self.sync.set_page(clamp_page(page, total, self.page_size))


class ListPageController(_BrowsingController):
    """Free-text search page: search -> sort -> paginate."""

    def __init__(self, store: RecordStore, sync: ListViewSync, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        super().__init__(store, sync, page_size)

    def matching_recipes(self) -> List[Recipe]:
        state = self.sync.state
        found = search_recipes(self.store.records, state.search, state.search_mode)
        return sort_recipes(found, state.sort_field, state.sort_order)


class GalleryPageController(_BrowsingController):
    """Ingredient gallery page: tag filter (AND) -> paginate."""

    def __init__(self, store: RecordStore, sync: GalleryViewSync, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        super().__init__(store, sync, page_size)

    def matching_recipes(self) -> Sequence[Recipe]:
        return filter_by_tags(self.store.records, self.sync.state.selected_tags)

    def tag_palette(self) -> List[str]:
        """
        Tags to offer as quick filters.

        The common ingredients, followed by any selected tag that is not
        part of them (for example one that arrived through a shared URL).
        """
        common = {tag.casefold() for tag in COMMON_INGREDIENTS}
        extra = [tag for tag in self.sync.state.selected_tags if tag.casefold() not in common]
        return COMMON_INGREDIENTS + extra


@dataclass(frozen=True)
class RecipeDetail:
    recipe: Optional[Recipe] = None
    error_message: Optional[str] = None
    is_favorited: bool = False


class DetailController:
    """Loads one recipe through the store's identity cache."""

    def __init__(self, store: RecordStore, favorites: Optional[FavoritesClient] = None) -> None:
        self.store = store
        self.favorites = favorites

    def load(self, record_id: str) -> RecipeDetail:
        """
        Load a recipe and, for logged-in users, its favorite status.

        A failed favorite check is logged and shown as "not favorited"; it
        never hides the recipe.
        """
        try:
            recipe = self.store.fetch_by_id(record_id)
        except RecordFetchError as e:
            return RecipeDetail(error_message=str(e))

        is_favorited = False
        if self.favorites is not None and self.favorites.is_authenticated:
            try:
                is_favorited = self.favorites.is_favorited(record_id)
            except FavoritesError as e:
                logger.warning(f"Could not check favorite status of {record_id}: {e}")
        return RecipeDetail(recipe=recipe, is_favorited=is_favorited)

    def toggle_favorite(self, record_id: str, currently_favorited: bool) -> bool:
        """
        Flip the favorite status of a recipe.

        Raises:
            FavoritesAuthError: If no favorites client is configured or the
                user is not logged in.
            FavoritesError: If the backend call fails.
        """
        if self.favorites is None:
            raise FavoritesAuthError("Please log in to save favorites")
        return self.favorites.toggle(record_id, currently_favorited)
