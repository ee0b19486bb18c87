"""
Tests for the browsing page controllers.

Controllers combine the RecordStore, the query functions and a view-state
sync. A plain dict stands in for st.query_params and a Mock for the source.
"""

from typing import Union, get_type_hints
from unittest.mock import Mock

import pytest

from catalog.connectors.base import BaseRecipeSource
from catalog.controllers import (
    COMMON_INGREDIENTS,
    DetailController,
    GalleryPageController,
    ListPageController,
    LoadStatus,
    _BrowsingController,
)
from catalog.exceptions import FavoritesAuthError, FavoritesError, RecordFetchError
from catalog.favorites import FavoritesClient
from catalog.models import Recipe
from catalog.store import RecordStore
from catalog.view_state import GalleryViewSync, ListViewSync, PageChanged


def make_recipe(record_id, display_id, title, ingredients=None, extracted=None):
    return Recipe.from_api({
        "_id": record_id,
        "id": display_id,
        "title": title,
        "ingredients": ingredients or [],
        "extractedIngredients": extracted or [],
    })


@pytest.fixture
def collection():
    return [
        make_recipe("r3", 3, "Garlic Chicken", extracted=["garlic", "chicken"]),
        make_recipe("r1", 1, "Apple Pie", ingredients=["2 apples"], extracted=["apple"]),
        make_recipe("r2", 2, "Chicken Rice", ingredients=["chicken breast", "rice"], extracted=["chicken", "rice"]),
        make_recipe("r5", 5, "Pineapple Chicken", extracted=["pineapple", "chicken"]),
        make_recipe("r4", 4, "Egg Fried Rice", extracted=["egg", "rice"]),
    ]


@pytest.fixture
def source(collection):
    source = Mock(spec=BaseRecipeSource)
    source.name = "mock"
    source.fetch_recipes.return_value = collection
    return source


@pytest.fixture
def store(source):
    return RecordStore(source)


def list_controller(store, params=None, page_size=2):
    controller = ListPageController(store, ListViewSync(params if params is not None else {}), page_size=page_size)
    controller.mount()
    return controller


def gallery_controller(store, params=None, page_size=2):
    controller = GalleryPageController(store, GalleryViewSync(params if params is not None else {}), page_size=page_size)
    controller.mount()
    return controller


class TestLoad:
    """Test loading and the mount generation."""

    def test_base_controller_is_abstract(self, store):
        with pytest.raises(TypeError):
            _BrowsingController(store, ListViewSync({}))

    def test_sync_is_typed_as_a_view_sync(self):
        hints = get_type_hints(_BrowsingController.__init__)
        assert hints["sync"] == Union[ListViewSync, GalleryViewSync]

    def test_load_ready(self, store):
        controller = list_controller(store)

        state = controller.load()

        assert state.status is LoadStatus.READY
        assert state.record_count == 5
        assert state.is_empty is False
        assert controller.load_state == state

    def test_empty_collection_is_not_a_failure(self, source):
        source.fetch_recipes.return_value = []
        controller = list_controller(RecordStore(source))

        state = controller.load()

        assert state.status is LoadStatus.READY
        assert state.is_empty is True

    def test_failed_load(self, source):
        source.fetch_recipes.side_effect = RecordFetchError("backend down", operation="fetch_all")
        controller = list_controller(RecordStore(source))

        state = controller.load()

        assert state.status is LoadStatus.FAILED
        assert state.error_message == "backend down"
        assert state.is_empty is False
        assert controller.view().is_empty

    def test_load_before_mount_is_ignored(self, store, source):
        controller = ListPageController(store, ListViewSync({}))

        assert controller.load() is None
        source.fetch_recipes.assert_not_called()

    def test_unmount_during_fetch_discards_result(self, store, source, collection):
        """Test that a fetch finishing after unmount is not applied to the page."""
        controller = list_controller(store)

        def fetch_then_leave(limit):
            controller.unmount()
            return collection

        source.fetch_recipes.side_effect = fetch_then_leave

        assert controller.load() is None
        assert controller.load_state.status is LoadStatus.LOADING
        # The shared store still keeps the collection for other pages
        assert len(store) == 5

    def test_remount_during_fetch_discards_result(self, store, source, collection):
        controller = list_controller(store)

        def fetch_then_remount(limit):
            controller.unmount()
            controller.mount()
            return collection

        source.fetch_recipes.side_effect = fetch_then_remount

        assert controller.load() is None

    def test_pages_share_one_fetch(self, store, source):
        list_controller(store).load()
        gallery_controller(store).load()

        source.fetch_recipes.assert_called_once()


class TestListPageController:
    """Test search -> sort -> paginate."""

    def test_default_view_sorted_by_id(self, store):
        controller = list_controller(store)
        controller.load()

        view = controller.view()

        assert [r.display_id for r in view.items] == [1, 2]
        assert view.total == 5
        assert view.pages == 3
        assert view.page == 0

    def test_search_and_sort(self, store):
        controller = list_controller(store, {"search": "chicken", "sort": "title", "order": "desc"})
        controller.load()

        view = controller.view()

        assert view.total == 3
        assert [r.title for r in view.items] == ["Pineapple Chicken", "Garlic Chicken"]

    def test_ingredient_search(self, store):
        controller = list_controller(store, {"search": "rice", "mode": "ingredient"}, page_size=10)
        controller.load()

        assert [r.record_id for r in controller.view().items] == ["r2", "r4"]

    def test_page_past_the_end_is_clamped(self, store):
        params = {"page": "9"}
        controller = list_controller(store, params)
        controller.load()

        view = controller.view()

        assert view.page == 2
        assert [r.display_id for r in view.items] == [5]

    def test_new_search_starts_on_first_page(self, store):
        params = {"page": "2"}
        controller = list_controller(store, params)
        controller.load()

        controller.sync.set_search("chicken")

        assert controller.view().page == 0
        assert params == {"search": "chicken"}

    def test_go_to_page(self, store):
        params = {}
        controller = list_controller(store, params)
        controller.load()
        events = []
        controller.sync.add_page_listener(events.append)

        event = controller.go_to_page(1)

        assert event == PageChanged(page=1)
        assert events == [PageChanged(page=1)]
        assert params == {"page": "1"}
        assert [r.display_id for r in controller.view().items] == [3, 4]

    def test_go_to_page_is_clamped(self, store):
        controller = list_controller(store)
        controller.load()

        assert controller.go_to_page(40).page == 2
        assert controller.go_to_page(-1).page == 0

    def test_view_before_load_is_empty(self, store):
        view = list_controller(store).view()
        assert view.items == []
        assert view.is_empty


class TestGalleryPageController:
    """Test tag filter -> paginate."""

    def test_no_tags_shows_backend_order(self, store):
        controller = gallery_controller(store, page_size=10)
        controller.load()

        assert [r.record_id for r in controller.view().items] == ["r3", "r1", "r2", "r5", "r4"]

    def test_tags_combine_with_and(self, store):
        controller = gallery_controller(store, {"ingredients": "chicken,rice"}, page_size=10)
        controller.load()

        assert [r.record_id for r in controller.view().items] == ["r2"]

    def test_toggle_resets_page_and_filters(self, store):
        params = {"page": "1"}
        controller = gallery_controller(store, params)
        controller.load()

        controller.sync.toggle_tag("chicken")
        view = controller.view()

        assert view.page == 0
        assert view.total == 3
        assert params == {"ingredients": "chicken"}

    def test_toggle_twice_returns_to_unfiltered(self, store):
        controller = gallery_controller(store, page_size=10)
        controller.load()

        controller.sync.toggle_tag("chicken")
        controller.sync.toggle_tag("chicken")

        assert controller.view().total == 5

    def test_tag_palette_includes_selected_extras(self, store):
        controller = gallery_controller(store, {"ingredients": "chicken,saffron"})

        palette = controller.tag_palette()

        assert palette[:len(COMMON_INGREDIENTS)] == COMMON_INGREDIENTS
        assert palette[len(COMMON_INGREDIENTS):] == ["saffron"]

    def test_tag_palette_skips_case_variants_of_common_tags(self, store):
        controller = gallery_controller(store, {"ingredients": "Chicken,GARLIC"})

        assert controller.tag_palette() == COMMON_INGREDIENTS


class TestDetailController:
    """Test single recipe loading and favorites."""

    def test_uses_cache_after_collection_load(self, store, source, collection):
        store.fetch_all()
        controller = DetailController(store)

        detail = controller.load("r2")

        assert detail.recipe is collection[2]
        assert detail.error_message is None
        source.fetch_recipe.assert_not_called()

    def test_fetches_uncached_recipe(self, store, source):
        recipe = make_recipe("r9", 9, "Lentil Soup")
        source.fetch_recipe.return_value = recipe

        detail = DetailController(store).load("r9")

        assert detail.recipe is recipe
        source.fetch_recipe.assert_called_once_with("r9")

    def test_failed_fetch(self, store, source):
        source.fetch_recipe.side_effect = RecordFetchError("Recipe not found", operation="fetch_by_id", record_id="zz")

        detail = DetailController(store).load("zz")

        assert detail.recipe is None
        assert detail.error_message == "Recipe not found"

    def test_favorite_status(self, store):
        store.fetch_all()
        favorites = Mock(spec=FavoritesClient)
        favorites.is_authenticated = True
        favorites.is_favorited.return_value = True

        detail = DetailController(store, favorites).load("r1")

        assert detail.is_favorited is True
        favorites.is_favorited.assert_called_once_with("r1")

    def test_failed_favorite_check_still_shows_recipe(self, store):
        store.fetch_all()
        favorites = Mock(spec=FavoritesClient)
        favorites.is_authenticated = True
        favorites.is_favorited.side_effect = FavoritesError("timeout")

        detail = DetailController(store, favorites).load("r1")

        assert detail.recipe is not None
        assert detail.is_favorited is False

    def test_logged_out_user_skips_favorite_check(self, store):
        store.fetch_all()
        favorites = Mock(spec=FavoritesClient)
        favorites.is_authenticated = False

        DetailController(store, favorites).load("r1")

        favorites.is_favorited.assert_not_called()

    def test_toggle_favorite(self, store):
        favorites = Mock(spec=FavoritesClient)
        favorites.toggle.return_value = True

        assert DetailController(store, favorites).toggle_favorite("r1", False) is True
        favorites.toggle.assert_called_once_with("r1", False)

    def test_toggle_without_client(self, store):
        with pytest.raises(FavoritesAuthError):
            DetailController(store).toggle_favorite("r1", False)
