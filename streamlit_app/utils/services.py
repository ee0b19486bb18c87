"""
Service construction for the Streamlit frontend (composition root).

Initialization order:
1. catalog.config is imported by app.py, loading .env
2. get_record_store() builds the connector and the process-wide RecordStore
   once (st.cache_resource), shared by every session and page
3. Each page calls activate_list_page() / activate_gallery_page(), which binds
   a fresh view-state sync to st.query_params, reuses the session's controller
   and unmounts the controllers of the other pages

Nothing here is a module-level singleton; Streamlit's resource cache owns the
store and st.session_state owns the per-session controllers.
"""

from typing import Dict, Type

import streamlit as st

from catalog.config import CatalogConfig
from catalog.connectors import RecipeApiConnector
from catalog.controllers import DetailController, GalleryPageController, ListPageController
from catalog.favorites import FavoritesClient
from catalog.store import RecordStore
from catalog.view_state import GalleryViewSync, ListViewSync
from utils.session import get_token

CONTROLLERS_KEY = "page_controllers"
LIST_PAGE = "list"
GALLERY_PAGE = "gallery"


@st.cache_resource
def get_record_store() -> RecordStore:
    """
    Build the shared RecordStore.

    Cached for the lifetime of the server process, so the collection is
    fetched once and shared by all sessions.
    """
    connector = RecipeApiConnector(
        base_url=CatalogConfig.get_api_url(),
        timeout=CatalogConfig.get_request_timeout(),
    )
    return RecordStore(connector, fetch_limit=CatalogConfig.get_fetch_limit())


def get_favorites_client() -> FavoritesClient:
    """Favorites client for the current session's token (may be logged out)."""
    return FavoritesClient(get_token())


def _controllers() -> Dict[str, object]:
    if CONTROLLERS_KEY not in st.session_state:
        st.session_state[CONTROLLERS_KEY] = {}
    return st.session_state[CONTROLLERS_KEY]


def _activate(name: str, controller_cls: Type, sync_cls: Type):
    controllers = _controllers()
    for other_name, other in controllers.items():
        if other_name != name and other.is_mounted:
            other.unmount()

    # Re-read the URL on every run so back/forward navigation is honored
    sync = sync_cls(st.query_params)
    controller = controllers.get(name)
    if controller is None:
        controller = controller_cls(get_record_store(), sync, page_size=CatalogConfig.get_page_size())
        controllers[name] = controller
    else:
        controller.sync = sync
    controller.mount()
    return controller


def activate_list_page() -> ListPageController:
    return _activate(LIST_PAGE, ListPageController, ListViewSync)


def activate_gallery_page() -> GalleryPageController:
    return _activate(GALLERY_PAGE, GalleryPageController, GalleryViewSync)


def deactivate_browsing_pages() -> None:
    """Unmount the list and gallery controllers (called by non-browsing pages)."""
    for controller in _controllers().values():
        if controller.is_mounted:
            controller.unmount()


def get_detail_controller() -> DetailController:
    return DetailController(get_record_store(), get_favorites_client())
