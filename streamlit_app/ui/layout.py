"""
Layout primitives for the browsing pages.

Provides the page header, recipe cards in a grid, the pagination bar and the
scroll-to-top hook used after page changes.
"""

from html import escape
from typing import Callable, List, Optional

import streamlit as st
import streamlit.components.v1 as components

from catalog.controllers import PageView
from catalog.images import PLACEHOLDER_IMAGE, get_image_url
from catalog.models import Recipe
from catalog.pagination import page_label, parse_page_input

DETAIL_PAGE = "pages/03_🍽_Recipe_Detail.py"
SELECTED_RECIPE_KEY = "selected_recipe_id"
SCROLL_TO_TOP_KEY = "scroll_to_top"


def page_header(title: str, subtitle: Optional[str] = None) -> None:
    """
    Render a consistent page header with title and optional subtitle.

    Args:
        title: Main page title
        subtitle: Optional subtitle/description text
    """
    st.markdown(f"# {title}")
    if subtitle:
        st.caption(subtitle)


def recipe_image(recipe: Recipe) -> None:
    """Render the recipe image, falling back to the placeholder if it fails to load."""
    url = get_image_url(recipe.image_ref)
    st.markdown(
        f'<img src="{escape(url, quote=True)}" alt="{escape(recipe.display_title, quote=True)}" '
        f'width="100%" onerror="this.onerror=null;this.src=\'{PLACEHOLDER_IMAGE}\';">',
        unsafe_allow_html=True,
    )


def ingredient_tags(recipe: Recipe, limit: int, show_remaining: bool = True) -> None:
    """
    Render the first `limit` key ingredients as pills.

    Args:
        recipe: Recipe to preview
        limit: Number of tags to show
        show_remaining: Add a "+N" pill for the tags that were cut off
    """
    shown, remaining = recipe.preview_tags(limit)
    if not shown:
        st.markdown('<span class="rcb-tag rcb-tag-muted">No ingredients</span>', unsafe_allow_html=True)
        return
    pills = "".join(f'<span class="rcb-tag">{escape(tag)}</span>' for tag in shown)
    if show_remaining and remaining > 0:
        pills += f'<span class="rcb-tag">+{remaining}</span>'
    st.markdown(pills, unsafe_allow_html=True)


def open_recipe(record_id: str) -> None:
    """Navigate to the detail page for a recipe."""
    st.session_state[SELECTED_RECIPE_KEY] = record_id
    st.switch_page(DETAIL_PAGE)


def recipe_card(recipe: Recipe, preview_limit: int, show_id: bool, key_prefix: str) -> None:
    """
    Render one recipe card: image, title, optional #id and key ingredients.

    Args:
        recipe: Recipe to render
        preview_limit: Number of key ingredients to show
        show_id: Show the display_id under the title
        key_prefix: Unique prefix for widget keys on this page
    """
    with st.container(border=True):
        recipe_image(recipe)
        st.markdown(f'<div class="rcb-card-title">{escape(recipe.display_title)}</div>', unsafe_allow_html=True)
        if show_id:
            st.markdown(f'<div class="rcb-card-id">#{recipe.display_id}</div>', unsafe_allow_html=True)
        ingredient_tags(recipe, preview_limit, show_remaining=show_id)
        if st.button("View recipe", key=f"{key_prefix}_open_{recipe.record_id}", use_container_width=True):
            open_recipe(recipe.record_id)


def recipe_grid(
    recipes: List[Recipe],
    key_prefix: str,
    columns: int = 4,
    preview_limit: int = 3,
    show_id: bool = True,
) -> None:
    """Render recipes as a grid of cards, `columns` per row."""
    for start in range(0, len(recipes), columns):
        row = st.columns(columns)
        for col, recipe in zip(row, recipes[start:start + columns]):
            with col:
                recipe_card(recipe, preview_limit, show_id, key_prefix)


def pagination_bar(view: PageView, on_page: Callable[[int], object], key: str) -> None:
    """
    Render Prev / "go to page" / Next controls.

    Nothing is rendered when there is at most one page. The input shows
    1-based page numbers; invalid input is reset to the current page.

    Args:
        view: Current page view
        on_page: Callback receiving the requested 0-based page index
        key: Unique widget key prefix
    """
    if view.pages <= 1:
        return

    input_key = f"{key}_page_input"
    shown_key = f"{key}_page_shown"
    if st.session_state.get(shown_key) != view.page:
        st.session_state[input_key] = str(view.page + 1)
        st.session_state[shown_key] = view.page

    def jump() -> None:
        target = parse_page_input(st.session_state.get(input_key, ""), view.pages)
        if target is None:
            st.session_state[input_key] = str(view.page + 1)
            return
        on_page(target)

    col_prev, col_input, col_info, col_next = st.columns([1, 1, 1, 1])
    with col_prev:
        st.button("← Prev", key=f"{key}_prev", disabled=view.page == 0,
                  on_click=on_page, args=(view.page - 1,), use_container_width=True)
    with col_input:
        st.text_input("Page", key=input_key, on_change=jump, label_visibility="collapsed")
    with col_info:
        st.markdown(f'<div class="rcb-page-info">{page_label(view.page, view.pages)}</div>',
                    unsafe_allow_html=True)
    with col_next:
        st.button("Next →", key=f"{key}_next", disabled=view.page >= view.pages - 1,
                  on_click=on_page, args=(view.page + 1,), use_container_width=True)


def request_scroll_to_top(_event=None) -> None:
    """PageChanged listener: scroll to the top on the next render."""
    st.session_state[SCROLL_TO_TOP_KEY] = True


def apply_scroll_to_top() -> None:
    """Scroll the browser window to the top if a page change asked for it."""
    if st.session_state.pop(SCROLL_TO_TOP_KEY, False):
        components.html(
            "<script>window.parent.scrollTo({top: 0, behavior: 'smooth'});</script>",
            height=0,
        )
