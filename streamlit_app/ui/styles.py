"""
Global CSS Styling for the Recipe Catalog Browser.

This module provides load_global_styles() to inject consistent styling across
all pages: card grid, ingredient tags and the pagination bar.
"""

import streamlit as st


def load_global_styles() -> None:
    """
    Inject global CSS styles for the Recipe Catalog Browser.

    This function:
    - Sets card styling for the recipe grid (rounded corners, subtle border)
    - Styles ingredient tags as small pills
    - Keeps recipe images square so the grid lines up
    """
    css = """
    <style>
        /* Recipe cards */
        .rcb-card-title {
            font-weight: 600;
            margin: 0.4rem 0 0.1rem 0;
            line-height: 1.3;
        }

        .rcb-card-id {
            color: #888;
            font-size: 0.85rem;
            margin-bottom: 0.3rem;
        }

        /* Ingredient tags */
        .rcb-tag {
            display: inline-block;
            padding: 0.1rem 0.55rem;
            margin: 0 0.25rem 0.25rem 0;
            border-radius: 999px;
            background: #eef5ea;
            color: #2f5d22;
            font-size: 0.8rem;
        }

        .rcb-tag-muted {
            background: #eee;
            color: #999;
        }

        /* Square thumbnails */
        [data-testid="stImage"] img {
            aspect-ratio: 1 / 1;
            object-fit: cover;
            border-radius: 8px;
        }

        /* Pagination */
        .rcb-page-info {
            text-align: center;
            padding-top: 0.45rem;
            color: #555;
        }
    </style>
    """
    st.markdown(css, unsafe_allow_html=True)
