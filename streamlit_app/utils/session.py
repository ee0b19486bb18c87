"""
Session management utilities for Streamlit pages.

The bearer token used for favorites is kept in st.session_state for the
duration of the browser session. Logging in is handled by the backend; the
user pastes a token in the sidebar, or RECIPE_API_TOKEN provides one.

# NOTE: The token is not persisted. Refreshing the page or opening a new tab
    starts without a token unless RECIPE_API_TOKEN is set.
"""

from typing import Optional

import streamlit as st

from catalog.config import CatalogConfig

TOKEN_KEY = "api_token"


def get_token() -> Optional[str]:
    """
    Get the bearer token for this session.

    Falls back to RECIPE_API_TOKEN the first time it is called.
    """
    if TOKEN_KEY not in st.session_state:
        st.session_state[TOKEN_KEY] = CatalogConfig.get_api_token() or ""
    return st.session_state[TOKEN_KEY] or None


def set_token(token: Optional[str]) -> None:
    st.session_state[TOKEN_KEY] = (token or "").strip()


def is_logged_in() -> bool:
    return get_token() is not None
