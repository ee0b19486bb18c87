"""
Recipe Catalog Browser - Streamlit Frontend Main Entry Point.

This is the main Streamlit application entry point. It sets up logging, the
page configuration and the sidebar, and shows the home page.

Note: Multi-page routing is handled automatically by Streamlit via the `pages/` folder.
Files in `pages/` starting with numbered prefixes (e.g., `01_📋_Recipe_List.py`) will appear
as pages in the sidebar navigation.

Run with:
    streamlit run streamlit_app/app.py
"""

import sys
from pathlib import Path

# Ensure the streamlit_app directory is in the Python path
# This allows imports to work regardless of how the app is run
streamlit_app_dir = Path(__file__).parent
if str(streamlit_app_dir) not in sys.path:
    sys.path.insert(0, str(streamlit_app_dir))

# Add project root to path so we can import catalog
project_root = streamlit_app_dir.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# Import config early to load .env file before any other code accesses environment variables
import catalog.config  # noqa: F401

import logging

import streamlit as st

from catalog.config import CatalogConfig
from utils.services import deactivate_browsing_pages, get_record_store
from utils.sidebar import render_sidebar
from ui.styles import load_global_styles
from ui.layout import page_header

logging.basicConfig(
    level=CatalogConfig.get_log_level(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Page configuration - must be called before any other Streamlit commands
st.set_page_config(
    page_title="Recipe Catalog",
    page_icon="🍳",
    layout="wide",
    initial_sidebar_state="expanded"
)

load_global_styles()
deactivate_browsing_pages()
render_sidebar()

page_header(
    "Recipe Catalog",
    subtitle="Browse, search and filter the whole recipe collection."
)

store = get_record_store()
summary = store.summary()

col1, col2, col3 = st.columns(3)
with col1:
    st.metric("📚 Recipes loaded", summary["record_count"] if summary["record_count"] else "—")
with col2:
    st.metric("⚡ Collection", summary["status"].replace("_", " ").title())
with col3:
    st.metric("📄 Per page", CatalogConfig.get_page_size())

st.markdown("#### Get started")
cta_col1, cta_col2, cta_col3 = st.columns(3, gap="medium")

with cta_col1:
    if st.button("Search recipes", use_container_width=True, type="primary"):
        st.switch_page("pages/01_📋_Recipe_List.py")

with cta_col2:
    if st.button("Filter by ingredients", use_container_width=True):
        st.switch_page("pages/02_🖼_Ingredient_Gallery.py")

with cta_col3:
    if st.button("My favorites", use_container_width=True):
        st.switch_page("pages/04_⭐_Favorites.py")

st.divider()

with st.expander("How it works", expanded=False):
    st.markdown("""
    1. **Recipe list** – Search by title or ingredient and sort by number or title.
    2. **Ingredient gallery** – Pick ingredients; only recipes containing *all* of them are shown.
    3. **Share a view** – Search, filters and page are kept in the URL, so any view can be bookmarked.
    """)
