"""
UI Styling and Components Module.

This module provides global CSS styling and reusable UI components
for the Recipe Catalog Browser Streamlit app.
"""

from ui.styles import load_global_styles
from ui.layout import page_header, recipe_grid, pagination_bar
from ui.feedback import show_error, show_empty_state, show_no_results, stop_with_retry, working_spinner

__all__ = [
    "load_global_styles",
    "page_header",
    "recipe_grid",
    "pagination_bar",
    "show_error",
    "show_empty_state",
    "show_no_results",
    "stop_with_retry",
    "working_spinner",
]
