"""
Recipe catalog core.

Fetch-once recipe store, pure query functions (search, tag filter, sort,
pagination) and URL-synchronized view state for the browsing pages. Nothing
in this package imports Streamlit; the frontend in streamlit_app/ wires these
pieces together.
"""

__version__ = "1.0.0"
