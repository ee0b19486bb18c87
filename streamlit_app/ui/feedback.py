"""
Error, empty and loading states shared by the catalog pages.

Browsing pages separate three outcomes that look alike on screen: the fetch
failed (error with a Retry button), the backend has no recipes at all, and the
current search or filter matched nothing.
"""

from contextlib import contextmanager
from typing import Optional

import streamlit as st

from catalog.controllers import LoadState, PageView


def show_error(message: str, hint: Optional[str] = None) -> None:
    """
    Display an error message with an optional hint.

    Args:
        message: Main error message to display
        hint: Optional hint text to help users resolve the issue
    """
    st.error(f"⚠️ {message}")
    if hint:
        st.caption(f"💡 {hint}")


def show_empty_state(title: str, subtitle: Optional[str] = None) -> None:
    st.info(f"📭 **{title}**")
    if subtitle:
        st.caption(subtitle)


def stop_with_retry(message: str, hint: Optional[str] = "Check your connection and try again.") -> None:
    """
    Show a load failure with a Retry button and end the script run.

    Retrying reruns the page; the store refetches because a failed fetch is
    never cached.
    """
    show_error(message, hint=hint)
    if st.button("Retry", type="primary"):
        st.rerun()
    st.stop()


def show_no_results(load_state: Optional[LoadState], view: PageView, no_match_hint: str) -> bool:
    """
    Explain an empty page, if it is empty.

    Args:
        load_state: Outcome of this run's load (None if it was discarded)
        view: Current page view
        no_match_hint: Subtitle shown when the query matched nothing

    Returns:
        True if an empty state was shown and the grid should be skipped.
    """
    if load_state is not None and load_state.is_empty:
        show_empty_state("The recipe collection is empty", "No recipes have been published yet.")
        return True
    if view.is_empty:
        show_empty_state("No recipes found", no_match_hint)
        return True
    return False


@contextmanager
def working_spinner(label: str = "Loading recipes…"):
    """
    Spinner shown while the collection or a recipe is fetched.

    Usage:
        with working_spinner():
            load_state = controller.load()
    """
    with st.spinner(label):
        yield
