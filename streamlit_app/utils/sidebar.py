"""
Sidebar shared by all pages: branding, favorites login and collection status.
"""

import streamlit as st

from utils.services import get_record_store
from utils.session import get_token, set_token


def render_sidebar() -> None:
    """Render the global sidebar."""
    with st.sidebar:
        st.markdown("### 🍳 **Recipe Catalog**")
        st.divider()

        st.markdown("#### Favorites")
        token = get_token()
        if token:
            st.caption("Logged in")
            if st.button("Log out", use_container_width=True):
                set_token(None)
                st.rerun()
        else:
            entered = st.text_input(
                "Access token",
                type="password",
                help="Bearer token issued by the recipe backend after logging in.",
            )
            if st.button("Use token", use_container_width=True, disabled=not entered):
                set_token(entered)
                st.rerun()

        st.divider()

        with st.expander("Collection status", expanded=False):
            summary = get_record_store().summary()
            status_emoji = {"ready": "🟢", "failed": "🔴", "in_flight": "🟡"}.get(summary["status"], "⚪")
            st.markdown(f"**Collection:** {status_emoji} {summary['status']}")
            st.caption(f"{summary['record_count']} recipes · {summary['cache_size']} cached by id")
            if summary["last_error"]:
                st.caption(f"Last error: {summary['last_error']}")
