"""
Utility modules for the Streamlit frontend.

This package contains:
- services: Construction of the shared RecordStore and per-page controllers
- session: Session state helpers (bearer token for favorites)
"""
