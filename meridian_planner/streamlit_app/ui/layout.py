from __future__ import annotations

import streamlit as st

from ..config import ISSUES_PAGE, NEW_OBJECT_PAGE, OBJECTS_PAGE


def render_global_styles() -> None:
    st.markdown(
        """
        <style>
        /* Reduce default padding */
        .block-container {
            padding-top: 1rem;
            padding-bottom: 1rem;
        }

        /* Pill-shaped view chips and filter chips */
        div[data-testid="stHorizontalBlock"] button[kind="primary"],
        div[data-testid="stHorizontalBlock"] button[kind="secondary"] {
            border-radius: 999px;
            min-height: 1.75rem;
            padding: 0 0.75rem;
            white-space: nowrap;
        }
        </style>
        """,
        unsafe_allow_html=True,
    )


def render_navigation() -> None:
    nav_cols = st.columns(3)
    with nav_cols[0]:
        st.page_link(OBJECTS_PAGE, label="Objects", icon="📦")
    with nav_cols[1]:
        st.page_link(ISSUES_PAGE, label="Issues", icon="🚩")
    with nav_cols[2]:
        st.page_link(NEW_OBJECT_PAGE, label="New object", icon="➕")
