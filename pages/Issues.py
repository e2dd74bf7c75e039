from __future__ import annotations

import streamlit as st

from meridian_planner.streamlit_app.ui.issues_page import render_issues_page
from meridian_planner.streamlit_app.ui.layout import render_global_styles, render_navigation


st.set_page_config(
    page_title="Meridian Planner - Issues",
    layout="wide",
    page_icon="🚩",
)


def main():
    render_global_styles()
    render_navigation()
    render_issues_page()


if __name__ == "__main__":
    main()
