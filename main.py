from __future__ import annotations

import logging

import streamlit as st

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)


def main():
    """Redirect to the object list as the default landing page."""
    st.switch_page("pages/Objects.py")


if __name__ == "__main__":
    main()
