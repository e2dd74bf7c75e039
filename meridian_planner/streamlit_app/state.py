from __future__ import annotations

import streamlit as st

from meridian_planner import (
    DEFAULT_REGISTRY,
    EntityDomain,
    FilterStateStore,
    ViewMatcher,
    encode_query,
    parse_query,
)

from .config import ISSUES_PATH, OBJECTS_PATH


class StreamlitQuerySource:
    """Query source backed by the browser address bar."""

    def read_query(self) -> str:
        return encode_query(st.query_params.to_dict())

    def write_query(self, text: str) -> None:
        st.query_params.from_dict(parse_query(text))


def get_filter_store() -> FilterStateStore:
    return FilterStateStore(StreamlitQuerySource())


def get_view_matcher(entity: EntityDomain) -> ViewMatcher:
    base_path = ISSUES_PATH if entity is EntityDomain.ISSUES else OBJECTS_PATH
    return ViewMatcher(DEFAULT_REGISTRY, entity, base_path)


def widget_key(entity: EntityDomain, name: str) -> str:
    return f"{entity.value}-{name}"


def sync_widget(key: str, value) -> None:
    """Point a widget at the value currently held in the query string."""
    st.session_state[key] = value
