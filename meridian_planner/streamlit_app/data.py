from __future__ import annotations

import streamlit as st

from meridian_planner import ObjectStore

from .config import DB_PATH


@st.cache_resource(show_spinner=False)
def get_store() -> ObjectStore:
    store = ObjectStore(DB_PATH)
    store.initialize()
    return store


def list_objects(filters):
    return get_store().list_objects(filters)


def list_issues(filters):
    return get_store().list_issues(filters)


def set_object_archived(object_id: int, archived: bool):
    return get_store().set_archived(object_id, archived)
