from __future__ import annotations

import altair as alt
import pandas as pd
import streamlit as st

from meridian_planner import EntityDomain, FilterStateStore, ObjectRecord
from meridian_planner.aging import aging_days, aging_level, progress_percent
from meridian_planner.catalog import (
    CATEGORY_LABELS,
    MODULE_LABELS,
    STAGE_LABELS,
    STATUS_LABELS,
)

from ..config import OBJECTS_PATH
from ..data import list_objects, set_object_archived
from ..state import get_filter_store, get_view_matcher, widget_key
from .filters import render_filter_bar, render_sort_select, render_view_chips

AGING_BADGES = {"normal": "", "warning": "🟠", "critical": "🔴"}


def _build_objects_dataframe(objects: list[ObjectRecord]) -> pd.DataFrame:
    rows = []
    for obj in objects:
        days = aging_days(obj.stage_entered_at)
        rows.append(
            {
                "Code": obj.name,
                "Module": MODULE_LABELS.get(obj.module, obj.module),
                "Category": CATEGORY_LABELS.get(obj.category, obj.category),
                "Stage": STAGE_LABELS.get(obj.current_stage, obj.current_stage),
                "Progress": progress_percent(obj.current_stage),
                "Status": STATUS_LABELS.get(obj.status, obj.status),
                "Days in stage": f"{days} {AGING_BADGES[aging_level(days)]}".strip(),
                "Owner": obj.owner_alias or "",
            }
        )
    return pd.DataFrame(rows)


def render_status_summary(objects: list[ObjectRecord]) -> None:
    if not objects:
        return
    df = pd.DataFrame(
        [{"status": STATUS_LABELS.get(obj.status, obj.status)} for obj in objects]
    )
    counts = df.groupby("status").size().reset_index(name="count")
    chart = (
        alt.Chart(counts)
        .mark_bar()
        .encode(
            x=alt.X("count:Q", title="Objects"),
            y=alt.Y("status:N", title=None, sort="-x"),
            color=alt.Color("status:N", legend=None),
            tooltip=["status", "count"],
        )
        .properties(height=150)
    )
    st.altair_chart(chart, use_container_width=True)


def _toggle_archived_listing(store: FilterStateStore, state_key: str) -> None:
    store.set("is_archived", "true" if st.session_state.get(state_key) else None)


def _archive_selected(objects: list[ObjectRecord], state_key: str, archived: bool) -> None:
    by_name = {obj.name: obj for obj in objects}
    selected = by_name.get(st.session_state.get(state_key))
    if selected is None:
        return
    record = set_object_archived(selected.id, archived)
    if record is None:
        st.session_state.archive_message = f"{selected.name} no longer exists."
    else:
        verb = "archived" if record.is_archived else "restored"
        st.session_state.archive_message = f"{record.name} {verb}."


def render_archive_controls(store: FilterStateStore, objects: list[ObjectRecord]) -> None:
    showing_archived = store.read().get("is_archived") == "true"
    toggle_key = widget_key(EntityDomain.OBJECTS, "show-archived")
    st.session_state[toggle_key] = showing_archived
    st.toggle(
        "Show archived",
        key=toggle_key,
        on_change=_toggle_archived_listing,
        args=(store, toggle_key),
    )

    message = st.session_state.pop("archive_message", None)
    if message:
        st.toast(message)

    if not objects:
        return
    select_key = widget_key(EntityDomain.OBJECTS, "archive-target")
    names = [obj.name for obj in objects]
    if st.session_state.get(select_key) not in names:
        st.session_state.pop(select_key, None)
    cols = st.columns([3, 1])
    with cols[0]:
        st.selectbox(
            "Object",
            options=names,
            key=select_key,
            label_visibility="collapsed",
        )
    with cols[1]:
        st.button(
            "Restore" if showing_archived else "Archive",
            key=widget_key(EntityDomain.OBJECTS, "archive-apply"),
            on_click=_archive_selected,
            args=(objects, select_key, not showing_archived),
            width="stretch",
        )


def render_objects_page() -> None:
    st.title("Objects")
    st.caption("Browse planning objects; filters live in the URL so views can be shared.")

    store = get_filter_store()
    matcher = get_view_matcher(EntityDomain.OBJECTS)

    render_view_chips(matcher, store)
    render_filter_bar(EntityDomain.OBJECTS, store, OBJECTS_PATH)

    objects = list_objects(store.read())

    header_cols = st.columns([3, 1])
    with header_cols[0]:
        st.markdown(f"**{len(objects)}** object(s)")
    with header_cols[1]:
        render_sort_select(EntityDomain.OBJECTS, store)

    render_archive_controls(store, objects)

    if not objects:
        st.info("No objects match the current filters.", icon="💡")
        return

    render_status_summary(objects)
    st.dataframe(_build_objects_dataframe(objects), use_container_width=True, hide_index=True)
