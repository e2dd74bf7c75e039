"""Filter bar, saved view chips and sort select for the list pages.

Every control writes through the FilterStateStore, so the query string is the
state and widgets are re-pointed at it on each rerun.
"""

from __future__ import annotations

import streamlit as st
from st_keyup import st_keyup

from meridian_planner import (
    SORT_OPTIONS,
    EntityDomain,
    FilterState,
    FilterStateStore,
    ViewMatcher,
    decode_sort,
    describe_active_filters,
    encode_sort,
)
from meridian_planner.catalog import FILTER_LABELS, filter_options
from meridian_planner.view_matcher import view_href

from ..state import sync_widget, widget_key


def _apply_view(matcher: ViewMatcher, store: FilterStateStore, view_id: str) -> None:
    view = next((item for item in matcher.views if item.id == view_id), None)
    if view is None:
        matcher.apply_all(store)
    else:
        matcher.apply(store, view)


def render_view_chips(matcher: ViewMatcher, store: FilterStateStore) -> None:
    chips = matcher.chips(store.read())
    cols = st.columns(len(chips))
    for col, chip in zip(cols, chips):
        with col:
            st.button(
                chip.label,
                key=widget_key(matcher.entity, f"view-{chip.view_id}"),
                type="primary" if chip.is_active else "secondary",
                help=chip.href,
                on_click=_apply_view,
                args=(matcher, store, chip.view_id),
                width="stretch",
            )


def _on_select_change(store: FilterStateStore, filter_key: str, state_key: str) -> None:
    store.set(filter_key, st.session_state.get(state_key) or None)


def _render_select(
    entity: EntityDomain,
    store: FilterStateStore,
    state: FilterState,
    filter_key: str,
    options: dict[str, str],
) -> None:
    placeholder = FILTER_LABELS.get(filter_key, filter_key)
    current = state.get(filter_key, "")
    choices = [""] + list(options)
    if current and current not in options:
        # Multi-value filters from saved views are shown as they are.
        choices.append(current)

    key = widget_key(entity, f"filter-{filter_key}")
    sync_widget(key, current)
    st.selectbox(
        placeholder,
        options=choices,
        format_func=lambda value: options.get(value, value) if value else f"Any {placeholder.lower()}",
        key=key,
        on_change=_on_select_change,
        args=(store, filter_key, key),
        label_visibility="collapsed",
    )


def render_search_box(entity: EntityDomain, store: FilterStateStore) -> None:
    """Live search with debounce; writes ``search`` to the query string."""
    current_value = store.read().get("search", "")
    search_value = st_keyup(
        "Search",
        value=current_value,
        debounce=300,
        placeholder=f"🔍 Search {entity.value}...",
        key=widget_key(entity, "search"),
    )
    # Only react to typing; a stale component value must not undo a view switch.
    last_key = widget_key(entity, "search-last")
    previous = st.session_state.get(last_key, current_value)
    st.session_state[last_key] = search_value
    if search_value is None or search_value == previous:
        return
    if search_value != current_value:
        store.set("search", search_value.strip() or None)


def _on_sort_change(store: FilterStateStore, state_key: str) -> None:
    decoded = decode_sort(st.session_state.get(state_key, ""))
    if decoded is None:
        return
    field, order = decoded
    store.set("sort", field)
    store.set("order", order)


def render_sort_select(entity: EntityDomain, store: FilterStateStore) -> None:
    options = SORT_OPTIONS[entity]
    labels = {option.encoded: option.label for option in options}
    state = store.read()
    default = options[0]
    current = encode_sort(state.sort or default.field, state.order or default.order)
    choices = list(labels)
    if current not in labels:
        choices.append(current)

    key = widget_key(entity, "sort")
    sync_widget(key, current)
    st.selectbox(
        "Sort by",
        options=choices,
        format_func=lambda value: labels.get(value, value),
        key=key,
        on_change=_on_sort_change,
        args=(store, key),
    )


def render_filter_bar(entity: EntityDomain, store: FilterStateStore, base_path: str) -> None:
    state = store.read()
    option_map = filter_options(entity)

    with st.container(border=True):
        render_search_box(entity, store)

        cols = st.columns(len(option_map))
        for col, (filter_key, options) in zip(cols, option_map.items()):
            with col:
                _render_select(entity, store, state, filter_key, dict(options))

        active_count = store.active_filter_count()
        if active_count > 0:
            st.button(
                f"Clear ({active_count})",
                key=widget_key(entity, "clear"),
                on_click=store.clear,
            )

    chips = describe_active_filters(store.read(), entity)
    if chips:
        chip_cols = st.columns(len(chips))
        for col, chip in zip(chip_cols, chips):
            with col:
                st.button(
                    f"{chip.label}: {chip.value_label} ✕",
                    key=widget_key(entity, f"chip-{chip.key}"),
                    on_click=store.set,
                    args=(chip.key, None),
                )

    st.caption(f"Shareable link: `{view_href(base_path, store.read())}`")
