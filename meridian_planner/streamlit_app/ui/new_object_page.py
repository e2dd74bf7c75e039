from __future__ import annotations

import streamlit as st

from meridian_planner import (
    MODULE_CATEGORIES,
    AllocationExhaustedError,
    ModuleType,
    ObjectDraft,
    allocate_object,
    suggest_code,
)
from meridian_planner.catalog import (
    CATEGORY_LABELS,
    LIFECYCLE_STAGES,
    MODULE_LABELS,
    REGION_LABELS,
    SOURCE_SYSTEM_LABELS,
    STAGE_LABELS,
    STATUS_LABELS,
)

from ..config import OBJECTS_PAGE
from ..data import get_store


def _select(label: str, labels: dict[str, str], *, key: str, options=None) -> str:
    values = list(options if options is not None else labels)
    return st.selectbox(
        label,
        options=values,
        format_func=lambda value: labels.get(value, value),
        key=key,
    )


def _optional(value: str) -> str | None:
    stripped = value.strip()
    return stripped or None


def render_new_object_page() -> None:
    st.title("Create object")
    st.caption("The object code is assigned when the object is saved.")

    store = get_store()

    cols = st.columns(2)
    with cols[0]:
        module = ModuleType(_select("Module", MODULE_LABELS, key="new-object-module"))
    with cols[1]:
        categories = [category.value for category in MODULE_CATEGORIES[module]]
        category = _select(
            "Category", CATEGORY_LABELS, key=f"new-object-category-{module.value}", options=categories
        )

    cols = st.columns(2)
    with cols[0]:
        region = _select("Region", REGION_LABELS, key="new-object-region")
        current_stage = _select(
            "Stage", STAGE_LABELS, key="new-object-stage", options=LIFECYCLE_STAGES
        )
    with cols[1]:
        source_system = _select("Source system", SOURCE_SYSTEM_LABELS, key="new-object-source")
        status = _select(
            "Status",
            STATUS_LABELS,
            key="new-object-status",
            options=[value for value in STATUS_LABELS if value != "archived"],
        )

    description = st.text_area("Description", key="new-object-description")
    cols = st.columns(2)
    with cols[0]:
        owner_alias = st.text_input("Owner", key="new-object-owner")
    with cols[1]:
        team_alias = st.text_input("Team", key="new-object-team")
    notes = st.text_area("Notes", key="new-object-notes")

    draft = ObjectDraft(
        module=module,
        category=category,
        region=region,
        source_system=source_system,
        current_stage=current_stage,
        status=status,
        description=_optional(description),
        owner_alias=_optional(owner_alias),
        team_alias=_optional(team_alias),
        notes=_optional(notes),
    )

    st.markdown(f"Suggested code: **{suggest_code(store, draft)}**")

    if st.button("Create object", type="primary"):
        try:
            record = allocate_object(store, draft)
        except AllocationExhaustedError as exc:
            st.error(f"Could not create the object: {exc}")
            return
        st.success(f"Created {record.name}.")
        st.page_link(OBJECTS_PAGE, label="Back to objects", icon="📦")
