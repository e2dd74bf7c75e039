from __future__ import annotations

import pandas as pd
import streamlit as st

from meridian_planner import EntityDomain, IssueRecord
from meridian_planner.aging import aging_days, aging_level
from meridian_planner.catalog import (
    ISSUE_STATUS_LABELS,
    ISSUE_TYPE_LABELS,
    MODULE_LABELS,
    STAGE_LABELS,
)

from ..config import ISSUES_PATH
from ..data import list_issues
from ..state import get_filter_store, get_view_matcher
from .filters import render_filter_bar, render_sort_select, render_view_chips
from .objects_page import AGING_BADGES


def _build_issues_dataframe(issues: list[IssueRecord]) -> pd.DataFrame:
    rows = []
    for issue in issues:
        days = aging_days(issue.created_at)
        rows.append(
            {
                "Title": issue.title,
                "Object": issue.object_name,
                "Module": MODULE_LABELS.get(issue.object_module, issue.object_module),
                "Type": ISSUE_TYPE_LABELS.get(issue.issue_type, issue.issue_type),
                "Stage": STAGE_LABELS.get(issue.lifecycle_stage, issue.lifecycle_stage),
                "Status": ISSUE_STATUS_LABELS.get(issue.status, issue.status),
                "Age (days)": f"{days} {AGING_BADGES[aging_level(days, for_issue=True)]}".strip(),
                "Owner": issue.owner_alias or "",
            }
        )
    return pd.DataFrame(rows)


def render_issues_page() -> None:
    st.title("Issues")
    st.caption("Closed issues are hidden unless a status filter asks for them.")

    store = get_filter_store()
    matcher = get_view_matcher(EntityDomain.ISSUES)

    render_view_chips(matcher, store)
    render_filter_bar(EntityDomain.ISSUES, store, ISSUES_PATH)

    issues = list_issues(store.read())

    header_cols = st.columns([3, 1])
    with header_cols[0]:
        st.markdown(f"**{len(issues)}** issue(s)")
    with header_cols[1]:
        render_sort_select(EntityDomain.ISSUES, store)

    if not issues:
        st.info("No issues match the current filters.", icon="💡")
        return

    st.dataframe(_build_issues_dataframe(issues), use_container_width=True, hide_index=True)
