from datetime import datetime

from meridian_planner import (
    EntityDomain,
    FilterState,
    SORT_OPTIONS,
    decode_sort,
    describe_active_filters,
    encode_sort,
)
from meridian_planner.aging import aging_days, aging_level, progress_percent


def test_chips_skip_reserved_and_archive_keys():
    state = FilterState.from_query("status=blocked&sort=aging&order=desc&is_archived=true&region=region_eu")

    chips = describe_active_filters(state, EntityDomain.OBJECTS)

    assert [(chip.label, chip.value_label) for chip in chips] == [
        ("Region", "EU"),
        ("Status", "Blocked"),
    ]


def test_issue_status_lists_are_labelled_per_part():
    state = FilterState.from_mapping({"status": "open,in_progress,mystery"})

    chips = describe_active_filters(state, "issues")

    assert chips[0].value_label == "Open, In Progress, mystery"


def test_search_is_quoted_and_unknown_keys_pass_through():
    state = FilterState.from_mapping({"search": "fcst", "owner": "kim"})

    chips = {chip.key: chip for chip in describe_active_filters(state, "objects")}

    assert chips["search"].label == "Search"
    assert chips["search"].value_label == '"fcst"'
    assert chips["owner"].label == "owner"
    assert chips["owner"].value_label == "kim"


def test_sort_encoding():
    assert encode_sort("aging", "desc") == "aging:desc"
    assert decode_sort("aging:desc") == ("aging", "desc")
    assert decode_sort("aging") is None
    assert decode_sort("aging:sideways") is None
    assert SORT_OPTIONS[EntityDomain.OBJECTS][0].encoded == "created_at:desc"


def test_aging_helpers():
    now = datetime(2026, 3, 20, 12, 0, 0)

    assert aging_days("2026-03-01T12:00:00", now=now) == 19
    assert aging_level(19) == "critical"
    assert aging_level(8) == "warning"
    assert aging_level(3) == "normal"
    assert aging_level(4, for_issue=True) == "warning"
    assert progress_percent("requirements") == 11
    assert progress_percent("live") == 100
    assert progress_percent("unknown") == 0
