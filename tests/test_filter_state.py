import pytest

from meridian_planner import FilterState, FilterStateStore, InMemoryQuerySource


def _store(query: str = "") -> FilterStateStore:
    return FilterStateStore(InMemoryQuerySource(query))


def test_read_parses_query_and_last_duplicate_wins():
    store = _store("?status=blocked&module=demand_planning&status=at_risk")

    state = store.read()

    assert dict(state) == {"module": "demand_planning", "status": "at_risk"}


@pytest.mark.parametrize("initial", ["", "status=blocked", "status=at_risk&sort=aging"])
def test_set_then_read_contains_value(initial):
    store = _store(initial)

    store.set("status", "blocked")

    assert store.read()["status"] == "blocked"


@pytest.mark.parametrize("cleared", [None, ""])
def test_set_empty_removes_key_whether_or_not_present(cleared):
    store = _store("status=blocked&module=supply_planning")

    store.set("status", cleared)
    store.set("status", cleared)
    store.set("region", cleared)

    assert dict(store.read()) == {"module": "supply_planning"}


def test_set_does_not_touch_earlier_snapshots():
    store = _store("status=blocked")
    before = store.read()

    store.set("status", "at_risk")
    store.set("module", "demand_planning")

    assert dict(before) == {"status": "blocked"}
    assert dict(store.read()) == {"module": "demand_planning", "status": "at_risk"}


def test_set_writes_canonical_query_text():
    source = InMemoryQuerySource()
    store = FilterStateStore(source)

    store.set("status", "open,in_progress")
    store.set("module", "demand_planning")
    store.set("search", "sales plan")

    assert source.query == "module=demand_planning&search=sales+plan&status=open%2Cin_progress"
    assert store.read()["status"] == "open,in_progress"
    assert store.read()["search"] == "sales plan"


def test_clear_empties_query():
    source = InMemoryQuerySource("status=blocked&sort=aging&order=desc")
    store = FilterStateStore(source)

    store.clear()

    assert source.query == ""
    assert store.read().is_empty
    assert store.active_filter_count() == 0


def test_active_filter_count_ignores_sort_and_order():
    store = _store()
    store.set("status", "blocked")
    store.set("sort", "aging")
    store.set("order", "desc")

    assert store.active_filter_count() == 1

    store.set("module", "demand_planning")
    assert store.active_filter_count() == 2


def test_active_filter_count_follows_external_changes():
    source = InMemoryQuerySource("status=blocked")
    store = FilterStateStore(source)
    assert store.active_filter_count() == 1

    source.write_query("status=blocked&region=global&module=supply_planning")

    assert store.active_filter_count() == 3


def test_replace_drops_previous_keys():
    store = _store("status=blocked&region=global&search=abc")

    store.replace({"module": "demand_planning"})

    assert dict(store.read()) == {"module": "demand_planning"}


def test_filter_state_equality_ignores_insertion_order():
    first = FilterState.from_mapping({"module": "demand_planning", "status": "blocked"})
    second = FilterState.from_mapping({"status": "blocked", "module": "demand_planning"})

    assert first == second
    assert hash(first) == hash(second)
    assert first.to_query() == second.to_query()


def test_filter_state_reserved_accessors():
    state = FilterState.from_query("status=blocked&sort=aging&order=desc")

    assert state.filters == {"status": "blocked"}
    assert state.sort == "aging"
    assert state.order == "desc"
    assert "sort" in state
    assert state.get("missing") is None


def test_blank_values_in_query_are_kept_as_present_keys():
    state = FilterState.from_query("status=&module=demand_planning")

    assert state["status"] == ""
    assert state.active_filter_count() == 2


def test_filter_state_compares_equal_to_plain_mappings():
    store = _store("status=blocked&module=demand_planning")

    assert FilterState.from_query("status=blocked") == {"status": "blocked"}
    assert store.read() == {"module": "demand_planning", "status": "blocked"}
    assert store.read() != {"status": "blocked"}
    assert FilterState() == {}
