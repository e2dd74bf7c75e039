from meridian_planner import (
    DEFAULT_REGISTRY,
    EntityDomain,
    FilterState,
    FilterStateStore,
    InMemoryQuerySource,
    SavedView,
    SavedViewRegistry,
    ViewMatcher,
    match_view,
)


def _object_matcher() -> ViewMatcher:
    return ViewMatcher(DEFAULT_REGISTRY, EntityDomain.OBJECTS, "/objects")


def test_empty_state_matches_all_and_nothing_else():
    result = match_view(FilterState(), DEFAULT_REGISTRY)

    assert result.all_active is True
    assert result.view is None
    assert result.view_id == "all"


def test_matches_saved_view_exactly():
    result = match_view(FilterState.from_query("status=blocked"), DEFAULT_REGISTRY.for_entity("objects"))

    assert result.all_active is False
    assert result.view is not None
    assert result.view.id == "obj-blocked"


def test_match_is_independent_of_key_order():
    view = SavedView.define(
        "dp-blocked",
        "DP blocked",
        EntityDomain.OBJECTS,
        {"status": "blocked", "module": "demand_planning"},
    )
    store = FilterStateStore(InMemoryQuerySource())
    store.set("module", "demand_planning")
    store.set("status", "blocked")

    assert match_view(store.read(), [view]).view is view
    assert match_view("module=demand_planning&status=blocked", [view]).view is view
    assert match_view("status=blocked&module=demand_planning", [view]).view is view


def test_comma_lists_compare_as_plain_strings():
    views = DEFAULT_REGISTRY.for_entity("issues")

    assert match_view("status=open%2Cin_progress%2Cblocked", views).view.id == "iss-open"
    reordered = match_view(FilterState.from_mapping({"status": "blocked,open,in_progress"}), views)
    assert reordered.view is None
    assert reordered.all_active is False


def test_extra_keys_prevent_a_match():
    result = match_view("status=blocked&region=global", DEFAULT_REGISTRY.for_entity("objects"))

    assert result.view is None
    assert result.all_active is False


def test_sort_only_view_matches():
    result = match_view("order=desc&sort=aging", DEFAULT_REGISTRY.for_entity("objects"))

    assert result.view.id == "obj-stale"


def test_first_view_wins_on_identical_filters():
    first = SavedView.define("first", "First", EntityDomain.OBJECTS, {"status": "blocked"})
    second = SavedView.define("second", "Second", EntityDomain.OBJECTS, {"status": "blocked"})
    registry = SavedViewRegistry([first, second])
    matcher = ViewMatcher(registry, EntityDomain.OBJECTS, "/objects")

    assert matcher.active("status=blocked").view is first
    active = [chip.view_id for chip in matcher.chips("status=blocked") if chip.is_active]
    assert active == ["first"]


def test_chips_carry_links_and_active_flag():
    chips = _object_matcher().chips(FilterState.from_query("module=supply_planning"))

    assert [chip.label for chip in chips] == [
        "All",
        "Blocked",
        "At Risk",
        "Stale (>15d)",
        "Demand Planning",
        "Supply Planning",
    ]
    by_id = {chip.view_id: chip for chip in chips}
    assert by_id["all"].href == "/objects"
    assert by_id["all"].is_active is False
    assert by_id["obj-stale"].href == "/objects?order=desc&sort=aging"
    assert by_id["obj-sp"].is_active is True
    assert sum(chip.is_active for chip in chips) == 1


def test_apply_replaces_rather_than_merges():
    source = InMemoryQuerySource("region=global&search=fcst&status=at_risk")
    store = FilterStateStore(source)
    matcher = _object_matcher()

    matcher.apply(store, DEFAULT_REGISTRY.get("obj-dp"))

    assert source.query == "module=demand_planning"
    assert matcher.active(store.read()).view.id == "obj-dp"

    matcher.apply_all(store)
    assert source.query == ""
    assert matcher.active(store.read()).all_active is True
