from pathlib import Path

import pytest

from meridian_planner import (
    AllocationExhaustedError,
    CodeConflictError,
    ObjectDraft,
    ObjectStore,
    UnknownClassificationError,
    allocate_object,
    compute_next_code,
    suggest_code,
)


def _store(tmp_path: Path) -> ObjectStore:
    store = ObjectStore(tmp_path / "planner.db")
    store.initialize()
    return store


def _draft(module="demand_planning", category="master_data") -> ObjectDraft:
    return ObjectDraft(module=module, category=category)


class StaleSnapshotStore:
    """Wraps a store and hands out one outdated roster before the real one."""

    def __init__(self, inner: ObjectStore, stale_names: list[str], stale_reads: int = 1):
        self.inner = inner
        self.stale_names = stale_names
        self.stale_reads = stale_reads
        self.reads = 0

    def object_names(self) -> list[str]:
        self.reads += 1
        if self.reads <= self.stale_reads:
            return list(self.stale_names)
        return self.inner.object_names()

    def insert_object(self, draft, *, name):
        return self.inner.insert_object(draft, name=name)


def test_allocates_sequential_codes(tmp_path: Path):
    store = _store(tmp_path)

    first = allocate_object(store, _draft())
    second = allocate_object(store, _draft())
    other = allocate_object(store, _draft("supply_planning", "priority_1"))

    assert first.name == "OBJ-DP-MD-001"
    assert second.name == "OBJ-DP-MD-002"
    assert other.name == "OBJ-SP-P1-001"


def test_concurrent_callers_with_same_snapshot_cannot_both_commit(tmp_path: Path):
    store = _store(tmp_path)
    snapshot = store.object_names()

    code_a = compute_next_code(snapshot, "demand_planning", "drivers")
    code_b = compute_next_code(snapshot, "demand_planning", "drivers")
    assert code_a == code_b == "OBJ-DP-DR-001"

    store.insert_object(_draft(category="drivers"), name=code_a)
    with pytest.raises(CodeConflictError) as excinfo:
        store.insert_object(_draft(category="drivers"), name=code_b)
    assert excinfo.value.code == "OBJ-DP-DR-001"

    retried = allocate_object(store, _draft(category="drivers"))
    assert retried.name == "OBJ-DP-DR-002"
    assert store.object_names() == ["OBJ-DP-DR-001", "OBJ-DP-DR-002"]


def test_conflict_triggers_recompute_from_fresh_snapshot(tmp_path: Path):
    inner = _store(tmp_path)
    inner.insert_object(_draft(), name="OBJ-DP-MD-001")
    stale = StaleSnapshotStore(inner, stale_names=[])

    record = allocate_object(stale, _draft())

    assert record.name == "OBJ-DP-MD-002"
    assert stale.reads == 2


def test_gives_up_after_max_attempts(tmp_path: Path):
    inner = _store(tmp_path)
    inner.insert_object(_draft(), name="OBJ-DP-MD-001")
    stale = StaleSnapshotStore(inner, stale_names=[], stale_reads=10)

    with pytest.raises(AllocationExhaustedError) as excinfo:
        allocate_object(stale, _draft(), max_attempts=3)

    assert excinfo.value.attempted == ("OBJ-DP-MD-001",) * 3
    assert inner.object_names() == ["OBJ-DP-MD-001"]


def test_category_must_belong_to_module(tmp_path: Path):
    store = _store(tmp_path)

    with pytest.raises(UnknownClassificationError):
        allocate_object(store, _draft("demand_planning", "priority_1"))
    assert store.object_names() == []


def test_unknown_module_rejected_when_building_draft():
    with pytest.raises(UnknownClassificationError):
        _draft("inventory_planning", "master_data")


def test_invalid_attempt_budget(tmp_path: Path):
    with pytest.raises(ValueError):
        allocate_object(_store(tmp_path), _draft(), max_attempts=0)


def test_suggest_code_does_not_commit(tmp_path: Path):
    store = _store(tmp_path)
    store.insert_object(_draft(), name="OBJ-DP-MD-007")

    assert suggest_code(store, _draft()) == "OBJ-DP-MD-008"
    assert store.object_names() == ["OBJ-DP-MD-007"]
