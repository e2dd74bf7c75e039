"""Saved views: named filter presets for the object and issue lists."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from .catalog import EntityDomain
from .errors import DuplicateViewError
from .filter_state import FilterState


@dataclass(frozen=True, slots=True)
class SavedView:
    id: str
    label: str
    entity: EntityDomain
    filters: FilterState

    @classmethod
    def define(
        cls, view_id: str, label: str, entity: EntityDomain, filters: Mapping[str, str]
    ) -> "SavedView":
        return cls(
            id=view_id,
            label=label,
            entity=EntityDomain(entity),
            filters=FilterState.from_mapping(filters),
        )


OBJECT_VIEWS: tuple[SavedView, ...] = (
    SavedView.define("obj-blocked", "Blocked", EntityDomain.OBJECTS, {"status": "blocked"}),
    SavedView.define("obj-at-risk", "At Risk", EntityDomain.OBJECTS, {"status": "at_risk"}),
    SavedView.define(
        "obj-stale", "Stale (>15d)", EntityDomain.OBJECTS, {"sort": "aging", "order": "desc"}
    ),
    SavedView.define("obj-dp", "Demand Planning", EntityDomain.OBJECTS, {"module": "demand_planning"}),
    SavedView.define("obj-sp", "Supply Planning", EntityDomain.OBJECTS, {"module": "supply_planning"}),
)

ISSUE_VIEWS: tuple[SavedView, ...] = (
    SavedView.define(
        "iss-open", "All Open", EntityDomain.ISSUES, {"status": "open,in_progress,blocked"}
    ),
    SavedView.define("iss-blocked", "Blocked", EntityDomain.ISSUES, {"status": "blocked"}),
    SavedView.define("iss-deps", "Dependencies", EntityDomain.ISSUES, {"issue_type": "dependency"}),
)


class SavedViewRegistry:
    """Fixed catalog of saved views, kept in definition order."""

    def __init__(self, views: Iterable[SavedView]):
        ordered = tuple(views)
        by_id: dict[str, SavedView] = {}
        for view in ordered:
            if view.id in by_id:
                raise DuplicateViewError(view.id)
            by_id[view.id] = view

        self._views = ordered
        self._by_id = MappingProxyType(by_id)

    def __iter__(self) -> Iterator[SavedView]:
        return iter(self._views)

    def __len__(self) -> int:
        return len(self._views)

    def __contains__(self, view_id: object) -> bool:
        return view_id in self._by_id

    def get(self, view_id: str) -> SavedView:
        return self._by_id[view_id]

    def find(self, view_id: str) -> SavedView | None:
        return self._by_id.get(view_id)

    def for_entity(self, entity: EntityDomain | str) -> tuple[SavedView, ...]:
        domain = EntityDomain(entity)
        return tuple(view for view in self._views if view.entity is domain)


DEFAULT_REGISTRY = SavedViewRegistry(OBJECT_VIEWS + ISSUE_VIEWS)
