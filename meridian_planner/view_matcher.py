"""Work out which saved view the current filter state corresponds to.

Views match on exact canonical query text. Comma-joined values such as
``status=open,in_progress,blocked`` are compared as plain strings, so the
same statuses listed in another order do not match.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

from .catalog import EntityDomain
from .filter_state import FilterState, FilterStateStore, encode_query
from .saved_views import SavedView, SavedViewRegistry

ALL_VIEW_ID = "all"
ALL_VIEW_LABEL = "All"


def canonical_encoding(values: Mapping[str, str]) -> str:
    return encode_query(values)


@dataclass(frozen=True, slots=True)
class ActiveView:
    all_active: bool
    view: SavedView | None = None

    @property
    def view_id(self) -> str | None:
        if self.all_active:
            return ALL_VIEW_ID
        return self.view.id if self.view else None


def match_view(state: Mapping[str, str] | str, views: Iterable[SavedView]) -> ActiveView:
    """Return the active view for ``state``; the first match in ``views`` wins."""

    if isinstance(state, str):
        state = FilterState.from_query(state)
    current = canonical_encoding(state)
    if not current:
        return ActiveView(all_active=True)

    for view in views:
        if canonical_encoding(view.filters) == current:
            return ActiveView(all_active=False, view=view)
    return ActiveView(all_active=False)


def view_href(base_path: str, filters: Mapping[str, str]) -> str:
    query = canonical_encoding(filters)
    return f"{base_path}?{query}" if query else base_path


@dataclass(frozen=True, slots=True)
class ViewChip:
    view_id: str
    label: str
    href: str
    is_active: bool


class ViewMatcher:
    """Saved views of one entity domain, bound to the list page path."""

    def __init__(self, registry: SavedViewRegistry, entity: EntityDomain | str, base_path: str):
        self.entity = EntityDomain(entity)
        self.base_path = base_path
        self.views = registry.for_entity(self.entity)

    def active(self, state: Mapping[str, str] | str) -> ActiveView:
        return match_view(state, self.views)

    def chips(self, state: Mapping[str, str] | str) -> tuple[ViewChip, ...]:
        active = self.active(state)
        chips = [
            ViewChip(
                view_id=ALL_VIEW_ID,
                label=ALL_VIEW_LABEL,
                href=self.base_path,
                is_active=active.all_active,
            )
        ]
        for view in self.views:
            chips.append(
                ViewChip(
                    view_id=view.id,
                    label=view.label,
                    href=view_href(self.base_path, view.filters),
                    is_active=active.view is view,
                )
            )
        return tuple(chips)

    def apply(self, store: FilterStateStore, view: SavedView) -> FilterState:
        """Replace the whole filter state with the view's filters."""
        return store.replace(view.filters)

    def apply_all(self, store: FilterStateStore) -> FilterState:
        return store.clear()
