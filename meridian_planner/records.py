from __future__ import annotations

from dataclasses import dataclass

from .catalog import ModuleType, ObjectCategory
from .object_codes import as_category, as_module


@dataclass(frozen=True, slots=True)
class ObjectDraft:
    """Fields of a new object; its name is assigned on commit."""

    module: ModuleType
    category: ObjectCategory
    region: str = "region_eu"
    source_system: str = "erp_primary"
    current_stage: str = "requirements"
    status: str = "on_track"
    description: str | None = None
    owner_alias: str | None = None
    team_alias: str | None = None
    notes: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "module", as_module(self.module))
        object.__setattr__(self, "category", as_category(self.category))


@dataclass(frozen=True, slots=True)
class ObjectRecord:
    id: int
    name: str
    module: str
    category: str
    region: str
    source_system: str
    current_stage: str
    status: str
    description: str | None
    owner_alias: str | None
    team_alias: str | None
    notes: str | None
    is_archived: bool
    stage_entered_at: str
    created_at: str
    updated_at: str


@dataclass(frozen=True, slots=True)
class IssueRecord:
    id: int
    object_id: int
    object_name: str
    object_module: str
    title: str
    description: str | None
    issue_type: str
    lifecycle_stage: str
    status: str
    owner_alias: str | None
    is_archived: bool
    created_at: str
    updated_at: str
