"""Enumerations, display labels and sort options shared by the dashboard."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class EntityDomain(str, Enum):
    OBJECTS = "objects"
    ISSUES = "issues"


class ModuleType(str, Enum):
    DEMAND_PLANNING = "demand_planning"
    SUPPLY_PLANNING = "supply_planning"


class ObjectCategory(str, Enum):
    MASTER_DATA = "master_data"
    DRIVERS = "drivers"
    PRIORITY_1 = "priority_1"
    PRIORITY_2 = "priority_2"
    PRIORITY_3 = "priority_3"


MODULE_CATEGORIES: Mapping[ModuleType, tuple[ObjectCategory, ...]] = MappingProxyType(
    {
        ModuleType.DEMAND_PLANNING: (ObjectCategory.MASTER_DATA, ObjectCategory.DRIVERS),
        ModuleType.SUPPLY_PLANNING: (
            ObjectCategory.MASTER_DATA,
            ObjectCategory.PRIORITY_1,
            ObjectCategory.PRIORITY_2,
            ObjectCategory.PRIORITY_3,
        ),
    }
)

LIFECYCLE_STAGES: tuple[str, ...] = (
    "requirements",
    "mapping",
    "extraction",
    "ingestion",
    "transformation",
    "push_to_target",
    "validation",
    "signoff",
    "live",
)

MODULE_LABELS = {
    "demand_planning": "Demand Planning",
    "supply_planning": "Supply Planning",
}

CATEGORY_LABELS = {
    "master_data": "Master Data",
    "drivers": "Drivers",
    "priority_1": "Priority 1",
    "priority_2": "Priority 2",
    "priority_3": "Priority 3",
}

STAGE_LABELS = {
    "requirements": "Requirements",
    "mapping": "Mapping",
    "extraction": "Extraction",
    "ingestion": "Ingestion",
    "transformation": "Transformation",
    "push_to_target": "Push to Target",
    "validation": "Validation",
    "signoff": "Sign-off",
    "live": "Live",
}

STATUS_LABELS = {
    "on_track": "On Track",
    "at_risk": "At Risk",
    "blocked": "Blocked",
    "completed": "Completed",
    "archived": "Archived",
}

ISSUE_STATUS_LABELS = {
    "open": "Open",
    "in_progress": "In Progress",
    "blocked": "Blocked",
    "resolved": "Resolved",
    "closed": "Closed",
}

ISSUE_TYPE_LABELS = {
    "mapping": "Mapping",
    "data_quality": "Data Quality",
    "dependency": "Dependency",
    "signoff": "Sign-off",
    "technical": "Technical",
    "clarification": "Clarification",
    "other": "Other",
}

SOURCE_SYSTEM_LABELS = {
    "erp_primary": "ERP Primary",
    "manual_file": "Manual File",
    "external_1": "External 1",
    "external_2": "External 2",
    "data_lake": "Data Lake",
    "sub_system": "Sub-System",
    "other": "Other",
}

REGION_LABELS = {
    "region_eu": "EU",
    "region_na": "NA",
    "region_apac": "APAC",
    "region_latam": "LATAM",
    "region_mea": "MEA",
    "global": "Global",
}

FILTER_LABELS = {
    "module": "Module",
    "category": "Category",
    "status": "Status",
    "current_stage": "Stage",
    "source_system": "Source",
    "region": "Region",
    "issue_type": "Type",
    "lifecycle_stage": "Stage",
    "search": "Search",
}

# Filter dropdowns per list page, in display order.
OBJECT_FILTER_OPTIONS: Mapping[str, Mapping[str, str]] = MappingProxyType(
    {
        "module": MODULE_LABELS,
        "category": CATEGORY_LABELS,
        "status": {k: v for k, v in STATUS_LABELS.items() if k != "archived"},
        "current_stage": STAGE_LABELS,
        "source_system": SOURCE_SYSTEM_LABELS,
        "region": REGION_LABELS,
    }
)

ISSUE_FILTER_OPTIONS: Mapping[str, Mapping[str, str]] = MappingProxyType(
    {
        "status": ISSUE_STATUS_LABELS,
        "issue_type": ISSUE_TYPE_LABELS,
        "lifecycle_stage": STAGE_LABELS,
        "module": MODULE_LABELS,
    }
)


def filter_options(entity: EntityDomain | str) -> Mapping[str, Mapping[str, str]]:
    if EntityDomain(entity) is EntityDomain.ISSUES:
        return ISSUE_FILTER_OPTIONS
    return OBJECT_FILTER_OPTIONS


@dataclass(frozen=True, slots=True)
class SortOption:
    field: str
    order: str
    label: str

    @property
    def encoded(self) -> str:
        return encode_sort(self.field, self.order)


SORT_ORDERS = ("asc", "desc")

SORT_OPTIONS: Mapping[EntityDomain, tuple[SortOption, ...]] = MappingProxyType(
    {
        EntityDomain.OBJECTS: (
            SortOption("created_at", "desc", "Newest first"),
            SortOption("created_at", "asc", "Oldest first"),
            SortOption("aging", "desc", "Longest in stage"),
            SortOption("name", "asc", "Name A-Z"),
            SortOption("name", "desc", "Name Z-A"),
        ),
        EntityDomain.ISSUES: (
            SortOption("created_at", "asc", "Oldest first"),
            SortOption("created_at", "desc", "Newest first"),
            SortOption("title", "asc", "Title A-Z"),
            SortOption("status", "asc", "Status"),
        ),
    }
)


def encode_sort(field: str, order: str) -> str:
    return f"{field}:{order}"


def decode_sort(encoded: str) -> tuple[str, str] | None:
    """Split a ``field:order`` widget value; ``None`` when it is not one."""

    field, sep, order = encoded.partition(":")
    if not sep or not field or order not in SORT_ORDERS:
        return None
    return field, order
