"""Core package for the Meridian planning dashboard."""

from .allocation import DEFAULT_MAX_ATTEMPTS, CodeStore, allocate_object, suggest_code
from .catalog import (
    MODULE_CATEGORIES,
    SORT_OPTIONS,
    EntityDomain,
    ModuleType,
    ObjectCategory,
    SortOption,
    decode_sort,
    encode_sort,
)
from .errors import (
    AllocationExhaustedError,
    CodeConflictError,
    DuplicateViewError,
    PlannerError,
    UnknownClassificationError,
)
from .filter_labels import FilterChip, describe_active_filters
from .filter_state import (
    RESERVED_KEYS,
    FilterState,
    FilterStateStore,
    InMemoryQuerySource,
    QuerySource,
    encode_query,
    parse_query,
)
from .object_codes import (
    CATEGORY_CODES,
    MODULE_CODES,
    ObjectCode,
    code_prefix,
    compute_next_code,
    parse_code,
)
from .object_store import ObjectStore
from .records import IssueRecord, ObjectDraft, ObjectRecord
from .saved_views import (
    DEFAULT_REGISTRY,
    ISSUE_VIEWS,
    OBJECT_VIEWS,
    SavedView,
    SavedViewRegistry,
)
from .view_matcher import ActiveView, ViewChip, ViewMatcher, canonical_encoding, match_view

__all__ = [
    "FilterState",
    "FilterStateStore",
    "QuerySource",
    "InMemoryQuerySource",
    "RESERVED_KEYS",
    "parse_query",
    "encode_query",
    "SavedView",
    "SavedViewRegistry",
    "OBJECT_VIEWS",
    "ISSUE_VIEWS",
    "DEFAULT_REGISTRY",
    "ActiveView",
    "ViewChip",
    "ViewMatcher",
    "match_view",
    "canonical_encoding",
    "MODULE_CODES",
    "CATEGORY_CODES",
    "ObjectCode",
    "code_prefix",
    "compute_next_code",
    "parse_code",
    "EntityDomain",
    "ModuleType",
    "ObjectCategory",
    "MODULE_CATEGORIES",
    "SortOption",
    "SORT_OPTIONS",
    "encode_sort",
    "decode_sort",
    "FilterChip",
    "describe_active_filters",
    "ObjectDraft",
    "ObjectRecord",
    "IssueRecord",
    "ObjectStore",
    "CodeStore",
    "allocate_object",
    "suggest_code",
    "DEFAULT_MAX_ATTEMPTS",
    "PlannerError",
    "UnknownClassificationError",
    "CodeConflictError",
    "AllocationExhaustedError",
    "DuplicateViewError",
]
