from __future__ import annotations

from datetime import datetime

from .catalog import LIFECYCLE_STAGES

OBJECT_AGING_THRESHOLDS = {"warning": 8, "critical": 15}
ISSUE_AGING_THRESHOLDS = {"warning": 4, "critical": 8}


def aging_days(since: str, *, now: datetime | None = None) -> int:
    """Whole days elapsed since an ISO timestamp."""
    start = datetime.fromisoformat(since)
    current = now or datetime.now()
    return (current - start).days


def aging_level(days: int, *, for_issue: bool = False) -> str:
    thresholds = ISSUE_AGING_THRESHOLDS if for_issue else OBJECT_AGING_THRESHOLDS
    if days >= thresholds["critical"]:
        return "critical"
    if days >= thresholds["warning"]:
        return "warning"
    return "normal"


def progress_percent(stage: str) -> int:
    if stage not in LIFECYCLE_STAGES:
        return 0
    return round((LIFECYCLE_STAGES.index(stage) + 1) / len(LIFECYCLE_STAGES) * 100)
