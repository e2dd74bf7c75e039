from __future__ import annotations

from typing import Iterable


class PlannerError(Exception):
    """Base class for errors raised by the planner core."""


class UnknownClassificationError(PlannerError, ValueError):
    """A module type or object category outside the known catalog."""

    def __init__(self, kind: str, value: object):
        super().__init__(f"Unknown {kind}: {value!r}")
        self.kind = kind
        self.value = value


class CodeConflictError(PlannerError):
    """Raised when a generated object code is already taken at commit time."""

    def __init__(self, code: str):
        super().__init__(f"Object code already exists: {code}")
        self.code = code


class AllocationExhaustedError(PlannerError):
    def __init__(self, attempted: Iterable[str]):
        self.attempted = tuple(attempted)
        super().__init__(
            f"Gave up allocating an object code after {len(self.attempted)} conflicting attempt(s): "
            + ", ".join(self.attempted)
        )


class DuplicateViewError(PlannerError, ValueError):
    def __init__(self, view_id: str):
        super().__init__(f"Duplicate saved view id: {view_id}")
        self.view_id = view_id
