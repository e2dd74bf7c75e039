"""Create objects under freshly allocated codes.

``compute_next_code`` only sees a snapshot of existing names, so two callers
can pick the same code. The store rejects the second commit and this module
re-reads the roster and tries again, a bounded number of times.
"""

from __future__ import annotations

import logging
from typing import Protocol, TypeVar

from .catalog import MODULE_CATEGORIES
from .errors import AllocationExhaustedError, CodeConflictError, UnknownClassificationError
from .object_codes import compute_next_code
from .records import ObjectDraft

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 5

RecordT = TypeVar("RecordT", covariant=True)


class CodeStore(Protocol[RecordT]):
    def object_names(self) -> list[str]: ...

    def insert_object(self, draft: ObjectDraft, *, name: str) -> RecordT: ...


def check_pairing(draft: ObjectDraft) -> None:
    if draft.category not in MODULE_CATEGORIES[draft.module]:
        raise UnknownClassificationError(
            f"category for module {draft.module.value}", draft.category.value
        )


def suggest_code(store: CodeStore, draft: ObjectDraft) -> str:
    """Code the next object would get if nobody else commits first."""
    return compute_next_code(store.object_names(), draft.module, draft.category)


def allocate_object(
    store: CodeStore[RecordT],
    draft: ObjectDraft,
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> RecordT:
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")
    check_pairing(draft)

    attempted: list[str] = []
    for attempt in range(1, max_attempts + 1):
        code = compute_next_code(store.object_names(), draft.module, draft.category)
        attempted.append(code)
        try:
            return store.insert_object(draft, name=code)
        except CodeConflictError:
            logger.warning(
                "Object code %s was taken before commit (attempt %d of %d); retrying",
                code,
                attempt,
                max_attempts,
            )

    logger.error("Could not allocate an object code after %d attempts", max_attempts)
    raise AllocationExhaustedError(attempted)
