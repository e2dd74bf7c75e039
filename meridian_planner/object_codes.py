"""Human-readable object codes of the form ``OBJ-DP-MD-001``."""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping

from .catalog import ModuleType, ObjectCategory
from .errors import UnknownClassificationError

CODE_PREFIX = "OBJ"
CODE_MIN_WIDTH = 3

MODULE_CODES: Mapping[ModuleType, str] = MappingProxyType(
    {
        ModuleType.DEMAND_PLANNING: "DP",
        ModuleType.SUPPLY_PLANNING: "SP",
    }
)

CATEGORY_CODES: Mapping[ObjectCategory, str] = MappingProxyType(
    {
        ObjectCategory.MASTER_DATA: "MD",
        ObjectCategory.DRIVERS: "DR",
        ObjectCategory.PRIORITY_1: "P1",
        ObjectCategory.PRIORITY_2: "P2",
        ObjectCategory.PRIORITY_3: "P3",
    }
)

_SEQUENCE_RE = re.compile(r"[0-9]+")


def as_module(value: ModuleType | str) -> ModuleType:
    try:
        return ModuleType(value)
    except ValueError:
        raise UnknownClassificationError("module", value) from None


def as_category(value: ObjectCategory | str) -> ObjectCategory:
    try:
        return ObjectCategory(value)
    except ValueError:
        raise UnknownClassificationError("category", value) from None


def code_prefix(module: ModuleType | str, category: ObjectCategory | str) -> str:
    module_code = MODULE_CODES[as_module(module)]
    category_code = CATEGORY_CODES[as_category(category)]
    return f"{CODE_PREFIX}-{module_code}-{category_code}-"


def _parse_sequence(suffix: str) -> int | None:
    if not _SEQUENCE_RE.fullmatch(suffix):
        return None
    return int(suffix)


def format_code(prefix: str, sequence: int) -> str:
    return f"{prefix}{sequence:0{CODE_MIN_WIDTH}d}"


def compute_next_code(
    existing_names: Iterable[str],
    module: ModuleType | str,
    category: ObjectCategory | str,
) -> str:
    """Return the next free code for a module/category pair.

    Only names carrying this pair's prefix count. Entries whose suffix is not
    a plain decimal number are skipped, and gaps are never reused: the result
    is always one past the highest sequence seen.
    """

    prefix = code_prefix(module, category)
    sequences: list[int] = []
    for name in existing_names:
        if not name.startswith(prefix):
            continue
        sequence = _parse_sequence(name[len(prefix):])
        if sequence is None:
            continue
        sequences.append(sequence)

    next_sequence = max(sequences) + 1 if sequences else 1
    return format_code(prefix, next_sequence)


@dataclass(frozen=True, slots=True)
class ObjectCode:
    module: ModuleType
    category: ObjectCategory
    sequence: int

    def __str__(self) -> str:
        return format_code(code_prefix(self.module, self.category), self.sequence)


_MODULE_BY_CODE = {code: module for module, code in MODULE_CODES.items()}
_CATEGORY_BY_CODE = {code: category for category, code in CATEGORY_CODES.items()}


def parse_code(code: str) -> ObjectCode | None:
    """Split a code into its parts, or return ``None`` for other text."""

    parts = code.split("-")
    if len(parts) != 4 or parts[0] != CODE_PREFIX:
        return None
    module = _MODULE_BY_CODE.get(parts[1])
    category = _CATEGORY_BY_CODE.get(parts[2])
    sequence = _parse_sequence(parts[3])
    if module is None or category is None or sequence is None:
        return None
    return ObjectCode(module=module, category=category, sequence=sequence)
