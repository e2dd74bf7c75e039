from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from .catalog import (
    FILTER_LABELS,
    ISSUE_STATUS_LABELS,
    EntityDomain,
    filter_options,
)
from .filter_state import RESERVED_KEYS

HIDDEN_CHIP_KEYS = RESERVED_KEYS | {"is_archived"}


@dataclass(frozen=True, slots=True)
class FilterChip:
    key: str
    label: str
    value_label: str


def _value_labels(entity: EntityDomain) -> dict[str, Mapping[str, str]]:
    labels = dict(filter_options(entity))
    if entity is EntityDomain.ISSUES:
        labels["status"] = ISSUE_STATUS_LABELS
    return labels


def describe_active_filters(
    filters: Mapping[str, str], entity: EntityDomain | str
) -> tuple[FilterChip, ...]:
    """Label each active filter for display, one chip per key."""

    domain = EntityDomain(entity)
    value_labels = _value_labels(domain)
    chips: list[FilterChip] = []

    for key, value in filters.items():
        if not value or key in HIDDEN_CHIP_KEYS:
            continue
        if key == "search":
            value_label = f'"{value}"'
        else:
            known = value_labels.get(key, {})
            value_label = ", ".join(known.get(part, part) for part in value.split(","))
        chips.append(
            FilterChip(key=key, label=FILTER_LABELS.get(key, key), value_label=value_label)
        )
    return tuple(chips)
