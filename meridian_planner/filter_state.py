"""Filter state kept in the page query string.

The query text is the only place filter state lives. ``FilterState`` is an
immutable snapshot parsed from it, and every mutation writes a new canonical
query text back to the source.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Protocol
from urllib.parse import parse_qsl, urlencode

SORT_KEY = "sort"
ORDER_KEY = "order"
RESERVED_KEYS = frozenset({SORT_KEY, ORDER_KEY})


def parse_query(text: str) -> dict[str, str]:
    """Decode query text into a mapping; repeated keys keep the last value."""

    return dict(parse_qsl(text.lstrip("?"), keep_blank_values=True))


def encode_query(values: Mapping[str, str]) -> str:
    """Encode a mapping as query text with keys in sorted order."""

    return urlencode(sorted(values.items()))


@dataclass(frozen=True, slots=True, eq=False)
class FilterState(Mapping[str, str]):
    pairs: tuple[tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "pairs", tuple(sorted(dict(self.pairs).items())))

    @classmethod
    def from_query(cls, text: str) -> "FilterState":
        return cls(tuple(parse_query(text).items()))

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "FilterState":
        return cls(tuple(values.items()))

    def __getitem__(self, key: str) -> str:
        for item_key, value in self.pairs:
            if item_key == key:
                return value
        raise KeyError(key)

    def __iter__(self) -> Iterator[str]:
        return (key for key, _ in self.pairs)

    def __len__(self) -> int:
        return len(self.pairs)

    def __hash__(self) -> int:
        return hash(self.pairs)

    def to_query(self) -> str:
        return urlencode(self.pairs)

    @property
    def is_empty(self) -> bool:
        return not self.pairs

    @property
    def filters(self) -> dict[str, str]:
        """Pairs that narrow the result set, without sort keys."""
        return {key: value for key, value in self.pairs if key not in RESERVED_KEYS}

    @property
    def sort(self) -> str | None:
        return self.get(SORT_KEY)

    @property
    def order(self) -> str | None:
        return self.get(ORDER_KEY)

    def active_filter_count(self) -> int:
        return sum(1 for key in self if key not in RESERVED_KEYS)

    def with_filter(self, key: str, value: str | None) -> "FilterState":
        values = dict(self.pairs)
        if value is None or value == "":
            values.pop(key, None)
        else:
            values[key] = value
        return FilterState.from_mapping(values)


class QuerySource(Protocol):
    def read_query(self) -> str: ...

    def write_query(self, text: str) -> None: ...


class InMemoryQuerySource:
    """Query source holding the text in memory, for tests and scripts."""

    def __init__(self, query: str = ""):
        self.query = query

    def read_query(self) -> str:
        return self.query

    def write_query(self, text: str) -> None:
        self.query = text


class FilterStateStore:
    """Read and update filter state through a query source.

    Nothing is cached here: every read parses the source's current text.
    """

    def __init__(self, source: QuerySource):
        self.source = source

    def read(self) -> FilterState:
        return FilterState.from_query(self.source.read_query())

    def set(self, key: str, value: str | None) -> FilterState:
        state = self.read().with_filter(key, value)
        self.source.write_query(state.to_query())
        return state

    def replace(self, values: Mapping[str, str]) -> FilterState:
        state = FilterState.from_mapping(
            {key: value for key, value in values.items() if value}
        )
        self.source.write_query(state.to_query())
        return state

    def clear(self) -> FilterState:
        self.source.write_query("")
        return FilterState()

    def active_filter_count(self) -> int:
        return self.read().active_filter_count()
