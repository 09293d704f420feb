"""Domain models for searching and highlighting."""

from collections.abc import Callable
from dataclasses import dataclass, field

from term_highlight.config import (
    DEFAULT_HIGHLIGHT_CLASS,
    DEFAULT_LIVE_UPDATES,
    GROUP_ANCESTOR_DEPTH,
    LIST_ITEM_TYPES,
)
from term_highlight.models.node import Node

GroupKey = tuple[str, int]
GroupPredicate = Callable[[Node], bool]


@dataclass(frozen=True, order=True)
class Region:
    """A half-open span ``[start, end)`` of document positions."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.start > self.end:
            msg = f"Invalid region: start={self.start}, end={self.end}"
            raise ValueError(msg)

    def contains(self, start: int, end: int) -> bool:
        return self.start <= start and end <= self.end

    def overlaps(self, start: int, end: int) -> bool:
        return start < self.end and end > self.start


@dataclass(frozen=True, order=True)
class Annotation:
    """A single highlighted match."""

    start: int
    end: int
    style_class: str = ""


@dataclass(frozen=True)
class TextRun:
    """Text of one leaf with its absolute start and grouping key."""

    text: str
    start: int
    group_key: GroupKey

    @property
    def end(self) -> int:
        return self.start + len(self.text)


@dataclass(frozen=True)
class SelectedSpans:
    """Spans of the containers designated as selected."""

    spans: tuple[Region, ...] = ()

    @property
    def positions(self) -> frozenset[int]:
        return frozenset(span.start for span in self.spans)

    @property
    def size(self) -> int:
        return max((span.end - span.start for span in self.spans), default=0)

    def contains(self, start: int, end: int) -> bool:
        return any(span.contains(start, end) for span in self.spans)

    def __bool__(self) -> bool:
        return bool(self.spans)


@dataclass(frozen=True)
class SearchConfig:
    """Search term plus matching and styling options."""

    search_term: str | None = None
    match_whole_words_only: bool = False
    case_sensitive: bool = False
    live_updates: bool = DEFAULT_LIVE_UPDATES
    highlight_class: str | None = DEFAULT_HIGHLIGHT_CLASS
    individual_highlight_class: str | None = None
    selected_container_id: str | None = None
    group_types: frozenset[str] = field(default=LIST_ITEM_TYPES)
    group_depth: int = GROUP_ANCESTOR_DEPTH

    @property
    def has_term(self) -> bool:
        return bool(self.search_term and self.search_term.strip())

    def is_group(self, node: Node) -> bool:
        """Grouping predicate built from ``group_types``."""
        return not node.is_text and node.type in self.group_types
