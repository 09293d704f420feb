"""Immutable, ordered collection of annotations over a document."""

import bisect
from collections.abc import Iterable, Iterator

from term_highlight.models.search import Annotation
from term_highlight.protocols import DocumentProtocol, PositionMapProtocol


class AnnotationSet:
    """Annotations sorted by position; every operation returns a new set."""

    __slots__ = ("_items", "_starts")

    def __init__(self, annotations: Iterable[Annotation] = ()) -> None:
        self._items: tuple[Annotation, ...] = tuple(sorted(set(annotations)))
        self._starts: tuple[int, ...] = tuple(a.start for a in self._items)

    @classmethod
    def empty(cls) -> "AnnotationSet":
        return cls()

    @classmethod
    def create(cls, doc: DocumentProtocol, annotations: Iterable[Annotation]) -> "AnnotationSet":
        """Build a set, dropping annotations that are empty or fall outside ``doc``."""
        size = doc.content_size
        return cls(a for a in annotations if 0 <= a.start < a.end <= size)

    def find(self, start: int | None = None, end: int | None = None) -> list[Annotation]:
        """Return annotations overlapping ``[start, end)``; all of them when unbounded."""
        lo = 0 if start is None else start
        if end is None:
            return [a for a in self._items if a.end > lo]
        # Anything starting at or after ``end`` cannot overlap.
        stop = bisect.bisect_left(self._starts, end)
        return [a for a in self._items[:stop] if a.end > lo]

    def remove(self, annotations: Iterable[Annotation]) -> "AnnotationSet":
        dropped = set(annotations)
        if not dropped:
            return self
        return AnnotationSet(a for a in self._items if a not in dropped)

    def add(self, doc: DocumentProtocol, annotations: Iterable[Annotation]) -> "AnnotationSet":
        added = AnnotationSet.create(doc, annotations)
        if not added:
            return self
        return AnnotationSet((*self._items, *added))

    def map_through(self, mapping: PositionMapProtocol, doc: DocumentProtocol) -> "AnnotationSet":
        """Re-address every annotation through ``mapping``.

        Starts stick to content after them and ends to content before them, so
        text typed at either edge is not absorbed; annotations whose content
        was deleted collapse and are dropped.
        """
        mapped = []
        for a in self._items:
            start = mapping.map(a.start, 1)
            end = mapping.map(a.end, -1)
            if start < end:
                mapped.append(Annotation(start=start, end=end, style_class=a.style_class))
        return AnnotationSet.create(doc, mapped)

    def __iter__(self) -> Iterator[Annotation]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AnnotationSet):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f"AnnotationSet({list(self._items)!r})"
