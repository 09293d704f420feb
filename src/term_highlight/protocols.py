"""Protocols for the collaborators the highlighting engine consumes."""

from collections.abc import Callable, Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

from term_highlight.models.node import Ancestor, Visitor

# Receives (old_start, old_end, new_start, new_end) for every changed span.
SpanCallback = Callable[[int, int, int, int], None]


@runtime_checkable
class DocumentProtocol(Protocol):
    """Protocol for document trees the engine scans."""

    @property
    def type(self) -> str: ...

    @property
    def text(self) -> str | None: ...

    @property
    def children(self) -> Sequence["DocumentProtocol"]: ...

    @property
    def is_text(self) -> bool: ...

    @property
    def is_text_block(self) -> bool: ...

    @property
    def attrs(self) -> Mapping[str, Any]: ...

    @property
    def content_size(self) -> int: ...

    @property
    def node_size(self) -> int: ...

    def nodes_between(self, start: int, end: int, visit: Visitor, offset: int = 0) -> None:
        """Visit descendants overlapping ``[start, end)``; a False return prunes descent."""
        ...

    def resolve_ancestors(self, pos: int) -> list[Ancestor]:
        """Return the containers enclosing ``pos``, root first."""
        ...


@runtime_checkable
class PositionMapProtocol(Protocol):
    """Protocol for elementary position maps (one per edit step)."""

    def map(self, pos: int, assoc: int = 1) -> int:
        """Map a pre-step position to its post-step position."""
        ...

    def for_each(self, callback: SpanCallback) -> None:
        """Report every changed span as (old_start, old_end, new_start, new_end)."""
        ...

    def invert(self) -> "PositionMapProtocol":
        """Return the map translating post-step positions back."""
        ...


@runtime_checkable
class EditProtocol(Protocol):
    """Protocol for edit transactions handed to the engine."""

    @property
    def doc(self) -> DocumentProtocol:
        """The post-edit document."""
        ...

    @property
    def maps(self) -> Sequence[PositionMapProtocol]:
        """Elementary position maps, one per step, in application order."""
        ...

    @property
    def mapping(self) -> PositionMapProtocol:
        """All steps composed into one map."""
        ...

    @property
    def doc_changed(self) -> bool: ...
