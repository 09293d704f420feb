"""Domain models for the document tree.

Nodes are immutable. Positions follow a single global addressing scheme: the
root's content starts at 0, a container at ``pos`` has its content starting at
``pos + 1`` and occupies ``content_size + 2`` positions (one for each
boundary), and a text leaf occupies one position per character.
"""

import dataclasses
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any

from term_highlight.config import TEXT_BLOCK_TYPES

TEXT_TYPE = "text"

# Receives (node, absolute start position); returning False skips the node's children.
Visitor = Callable[["Node", int], bool | None]


@dataclass(frozen=True)
class Node:
    """A text leaf or a container in a document tree."""

    type: str
    text: str | None = None
    children: tuple["Node", ...] = ()
    attrs: Mapping[str, Any] = field(default_factory=dict)
    marks: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.type == TEXT_TYPE:
            if not self.text:
                msg = "Text nodes must carry non-empty text"
                raise ValueError(msg)
            if self.children:
                msg = "Text nodes cannot have children"
                raise ValueError(msg)
        elif self.text is not None:
            msg = f"Only text nodes carry text, got {self.type!r} with text"
            raise ValueError(msg)

    @classmethod
    def text_leaf(cls, text: str, *marks: str) -> "Node":
        return cls(type=TEXT_TYPE, text=text, marks=tuple(marks))

    @classmethod
    def element(cls, type_: str, *children: "Node", **attrs: Any) -> "Node":
        return cls(type=type_, children=tuple(children), attrs=dict(attrs))

    @property
    def is_text(self) -> bool:
        return self.type == TEXT_TYPE

    @property
    def is_text_block(self) -> bool:
        """True for containers whose direct content is exclusively inline text."""
        if self.is_text:
            return False
        if self.type in TEXT_BLOCK_TYPES:
            return all(child.is_text for child in self.children)
        return bool(self.children) and all(child.is_text for child in self.children)

    @cached_property
    def content_size(self) -> int:
        return sum(child.node_size for child in self.children)

    @property
    def node_size(self) -> int:
        if self.is_text:
            return len(self.text or "")
        return self.content_size + 2

    @property
    def text_content(self) -> str:
        if self.is_text:
            return self.text or ""
        return "".join(child.text_content for child in self.children)

    def nodes_between(self, start: int, end: int, visit: Visitor, offset: int = 0) -> None:
        """Call ``visit`` for every descendant overlapping ``[start, end)`` in document order.

        ``start``/``end`` are relative to this node's content; ``offset`` is the
        absolute position of that content.
        """
        pos = 0
        for child in self.children:
            if pos >= end:
                break
            child_end = pos + child.node_size
            if child_end > start:
                descend = visit(child, offset + pos)
                if descend is not False and child.children:
                    inner = pos + 1
                    child.nodes_between(
                        max(0, start - inner),
                        min(child.content_size, end - inner),
                        visit,
                        offset + inner,
                    )
            pos = child_end

    def descendants(self, visit: Visitor) -> None:
        self.nodes_between(0, self.content_size, visit)

    def resolve_ancestors(self, pos: int) -> list["Ancestor"]:
        """Return the chain of containers enclosing ``pos``, root first.

        A container encloses ``pos`` when ``pos`` lies strictly between its
        opening and closing boundaries. The root is reported with ``pos == -1``
        so that ``content_start`` is 0 for every entry.
        """
        if not 0 <= pos <= self.content_size:
            msg = f"Position {pos} outside of document (0..{self.content_size})"
            raise ValueError(msg)

        chain = [Ancestor(node=self, pos=-1, index=0)]
        node, offset = self, 0
        while True:
            for index, child in enumerate(node.children):
                child_end = offset + child.node_size
                if not child.is_text and offset < pos < child_end:
                    chain.append(Ancestor(node=child, pos=offset, index=index))
                    node, offset = child, offset + 1
                    break
                offset = child_end
            else:
                return chain

    def with_children(self, children: tuple["Node", ...]) -> "Node":
        return dataclasses.replace(self, children=children)


@dataclass(frozen=True)
class Ancestor:
    """A container on the path from the root to a position."""

    node: Node
    pos: int
    index: int

    @property
    def content_start(self) -> int:
        return self.pos + 1

    @property
    def end(self) -> int:
        return self.pos + self.node.node_size
