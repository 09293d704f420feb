"""Edit transactions: a post-edit document plus the position maps that produced it."""

from dataclasses import dataclass, field

from loguru import logger

from term_highlight.core.transform.mapping import Mapping, StepMap
from term_highlight.models.node import Ancestor, Node


@dataclass(frozen=True)
class Edit:
    """An immutable edit transaction.

    Build one with :meth:`begin` and chain steps; every step returns a new
    ``Edit`` whose ``doc`` is the document after all steps so far.
    """

    doc: Node
    mapping: Mapping = field(default_factory=Mapping)

    @classmethod
    def begin(cls, doc: Node) -> "Edit":
        return cls(doc=doc)

    @property
    def maps(self) -> tuple[StepMap, ...]:
        return self.mapping.maps

    @property
    def doc_changed(self) -> bool:
        return bool(self.mapping.maps)

    def replace_text(self, start: int, end: int, text: str) -> "Edit":
        """Replace ``[start, end)`` with ``text``; both ends must share one inline parent."""
        if start == end and not text:
            return self
        new_doc = replace_text(self.doc, start, end, text)
        step_map = StepMap.replace(start, end, len(text))
        logger.debug("Edit step {}: {}..{} -> {!r}", len(self.mapping) + 1, start, end, text)
        return Edit(doc=new_doc, mapping=self.mapping.appended(step_map))

    def insert_text(self, pos: int, text: str) -> "Edit":
        return self.replace_text(pos, pos, text)

    def delete(self, start: int, end: int) -> "Edit":
        return self.replace_text(start, end, "")


def _splice_leaves(leaves: tuple[Node, ...], start: int, end: int, text: str) -> tuple[Node, ...]:
    """Splice ``text`` over ``[start, end)`` of a run of text leaves (local offsets).

    Inserted text takes the marks of the leaf it continues (the one ending at
    or containing ``start``), or of the first leaf when inserting at offset 0.
    """
    pieces: list[tuple[str, tuple[str, ...]]] = []
    inserted = not text
    offset = 0
    for leaf in leaves:
        leaf_text = leaf.text or ""
        leaf_end = offset + len(leaf_text)
        before = leaf_text[: max(0, min(len(leaf_text), start - offset))]
        after = leaf_text[max(0, min(len(leaf_text), end - offset)) :]
        if before:
            pieces.append((before, leaf.marks))
        if not inserted and (offset < start <= leaf_end or start == 0):
            pieces.append((text, leaf.marks))
            inserted = True
        if after:
            pieces.append((after, leaf.marks))
        offset = leaf_end
    if not inserted:
        pieces.append((text, ()))

    merged: list[tuple[str, tuple[str, ...]]] = []
    for piece_text, marks in pieces:
        if merged and merged[-1][1] == marks:
            merged[-1] = (merged[-1][0] + piece_text, marks)
        else:
            merged.append((piece_text, marks))
    return tuple(Node.text_leaf(piece_text, *marks) for piece_text, marks in merged if piece_text)


def _rebuild(chain: list[Ancestor], replacement: Node) -> Node:
    """Replace the deepest node of ``chain`` and rebuild its ancestors."""
    node = replacement
    for parent, child in zip(reversed(chain[:-1]), reversed(chain[1:]), strict=True):
        children = list(parent.node.children)
        children[child.index] = node
        node = parent.node.with_children(tuple(children))
    return node


def replace_text(doc: Node, start: int, end: int, text: str) -> Node:
    """Return a copy of ``doc`` with ``[start, end)`` replaced by ``text``."""
    if not 0 <= start <= end <= doc.content_size:
        msg = f"Replacement range {start}..{end} outside of document (0..{doc.content_size})"
        raise ValueError(msg)

    chain = doc.resolve_ancestors(start)
    parent = chain[-1]
    content_end = parent.content_start + parent.node.content_size
    if end > content_end or doc.resolve_ancestors(end)[-1].pos != parent.pos:
        msg = f"Replacement range {start}..{end} crosses a container boundary"
        raise ValueError(msg)
    if not all(child.is_text for child in parent.node.children):
        msg = f"Position {start} is not inside inline content ({parent.node.type!r})"
        raise ValueError(msg)

    leaves = _splice_leaves(
        parent.node.children, start - parent.content_start, end - parent.content_start, text
    )
    return _rebuild(chain, parent.node.with_children(leaves))
