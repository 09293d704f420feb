"""Locate the application-designated selected container(s) in a region."""

from term_highlight.config import IDENTITY_ATTR
from term_highlight.models.node import Node
from term_highlight.models.search import Region, SelectedSpans
from term_highlight.protocols import DocumentProtocol


def locate_selected(
    doc: DocumentProtocol,
    region: Region,
    selected_id: str | None,
    *,
    identity_attr: str = IDENTITY_ATTR,
) -> SelectedSpans:
    """Record the span of every container overlapping ``region`` whose identity is ``selected_id``.

    Containers enclosing the region are visited too, so a region inside the
    selected container still reports it. Several containers may carry the
    same id; all of them are kept.
    """
    if not selected_id:
        return SelectedSpans()

    spans: list[Region] = []

    def visit(node: Node, pos: int) -> bool:
        if node.is_text:
            return False
        if node.attrs.get(identity_attr) == selected_id:
            spans.append(Region(pos, pos + node.node_size))
        return True

    doc.nodes_between(region.start, region.end, visit)
    return SelectedSpans(spans=tuple(spans))
